"""
Wire normalization core.

Exports the canonical models, the error taxonomy, the finish-reason mapper,
the streaming accumulator/assembler, the request normalizer and the
non-streaming completion assembler.

Import order matters: models and errors load before the streaming package,
which depends on ``chatwire.wire``, which in turn depends on the models.
"""

from .errors import TERMINAL_CODES, Diagnostic, ErrorCode, StreamError, WireError
from .models import (
    ChatCompletion,
    ChatRequest,
    ChoiceResult,
    ContentPart,
    ContentPartType,
    FinishReason,
    ImageDetail,
    Message,
    NamedToolChoice,
    Role,
    ToolCall,
    ToolChoice,
    ToolDefinition,
    Usage,
)
from .finish_reason import DEFAULT_FINISH_REASONS, FinishReasonMapper, merge_finish_reason
from .cancellation import CancellationToken, CancelledError
from .logging import LogContext, configure_logger, get_logger, log_event, normalized_log_event
from .streaming import (
    AccumulatorState,
    ChoiceFinalEvent,
    ChunkDeltaAccumulator,
    DeltaEvent,
    StreamAssembler,
    StreamEndEvent,
    StreamEvent,
    StreamMetrics,
    StreamOutcome,
    ToolCallFragment,
    accumulate_events,
    assemble_stream,
)
from .dialects import DEFAULT_PROFILES, DialectProfile, build_profiles
from .request_normalizer import RequestNormalizer, VendorRequest, normalize_request
from .nonstream import CompletionAssembler, assemble_completion

__all__ = [
    # Errors
    "ErrorCode",
    "TERMINAL_CODES",
    "WireError",
    "Diagnostic",
    "StreamError",
    # Models
    "FinishReason",
    "ContentPart",
    "ContentPartType",
    "ImageDetail",
    "ToolCall",
    "ToolDefinition",
    "NamedToolChoice",
    "ToolChoice",
    "Usage",
    "Message",
    "Role",
    "ChatRequest",
    "ChatCompletion",
    "ChoiceResult",
    # Finish reasons
    "DEFAULT_FINISH_REASONS",
    "FinishReasonMapper",
    "merge_finish_reason",
    # Cancellation
    "CancellationToken",
    "CancelledError",
    # Logging
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
    # Streaming
    "AccumulatorState",
    "ChunkDeltaAccumulator",
    "StreamAssembler",
    "StreamMetrics",
    "StreamOutcome",
    "ToolCallFragment",
    "DeltaEvent",
    "ChoiceFinalEvent",
    "StreamEndEvent",
    "StreamEvent",
    "accumulate_events",
    "assemble_stream",
    # Requests
    "DialectProfile",
    "DEFAULT_PROFILES",
    "build_profiles",
    "RequestNormalizer",
    "VendorRequest",
    "normalize_request",
    # Non-streaming
    "CompletionAssembler",
    "assemble_completion",
]
