"""chatwire package

Normalization of OpenAI-compatible chat completion traffic.

Purpose:
    Vendors that claim OpenAI compatibility (Azure, OpenRouter, Mistral,
    TogetherAI, Deepseek, Perplexity, LocalAI, ...) each deviate from the
    nominal wire format in small ways. This package validates their requests,
    responses and streaming chunks with quirk-tolerant schemas, folds streamed
    deltas into complete assistant messages, maps finish reasons onto one
    canonical set, and shapes canonical requests for each dialect.

Public API (re-exported):
    - Version: ``__version__``
    - Errors: :class:`WireError`, :class:`ErrorCode`
    - Models: :class:`ChatRequest`, :class:`Message`, :class:`ToolCall`,
      :class:`ChatCompletion`, :class:`FinishReason`, ...
    - Streaming: :class:`StreamAssembler`, :func:`accumulate_events`
    - Requests: :class:`RequestNormalizer`
    - Responses: :func:`assemble_completion`
    - Wire validation: ``chatwire.wire`` (``validate_chunk`` and friends)
    - Catalog: ``chatwire.catalog`` (``load_model_catalog``)

Transport (HTTP, SSE framing, retries) is the caller's concern.
"""

from .base import (
    CancellationToken,
    ChatCompletion,
    ChatRequest,
    ChoiceFinalEvent,
    ChoiceResult,
    ChunkDeltaAccumulator,
    CompletionAssembler,
    ContentPart,
    DeltaEvent,
    Diagnostic,
    DialectProfile,
    ErrorCode,
    FinishReason,
    FinishReasonMapper,
    Message,
    NamedToolChoice,
    RequestNormalizer,
    StreamAssembler,
    StreamEndEvent,
    StreamError,
    StreamOutcome,
    ToolCall,
    ToolDefinition,
    Usage,
    VendorRequest,
    WireError,
    accumulate_events,
    assemble_completion,
    assemble_stream,
    normalize_request,
)
from .wire import validate_chunk, validate_models_list, validate_request, validate_response
from .catalog import ModelCatalog, ModelDescription, load_model_catalog

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ErrorCode",
    "WireError",
    "Diagnostic",
    "StreamError",
    "FinishReason",
    "ContentPart",
    "ToolCall",
    "ToolDefinition",
    "NamedToolChoice",
    "Usage",
    "Message",
    "ChatRequest",
    "ChatCompletion",
    "ChoiceResult",
    "FinishReasonMapper",
    "CancellationToken",
    "ChunkDeltaAccumulator",
    "StreamAssembler",
    "StreamOutcome",
    "DeltaEvent",
    "ChoiceFinalEvent",
    "StreamEndEvent",
    "accumulate_events",
    "assemble_stream",
    "DialectProfile",
    "RequestNormalizer",
    "VendorRequest",
    "normalize_request",
    "CompletionAssembler",
    "assemble_completion",
    "validate_request",
    "validate_response",
    "validate_chunk",
    "validate_models_list",
    "ModelCatalog",
    "ModelDescription",
    "load_model_catalog",
]
