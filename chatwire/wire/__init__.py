"""
OpenAI-compatible wire shapes.

Pure, stateless pydantic models for what vendors send and receive, tolerant
of the documented quirks of each dialect. Use the ``validate_*`` helpers to
check a decoded JSON value without raising.
"""

from .content_parts import (
    ContentPart,
    FunctionCallBody,
    ImageContentPart,
    ImageUrl,
    PredictedFunctionCall,
    TextContentPart,
)
from .messages import AssistantMessage, SystemMessage, ToolMessage, UserMessage, WireMessage
from .tools import (
    FunctionDefinition,
    FunctionParameters,
    NamedFunction,
    NamedToolChoice,
    ToolChoice,
    ToolChoiceLiteral,
    ToolDefinition,
)
from .chat_request import ChatCompletionRequest, ResponseFormat, StreamOptions
from .usage import WireUsage
from .chat_response import ChatCompletionResponse, ResponseChoice
from .chunk import (
    ChunkChoice,
    ChunkDelta,
    ChunkError,
    ChunkFunctionDelta,
    ChunkResponse,
    ChunkToolCallDelta,
    StreamChunk,
)
from .models_list import ModelEntry, ModelsListResponse
from .validation import (
    ROOT_PATH,
    SchemaViolation,
    ValidationResult,
    validate_chunk,
    validate_models_list,
    validate_request,
    validate_response,
)

__all__ = [
    "ContentPart",
    "TextContentPart",
    "ImageContentPart",
    "ImageUrl",
    "FunctionCallBody",
    "PredictedFunctionCall",
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "WireMessage",
    "FunctionParameters",
    "FunctionDefinition",
    "ToolDefinition",
    "NamedFunction",
    "NamedToolChoice",
    "ToolChoiceLiteral",
    "ToolChoice",
    "StreamOptions",
    "ResponseFormat",
    "ChatCompletionRequest",
    "WireUsage",
    "ResponseChoice",
    "ChatCompletionResponse",
    "ChunkError",
    "ChunkFunctionDelta",
    "ChunkToolCallDelta",
    "ChunkDelta",
    "ChunkChoice",
    "ChunkResponse",
    "StreamChunk",
    "ModelEntry",
    "ModelsListResponse",
    "ROOT_PATH",
    "SchemaViolation",
    "ValidationResult",
    "validate_request",
    "validate_response",
    "validate_chunk",
    "validate_models_list",
]
