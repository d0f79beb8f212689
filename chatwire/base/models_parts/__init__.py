"""Models parts package public surface.

Re-exports individual canonical models so callers can import from
``chatwire.base.models_parts`` if needed, while ``chatwire.base.models``
remains the primary stable import path.
"""

from .finish_reason import FinishReason
from .content_part import ContentPart, ContentPartType, ImageDetail
from .tool_call import ToolCall
from .tool_definition import NamedToolChoice, ToolChoice, ToolChoiceMode, ToolDefinition
from .usage import Usage
from .message import Message, MessageContent, Role
from .chat_request import ChatRequest, ResponseFormat
from .chat_completion import ChatCompletion, ChoiceResult

__all__ = [
    "FinishReason",
    "ContentPart",
    "ContentPartType",
    "ImageDetail",
    "ToolCall",
    "ToolDefinition",
    "NamedToolChoice",
    "ToolChoice",
    "ToolChoiceMode",
    "Usage",
    "Message",
    "MessageContent",
    "Role",
    "ChatRequest",
    "ResponseFormat",
    "ChatCompletion",
    "ChoiceResult",
]
