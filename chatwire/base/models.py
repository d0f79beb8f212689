"""
Canonical, vendor-neutral chat models public surface.

This module re-exports the one-class-per-file implementations under
``chatwire.base.models_parts`` so callers have a single stable import path.
"""

from .models_parts.finish_reason import FinishReason
from .models_parts.content_part import ContentPart, ContentPartType, ImageDetail
from .models_parts.tool_call import ToolCall
from .models_parts.tool_definition import NamedToolChoice, ToolChoice, ToolChoiceMode, ToolDefinition
from .models_parts.usage import Usage
from .models_parts.message import Message, MessageContent, Role, messages_to_dicts
from .models_parts.chat_request import ChatRequest, ResponseFormat
from .models_parts.chat_completion import ChatCompletion, ChoiceResult

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
    "messages_to_dicts",
    "ChatRequest",
    "ResponseFormat",
    "ChatCompletion",
    "ChoiceResult",
]
