"""
Message shapes, discriminated by ``role``.
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .content_parts import ContentPart, PredictedFunctionCall
from .wire_model import WireModel


class SystemMessage(WireModel):
    role: Literal["system"]
    content: str


class UserMessage(WireModel):
    role: Literal["user"]
    content: Union[str, List[ContentPart]]


class AssistantMessage(WireModel):
    """Assistant turn.

    ``content`` may be missing or null when the message only carries tool
    calls, which is how non-streaming function-calling responses arrive.
    """

    role: Literal["assistant"]
    content: Optional[str] = None
    tool_calls: Optional[List[PredictedFunctionCall]] = None


class ToolMessage(WireModel):
    role: Literal["tool"]
    content: str
    tool_call_id: str


WireMessage = Annotated[
    Union[SystemMessage, UserMessage, AssistantMessage, ToolMessage],
    Field(discriminator="role"),
]


__all__ = [
    "SystemMessage",
    "UserMessage",
    "AssistantMessage",
    "ToolMessage",
    "WireMessage",
]
