"""
Non-streaming chat completion response body.
"""
from __future__ import annotations

from typing import Any, List, Literal, Optional

from .messages import AssistantMessage
from .usage import WireUsage
from .wire_model import WireModel


class ResponseChoice(WireModel):
    index: int
    # The role is only implied by the API; the assistant shape is reused.
    message: AssistantMessage
    # Any token is accepted; FinishReasonMapper decides what it means.
    finish_reason: Optional[str] = None


class ChatCompletionResponse(WireModel):
    """Response body for a non-streaming ``POST /chat/completions``.

    ``error`` and ``warning`` are undocumented but observed in the wild and
    are surfaced on the assembled completion.
    """

    object: Literal["chat.completion"]
    id: str
    choices: List[ResponseChoice]
    model: str
    usage: Optional[WireUsage] = None
    created: Optional[int] = None
    system_fingerprint: Optional[str] = None

    error: Optional[Any] = None
    warning: Optional[Any] = None


__all__ = ["ResponseChoice", "ChatCompletionResponse"]
