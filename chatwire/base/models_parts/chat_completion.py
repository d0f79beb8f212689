"""
Assembled completion returned to the chat application.

Produced directly from a non-streaming response body, or folded from a
stream's terminal events by :func:`chatwire.base.streaming.accumulate_events`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..errors import StreamError
from .finish_reason import FinishReason
from .message import Message
from .usage import Usage


@dataclass(frozen=True)
class ChoiceResult:
    """One finished choice.

    ``partial`` is True when the choice was cut short by a vendor error or a
    transport failure; its message holds whatever had been accumulated.
    """

    index: int
    message: Message
    finish_reason: FinishReason
    partial: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "index": self.index,
            "message": self.message.to_dict(),
            "finish_reason": self.finish_reason.value,
            "partial": self.partial,
        }


@dataclass
class ChatCompletion:
    """Canonical chat completion.

    Attributes:
        id: Vendor response id (first chunk id for streams).
        model: Model reported by the vendor, when any.
        choices: Finished choices ordered by index.
        usage: Token usage, when reported.
        error: Terminal failure, when the request did not finish normally.
        warnings: Vendor warnings, in arrival order.
    """

    id: Optional[str]
    model: Optional[str]
    choices: List[ChoiceResult] = field(default_factory=list)
    usage: Optional[Usage] = None
    error: Optional[StreamError] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    def first_message(self) -> Optional[Message]:
        return self.choices[0].message if self.choices else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "model": self.model,
            "choices": [c.to_dict() for c in self.choices],
            "usage": self.usage.to_dict() if self.usage else None,
            "error": self.error.to_dict() if self.error else None,
            "warnings": list(self.warnings),
        }


__all__ = ["ChoiceResult", "ChatCompletion"]
