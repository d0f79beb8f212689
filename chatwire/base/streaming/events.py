"""Events emitted by :class:`~chatwire.base.streaming.assembler.StreamAssembler`.

A stream produces any number of :class:`DeltaEvent` values for live display,
then (unless cancelled) one :class:`ChoiceFinalEvent` per choice, then
exactly one :class:`StreamEndEvent`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from ..errors import Diagnostic, StreamError
from ..models import FinishReason, Message, Usage
from .stream_metrics import StreamMetrics


class StreamOutcome(str, Enum):
    """How a stream ended, as seen by the chat application."""

    COMPLETED = "completed"
    VENDOR_ERROR = "vendor_error"
    TRANSPORT_FAILURE = "transport_failure"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ToolCallFragment:
    """One tool-call delta after index resolution.

    ``index`` is the resolved tool-call index within the choice (explicit, or
    carried forward when the vendor omitted it).
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: str = ""


@dataclass(frozen=True)
class DeltaEvent:
    """Incremental text or tool-call fragment for one choice."""

    choice_index: int
    text: Optional[str] = None
    tool_call: Optional[ToolCallFragment] = None


@dataclass(frozen=True)
class ChoiceFinalEvent:
    """Final message for one choice.

    ``partial`` marks choices cut short by a vendor error or transport
    failure; the message holds whatever had been accumulated.
    """

    choice_index: int
    message: Message
    finish_reason: FinishReason
    partial: bool = False


@dataclass
class StreamEndEvent:
    """Request-level terminal event, always the last one emitted."""

    outcome: StreamOutcome
    usage: Optional[Usage] = None
    error: Optional[StreamError] = None
    warnings: List[str] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    metrics: StreamMetrics = field(default_factory=StreamMetrics)
    response_id: Optional[str] = None
    model: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.outcome is StreamOutcome.COMPLETED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome.value,
            "usage": self.usage.to_dict() if self.usage else None,
            "error": self.error.to_dict() if self.error else None,
            "warnings": list(self.warnings),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "metrics": self.metrics.to_dict(),
            "response_id": self.response_id,
            "model": self.model,
        }


StreamEvent = Union[DeltaEvent, ChoiceFinalEvent, StreamEndEvent]


__all__ = [
    "StreamOutcome",
    "ToolCallFragment",
    "DeltaEvent",
    "ChoiceFinalEvent",
    "StreamEndEvent",
    "StreamEvent",
]
