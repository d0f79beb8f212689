"""Per-stream counters and timings.

Isolated within the streaming package so events and the assembler share one
definition.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..models import Usage


@dataclass
class StreamMetrics:
    """Counters collected by one assembler.

    Fields:
      received: units passed to ``feed`` (sentinel included)
      dropped: units rejected by schema validation
      emitted: delta events produced
      time_to_first_token_ms: first unit -> first delta event
      total_duration_ms: first unit -> terminal event
      tokens: canonical ``{"prompt", "completion", "total"}`` mapping, when
        the vendor reported usage
    """

    received: int = 0
    dropped: int = 0
    emitted: int = 0
    time_to_first_token_ms: Optional[float] = None
    total_duration_ms: Optional[float] = None
    tokens: Optional[Dict[str, Optional[int]]] = None

    def apply_usage(self, usage: Usage) -> None:
        self.tokens = usage.to_dict()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "received": self.received,
            "dropped": self.dropped,
            "emitted": self.emitted,
            "time_to_first_token_ms": self.time_to_first_token_ms,
            "total_duration_ms": self.total_duration_ms,
            "tokens": self.tokens,
        }


__all__ = ["StreamMetrics"]
