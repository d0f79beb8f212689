"""Running per-choice state folded from streaming deltas."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..models import FinishReason


class AccumulatorState(str, Enum):
    EMPTY = "empty"
    ACCUMULATING = "accumulating"
    FINALIZED = "finalized"


@dataclass
class ToolCallBuffer:
    """A tool call under construction.

    ``arguments`` holds the fragments in arrival order; they are joined, never
    parsed.
    """

    index: int
    id: Optional[str] = None
    name: Optional[str] = None
    arguments: List[str] = field(default_factory=list)

    @property
    def has_arguments(self) -> bool:
        return bool(self.arguments)

    def append(self, fragment: str) -> None:
        self.arguments.append(fragment)

    def arguments_text(self) -> str:
        return "".join(self.arguments)


@dataclass
class AccumulatedChoice:
    """Everything received so far for one choice index.

    ``tool_calls`` is keyed by tool-call index; dict insertion order records
    first sight. ``last_tool_index`` drives the carry-forward policy for
    fragments that arrive without an index.
    """

    index: int
    text: List[str] = field(default_factory=list)
    text_written: bool = False
    tool_calls: Dict[int, ToolCallBuffer] = field(default_factory=dict)
    finish_reason: Optional[FinishReason] = None
    last_tool_index: Optional[int] = None

    def content(self) -> Optional[str]:
        return "".join(self.text) if self.text_written else None

    def next_tool_index(self) -> int:
        return max(self.tool_calls) + 1 if self.tool_calls else 0


__all__ = ["AccumulatorState", "ToolCallBuffer", "AccumulatedChoice"]
