"""
Tool call issued by the model.

``arguments`` is kept as the raw text the model produced. It is frequently
invalid JSON (truncated by ``length``, hallucinated keys, trailing garbage),
so parsing and validation belong to the consumer that executes the tool.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ToolCall:
    """A completed function-style tool call on an assistant message."""

    id: str
    name: str
    arguments: str = ""

    def parsed_arguments(self) -> Optional[Dict[str, Any]]:
        """Return the arguments as a dict, or ``None`` when not a JSON object."""
        try:
            value = json.loads(self.arguments) if self.arguments else {}
        except ValueError:
            return None
        return value if isinstance(value, dict) else None

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI wire shape of this call."""
        return {
            "id": self.id,
            "type": "function",
            "function": {"name": self.name, "arguments": self.arguments},
        }


__all__ = ["ToolCall"]
