"""
Tool definitions and tool-choice policy for chat requests.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Union


def _empty_object_schema() -> Dict[str, Any]:
    return {"type": "object", "properties": {}}


@dataclass(frozen=True)
class ToolDefinition:
    """A function the model may call.

    Attributes:
        name: Function name; must match ``^[a-zA-Z0-9_-]{1,64}$`` (checked by
            the request normalizer, which reports the offending path).
        description: What the function does, used by the model to decide.
        parameters: JSON Schema object describing the arguments. Omitting it
            declares a function with no parameters.
    """

    name: str
    description: Optional[str] = None
    parameters: Dict[str, Any] = field(default_factory=_empty_object_schema)

    def to_dict(self) -> Dict[str, Any]:
        fn: Dict[str, Any] = {"name": self.name}
        if self.description is not None:
            fn["description"] = self.description
        fn["parameters"] = dict(self.parameters)
        return {"type": "function", "function": fn}


@dataclass(frozen=True)
class NamedToolChoice:
    """Force the model to call one specific tool."""

    name: str


ToolChoiceMode = Literal["none", "auto", "required"]
ToolChoice = Union[ToolChoiceMode, NamedToolChoice]


__all__ = [
    "ToolDefinition",
    "NamedToolChoice",
    "ToolChoiceMode",
    "ToolChoice",
]
