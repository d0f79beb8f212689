"""
Tool definition and tool choice shapes.
"""
from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import ConfigDict, Field

from ..config.defaults import TOOL_NAME_PATTERN
from .wire_model import WireModel


class FunctionParameters(WireModel):
    """JSON Schema object describing a function's arguments.

    Only the top level is checked; keywords beyond ``properties`` and
    ``required`` are kept for round-tripping.
    """

    model_config = ConfigDict(extra="allow")

    type: Literal["object"]
    properties: Optional[Dict[str, Any]] = None
    required: Optional[List[str]] = None


class FunctionDefinition(WireModel):
    name: str = Field(..., pattern=TOOL_NAME_PATTERN)
    description: Optional[str] = None
    parameters: FunctionParameters


class ToolDefinition(WireModel):
    type: Literal["function"]
    function: FunctionDefinition


class NamedFunction(WireModel):
    name: str


class NamedToolChoice(WireModel):
    type: Literal["function"]
    function: NamedFunction


# ``any`` is Mistral's spelling of ``required``.
ToolChoiceLiteral = Literal["none", "auto", "required", "any"]

ToolChoice = Union[ToolChoiceLiteral, NamedToolChoice]


__all__ = [
    "FunctionParameters",
    "FunctionDefinition",
    "ToolDefinition",
    "NamedFunction",
    "NamedToolChoice",
    "ToolChoiceLiteral",
    "ToolChoice",
]
