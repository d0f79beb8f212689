"""
Canonical chat request.

Built once by the chat application and handed, unchanged, to
:class:`chatwire.base.request_normalizer.RequestNormalizer`, which produces
the vendor body. Only fields every dialect can at least ignore live here;
vendor-specific renames and omissions happen during normalization.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional, Sequence, Tuple

from ..errors import ErrorCode, WireError
from .message import Message, messages_to_dicts
from .tool_definition import NamedToolChoice, ToolChoice, ToolDefinition


ResponseFormat = Literal["text", "json_object"]

_MAX_STOP_SEQUENCES = 4
_TOOL_CHOICE_MODES = ("none", "auto", "required")


def _invalid(message: str, path: str) -> WireError:
    return WireError(ErrorCode.INVALID_REQUEST, message, path=path)


@dataclass(frozen=True)
class ChatRequest:
    """Immutable, vendor-neutral chat completion request.

    Attributes:
        model: Target model identifier.
        messages: Ordered, non-empty messages.
        tools: Tool definitions the model may call.
        tool_choice: ``"none"``, ``"auto"``, ``"required"`` or a
            :class:`NamedToolChoice` that must name one of ``tools``.
        temperature: Sampling temperature in [0, 2].
        top_p: Nucleus sampling mass in [0, 1].
        max_tokens: Completion token cap (positive).
        stream: Request incremental delivery.
        n: Number of choices; the normalizer sends 1 when unset.
        parallel_tool_calls: Allow several tool calls in one turn.
        include_usage: On streams, ask for a trailing usage chunk. ``None``
            defers to the normalizer's configured default.
        response_format: ``"text"`` or ``"json_object"``.
        seed: Best-effort determinism seed.
        stop: Up to four stop sequences.
        user: End-user identifier forwarded to the vendor.

    Raises:
        WireError: ``INVALID_REQUEST`` when an invariant does not hold (empty messages, tool
            choice naming an undeclared tool, out-of-range sampling values, more than
            four stop sequences).
    """

    model: str
    messages: Tuple[Message, ...]
    tools: Tuple[ToolDefinition, ...] = ()
    tool_choice: Optional[ToolChoice] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None
    stream: bool = False
    n: Optional[int] = None
    parallel_tool_calls: Optional[bool] = None
    include_usage: Optional[bool] = None
    response_format: Optional[ResponseFormat] = None
    seed: Optional[int] = None
    stop: Optional[Tuple[str, ...]] = None
    user: Optional[str] = None

    def __post_init__(self) -> None:
        for name in ("messages", "tools", "stop"):
            value = getattr(self, name)
            if isinstance(value, list):
                object.__setattr__(self, name, tuple(value))
        if not self.model:
            raise _invalid("model must be non-empty", "model")
        if not self.messages:
            raise _invalid("messages must be non-empty", "messages")
        choice = self.tool_choice
        if isinstance(choice, NamedToolChoice):
            if choice.name not in self.tool_names():
                raise _invalid(f"tool_choice names undeclared tool {choice.name!r}", "tool_choice")
        elif choice is not None and choice not in _TOOL_CHOICE_MODES:
            raise _invalid(f"tool_choice must be one of {_TOOL_CHOICE_MODES} or NamedToolChoice", "tool_choice")
        if self.temperature is not None and not 0.0 <= self.temperature <= 2.0:
            raise _invalid("temperature must be within [0, 2]", "temperature")
        if self.top_p is not None and not 0.0 <= self.top_p <= 1.0:
            raise _invalid("top_p must be within [0, 1]", "top_p")
        if self.max_tokens is not None and self.max_tokens <= 0:
            raise _invalid("max_tokens must be positive", "max_tokens")
        if self.n is not None and self.n <= 0:
            raise _invalid("n must be positive", "n")
        if self.stop is not None and len(self.stop) > _MAX_STOP_SEQUENCES:
            raise _invalid(f"stop takes at most {_MAX_STOP_SEQUENCES} sequences", "stop")
        if self.response_format not in (None, "text", "json_object"):
            raise _invalid("response_format must be 'text' or 'json_object'", "response_format")

    def tool_names(self) -> Sequence[str]:
        return [t.name for t in self.tools]

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serializable view of the canonical request."""
        choice: Any = self.tool_choice
        if isinstance(choice, NamedToolChoice):
            choice = {"name": choice.name}
        return {
            "model": self.model,
            "messages": messages_to_dicts(self.messages),
            "tools": [t.to_dict() for t in self.tools],
            "tool_choice": choice,
            "temperature": self.temperature,
            "top_p": self.top_p,
            "max_tokens": self.max_tokens,
            "stream": self.stream,
            "n": self.n,
            "parallel_tool_calls": self.parallel_tool_calls,
            "include_usage": self.include_usage,
            "response_format": self.response_format,
            "seed": self.seed,
            "stop": list(self.stop) if self.stop is not None else None,
            "user": self.user,
        }


__all__ = [
    "ChatRequest",
    "ResponseFormat",
]
