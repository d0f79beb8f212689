"""
Vendor finish-reason tokens -> canonical :class:`FinishReason`.

The vocabulary is data: ``DEFAULT_FINISH_REASONS`` lists every token seen in
the wild, and new vendor spellings are added through ``extend`` or the
``finish_reasons`` configuration key rather than new code paths.

Lookup is exact first, then case-insensitive. ``None``, ``""`` and tokens
nobody has seen before all map to ``UNKNOWN``.
"""
from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from .models import FinishReason


DEFAULT_FINISH_REASONS: Dict[str, FinishReason] = {
    # natural completion or stop sequence hit
    "stop": FinishReason.STOP,
    "stop_sequence": FinishReason.STOP,  # OpenRouter -> Anthropic
    "STOP": FinishReason.STOP,  # OpenRouter -> Gemini
    "end_turn": FinishReason.STOP,  # OpenRouter -> Anthropic
    "eos": FinishReason.STOP,  # OpenRouter -> Phind
    "COMPLETE": FinishReason.STOP,  # OpenRouter -> Command-R+
    # token budget exhausted
    "length": FinishReason.LENGTH,
    "max_tokens": FinishReason.LENGTH,
    "MAX_TOKENS": FinishReason.LENGTH,
    # the model called a tool
    "tool_calls": FinishReason.TOOL_CALLS,
    "function_call": FinishReason.TOOL_CALLS,  # legacy functions API
    "tool_use": FinishReason.TOOL_CALLS,
    # upstream moderation
    "content_filter": FinishReason.CONTENT_FILTER,
    "SAFETY": FinishReason.CONTENT_FILTER,
    # OpenRouter network error
    "error": FinishReason.ERROR,
    # LocalAI sends an empty token on broken responses
    "": FinishReason.UNKNOWN,
}


FinishReasonLike = Union[FinishReason, str]


def _coerce(value: FinishReasonLike) -> FinishReason:
    if isinstance(value, FinishReason):
        return value
    return FinishReason(str(value).strip().lower())


class FinishReasonMapper:
    """Immutable lookup from vendor tokens to :class:`FinishReason`."""

    def __init__(self, table: Optional[Mapping[str, FinishReasonLike]] = None) -> None:
        source = DEFAULT_FINISH_REASONS if table is None else table
        self._exact: Dict[str, FinishReason] = {k: _coerce(v) for k, v in source.items()}
        self._folded: Dict[str, FinishReason] = {}
        for key, value in self._exact.items():
            self._folded.setdefault(key.lower(), value)

    def map(self, token: Optional[str]) -> FinishReason:
        if token is None:
            return FinishReason.UNKNOWN
        hit = self._exact.get(token)
        if hit is not None:
            return hit
        return self._folded.get(token.lower(), FinishReason.UNKNOWN)

    def is_known(self, token: Optional[str]) -> bool:
        """True when ``token`` is present in the table (in any letter case)."""
        return token is not None and (token in self._exact or token.lower() in self._folded)

    def extend(self, mapping: Mapping[str, FinishReasonLike]) -> "FinishReasonMapper":
        """Return a new mapper with ``mapping`` layered over this table.

        Values may be :class:`FinishReason` members or their string values;
        anything else raises ``ValueError``.
        """
        merged: Dict[str, FinishReasonLike] = dict(self._exact)
        merged.update(mapping)
        return FinishReasonMapper(merged)

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]] = None) -> "FinishReasonMapper":
        """Build the default mapper extended with ``cfg["finish_reasons"]``.

        ``cfg`` is the dict returned by :func:`chatwire.config.get_wire_config`.
        """
        extra = (cfg or {}).get("finish_reasons") or {}
        base = cls()
        return base.extend(extra) if extra else base

    def table(self) -> Dict[str, FinishReason]:
        return dict(self._exact)


def merge_finish_reason(current: Optional[FinishReason], new: FinishReason) -> FinishReason:
    """Combine a choice's recorded reason with a newly observed one.

    A known reason is never downgraded to ``UNKNOWN``; otherwise the latest
    value wins.
    """
    if new is FinishReason.UNKNOWN and current is not None:
        return current
    return new


DEFAULT_MAPPER = FinishReasonMapper()


__all__ = [
    "DEFAULT_FINISH_REASONS",
    "DEFAULT_MAPPER",
    "FinishReasonLike",
    "FinishReasonMapper",
    "merge_finish_reason",
]
