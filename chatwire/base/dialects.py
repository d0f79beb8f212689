"""
Vendor dialect profiles for request normalization.

A profile is data: which request fields the vendor rejects, how it spells
the tool-choice literals, whether it accepts a named tool choice and whether
it honors ``stream_options.include_usage``. Profiles are overridable (and new
ones addable) through the ``dialects`` configuration key, e.g.::

    dialects:
      localai:
        unsupported_fields: [parallel_tool_calls, user, seed]
      my-gateway:
        named_tool_choice: false
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, FrozenSet, Mapping, Optional

from .errors import ErrorCode, WireError

# Fields that are never dropped, whatever a profile says.
PROTECTED_FIELDS = frozenset({"model", "messages"})


@dataclass(frozen=True)
class DialectProfile:
    """Request-side quirks of one vendor.

    Attributes:
        name: Dialect identifier (lowercase).
        unsupported_fields: Top-level body fields omitted for this vendor.
        tool_choice_literals: Canonical literal -> vendor literal
            (``{"required": "any"}`` on Mistral). Missing keys pass through.
        named_tool_choice: Whether ``{"type": "function", ...}`` is accepted
            as ``tool_choice``.
        stream_usage: Whether ``stream_options.include_usage`` is accepted.
    """

    name: str
    unsupported_fields: FrozenSet[str] = frozenset()
    tool_choice_literals: Mapping[str, str] = field(default_factory=dict)
    named_tool_choice: bool = True
    stream_usage: bool = True

    def supports(self, field_name: str) -> bool:
        return field_name in PROTECTED_FIELDS or field_name not in self.unsupported_fields

    def tool_choice_literal(self, mode: str) -> str:
        return self.tool_choice_literals.get(mode, mode)

    def with_overrides(self, overrides: Mapping[str, Any]) -> "DialectProfile":
        """Return a copy with configuration ``overrides`` applied."""
        return replace(self, **_profile_kwargs(self.name, overrides))


def _profile_kwargs(name: str, data: Mapping[str, Any]) -> Dict[str, Any]:
    known = {"unsupported_fields", "tool_choice_literals", "named_tool_choice", "stream_usage"}
    unknown = set(data) - known
    if unknown:
        raise WireError(
            code=ErrorCode.INVALID_REQUEST,
            message=f"unknown dialect profile keys: {sorted(unknown)}",
            path=f"dialects.{name}",
            dialect=name,
        )
    out: Dict[str, Any] = {}
    if "unsupported_fields" in data:
        out["unsupported_fields"] = frozenset(data["unsupported_fields"] or ())
    if "tool_choice_literals" in data:
        out["tool_choice_literals"] = dict(data["tool_choice_literals"] or {})
    if "named_tool_choice" in data:
        out["named_tool_choice"] = bool(data["named_tool_choice"])
    if "stream_usage" in data:
        out["stream_usage"] = bool(data["stream_usage"])
    return out


DEFAULT_PROFILES: Dict[str, DialectProfile] = {
    "openai": DialectProfile(name="openai"),
    "azure": DialectProfile(name="azure"),
    "openrouter": DialectProfile(name="openrouter"),
    "mistral": DialectProfile(
        name="mistral",
        unsupported_fields=frozenset({"user", "seed", "parallel_tool_calls"}),
        tool_choice_literals={"required": "any"},
        named_tool_choice=False,
        stream_usage=False,
    ),
    "togetherai": DialectProfile(
        name="togetherai",
        unsupported_fields=frozenset({"parallel_tool_calls"}),
        stream_usage=False,
    ),
    "deepseek": DialectProfile(
        name="deepseek",
        unsupported_fields=frozenset({"n", "seed", "parallel_tool_calls"}),
    ),
    "perplexity": DialectProfile(
        name="perplexity",
        unsupported_fields=frozenset(
            {"tools", "tool_choice", "parallel_tool_calls", "n", "seed", "user", "response_format"}
        ),
        named_tool_choice=False,
        stream_usage=False,
    ),
    "localai": DialectProfile(
        name="localai",
        unsupported_fields=frozenset({"parallel_tool_calls", "user"}),
        stream_usage=False,
    ),
}


def build_profiles(overrides: Optional[Mapping[str, Mapping[str, Any]]] = None) -> Dict[str, DialectProfile]:
    """Return the default profiles with per-dialect ``overrides`` layered on.

    Dialect names in ``overrides`` that are not built in create new profiles
    based on the ``openai`` defaults.
    """
    profiles = dict(DEFAULT_PROFILES)
    for raw_name, data in (overrides or {}).items():
        name = str(raw_name).lower()
        base = profiles.get(name) or DialectProfile(name=name)
        profiles[name] = base.with_overrides(data or {})
    return profiles


__all__ = [
    "PROTECTED_FIELDS",
    "DialectProfile",
    "DEFAULT_PROFILES",
    "build_profiles",
]
