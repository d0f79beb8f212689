"""
Canonical :class:`ChatRequest` -> vendor request body.

Pure transform, one instance per target dialect. The normalizer:

- serializes ``tool_choice`` with the dialect's literals; a named choice on
  a dialect without named support becomes the forced literal and ``tools``
  is narrowed to the named tool;
- omits fields the dialect rejects (each omission is logged as
  ``request.field.omitted``);
- sends ``n = 1`` unless the request asks otherwise;
- preserves message order and role tags;
- adds ``stream_options.include_usage`` only on streaming requests to
  dialects that accept it.

It fails only with ``WireError(INVALID_REQUEST)``: for a tool name outside
``^[a-zA-Z0-9_-]{1,64}$`` (the error ``path`` points at the tool) or for an
unknown dialect.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

from ..config.defaults import DEFAULT_DIALECT, DEFAULT_INCLUDE_USAGE, DEFAULT_N, TOOL_NAME_PATTERN
from .dialects import DialectProfile, build_profiles
from .errors import ErrorCode, WireError
from .logging import LogContext, get_logger, log_event
from .models import ChatRequest, NamedToolChoice, ToolDefinition, messages_to_dicts

_TOOL_NAME_RE = re.compile(TOOL_NAME_PATTERN)


@dataclass(frozen=True)
class VendorRequest:
    """Normalized body plus the flag the transport needs."""

    body: Dict[str, Any]
    stream: bool
    dialect: str


class RequestNormalizer:
    """Translate canonical requests for one dialect.

    Args:
        dialect: Target dialect name (case-insensitive).
        profiles: Extra or replacement profiles by name, layered over the
            built-in table.
        include_usage: Default for ``ChatRequest.include_usage`` when the
            request leaves it unset.
        logger: Defaults to the ``chatwire.request`` logger.
    """

    def __init__(
        self,
        dialect: str = DEFAULT_DIALECT,
        profiles: Optional[Mapping[str, DialectProfile]] = None,
        *,
        include_usage: bool = DEFAULT_INCLUDE_USAGE,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        table = build_profiles()
        table.update({k.lower(): v for k, v in (profiles or {}).items()})
        key = (dialect or "").lower()
        if key not in table:
            raise WireError(
                code=ErrorCode.INVALID_REQUEST,
                message=f"unknown dialect {dialect!r}; known: {sorted(table)}",
                path="dialect",
                dialect=dialect,
            )
        self.profile = table[key]
        self.include_usage = include_usage
        self._logger = logger or get_logger("chatwire.request")

    @classmethod
    def from_config(cls, cfg: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> "RequestNormalizer":
        """Build from :func:`chatwire.config.get_wire_config` output.

        ``cfg`` keys used: ``dialect``, ``include_usage``, ``dialects``.
        """
        if cfg is None:
            from ..config import get_wire_config

            cfg = get_wire_config()
        kwargs.setdefault("profiles", build_profiles(cfg.get("dialects")))
        kwargs.setdefault("include_usage", bool(cfg.get("include_usage", DEFAULT_INCLUDE_USAGE)))
        return cls(str(cfg.get("dialect") or DEFAULT_DIALECT), **kwargs)

    @property
    def dialect(self) -> str:
        return self.profile.name

    def normalize(self, request: ChatRequest) -> VendorRequest:
        """Return the vendor body for ``request``."""
        self._check_tool_names(request.tools)
        ctx = LogContext(dialect=self.dialect, model=request.model)
        profile = self.profile

        body: Dict[str, Any] = {
            "model": request.model,
            "messages": messages_to_dicts(request.messages),
        }
        self._add_tools(body, request)
        if request.temperature is not None:
            body["temperature"] = float(request.temperature)
        if request.top_p is not None:
            body["top_p"] = float(request.top_p)
        if request.max_tokens is not None:
            body["max_tokens"] = int(request.max_tokens)
        body["n"] = request.n if request.n is not None else DEFAULT_N
        body["stream"] = bool(request.stream)
        if request.stream:
            wants_usage = self.include_usage if request.include_usage is None else request.include_usage
            if wants_usage:
                if profile.stream_usage:
                    body["stream_options"] = {"include_usage": True}
                elif request.include_usage:
                    self._omitted(ctx, "stream_options", "stream usage not supported")
        if request.response_format is not None:
            body["response_format"] = {"type": request.response_format}
        if request.seed is not None:
            body["seed"] = int(request.seed)
        if request.stop:
            body["stop"] = list(request.stop)
        if request.user is not None:
            body["user"] = request.user

        for name in [k for k in body if not profile.supports(k)]:
            del body[name]
            self._omitted(ctx, name, "unsupported by dialect")

        log_event(
            self._logger,
            "request.normalized",
            ctx,
            level=logging.DEBUG,
            stream=bool(request.stream),
            fields=sorted(body),
            messages=len(request.messages),
            tools=len(body.get("tools", ())),
        )
        return VendorRequest(body=body, stream=bool(request.stream), dialect=self.dialect)

    def _add_tools(self, body: Dict[str, Any], request: ChatRequest) -> None:
        tools: List[ToolDefinition] = list(request.tools)
        if not tools:
            # tool_choice and parallel_tool_calls are rejected without tools
            return
        choice = request.tool_choice
        wire_choice: Any = None
        if isinstance(choice, NamedToolChoice):
            if self.profile.named_tool_choice:
                wire_choice = {"type": "function", "function": {"name": choice.name}}
            else:
                tools = [t for t in tools if t.name == choice.name]
                wire_choice = self.profile.tool_choice_literal("required")
        elif choice is not None:
            wire_choice = self.profile.tool_choice_literal(choice)
        body["tools"] = [t.to_dict() for t in tools]
        if wire_choice is not None:
            body["tool_choice"] = wire_choice
        if request.parallel_tool_calls is not None:
            body["parallel_tool_calls"] = bool(request.parallel_tool_calls)

    def _check_tool_names(self, tools: Any) -> None:
        for i, tool in enumerate(tools):
            if not _TOOL_NAME_RE.fullmatch(tool.name or ""):
                raise WireError(
                    code=ErrorCode.INVALID_REQUEST,
                    message=(
                        f"tool name {tool.name!r} must be 1-64 characters of letters, "
                        "digits, underscores and hyphens"
                    ),
                    path=f"tools.{i}.function.name",
                    dialect=self.dialect,
                )

    def _omitted(self, ctx: LogContext, field_name: str, reason: str) -> None:
        log_event(
            self._logger,
            "request.field.omitted",
            ctx,
            level=logging.INFO,
            field=field_name,
            reason=reason,
        )


def normalize_request(request: ChatRequest, dialect: str = DEFAULT_DIALECT, **kwargs: Any) -> VendorRequest:
    """One-shot helper: ``RequestNormalizer(dialect, **kwargs).normalize(request)``."""
    return RequestNormalizer(dialect, **kwargs).normalize(request)


__all__ = [
    "VendorRequest",
    "RequestNormalizer",
    "normalize_request",
]
