"""
Structured wire error exception type.

The single exception raised by this package: invalid canonical requests,
strict unwrapping of a failed validation, and misuse of a finished stream.
Malformed vendor traffic inside a stream is never raised; it is recorded as a
:class:`~chatwire.base.errors_parts.diagnostic.Diagnostic` instead.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .error_code import ErrorCode


@dataclass
class WireError(Exception):
    """Represents a structured failure with a normalized error code.

    Attributes:
        code: Normalized :class:`ErrorCode` classification for the failure.
        message: Human-readable error message suitable for logging.
        path: Dotted field path of the offending value, when known
            (for example ``"tools.0.function.name"``).
        dialect: Vendor dialect involved, when known.
        raw: Optional original exception or payload for diagnostics.
    """

    code: ErrorCode
    message: str
    path: Optional[str] = None
    dialect: Optional[str] = None
    raw: Optional[Any] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        where = f" at {self.path}" if self.path else ""
        return f"{self.dialect or '-'} {self.code.value}{where}: {self.message}"


__all__ = ["WireError"]
