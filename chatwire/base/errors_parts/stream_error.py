"""
Request-terminal error payload.

``StreamError`` is attached to the end of a stream (or to a non-streaming
completion) when the request could not finish normally: an ``error`` object
sent by the vendor, a transport failure reported by the caller, or a
cancellation.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ...config.defaults import MAX_ERROR_MESSAGE_CHARS
from .error_code import ErrorCode


@dataclass(frozen=True)
class StreamError:
    """Terminal failure surfaced to the chat application.

    Attributes:
        code: ``VENDOR_ERROR``, ``TRANSPORT_FAILURE`` or ``CANCELLED``.
        message: Human-readable message.
        type: Vendor error type (for example ``"server_error"``), if sent.
        param: Vendor ``param`` field, if sent.
        vendor_code: Vendor ``code`` field, if sent.
    """

    code: ErrorCode
    message: str
    type: Optional[str] = None
    param: Optional[str] = None
    vendor_code: Optional[str] = None

    @classmethod
    def from_vendor_payload(cls, payload: Any) -> "StreamError":
        """Build a ``VENDOR_ERROR`` from an undocumented ``error`` field.

        OpenAI-compatible vendors send ``{"message", "type", "param",
        "code"}``; others send a bare string or an arbitrary object.
        """
        if isinstance(payload, Mapping):
            message = payload.get("message")
            return cls(
                code=ErrorCode.VENDOR_ERROR,
                message=str(message) if message else "upstream error",
                type=_opt_str(payload.get("type")),
                param=_opt_str(payload.get("param")),
                vendor_code=_opt_str(payload.get("code")),
            )
        if hasattr(payload, "message"):
            return cls(
                code=ErrorCode.VENDOR_ERROR,
                message=str(getattr(payload, "message", None) or "upstream error"),
                type=_opt_str(getattr(payload, "type", None)),
                param=_opt_str(getattr(payload, "param", None)),
                vendor_code=_opt_str(getattr(payload, "code", None)),
            )
        return cls(code=ErrorCode.VENDOR_ERROR, message=str(payload) if payload else "upstream error")

    @classmethod
    def from_exception(cls, exc: BaseException) -> "StreamError":
        """Build a ``TRANSPORT_FAILURE`` from an exception raised by the transport."""
        return cls(
            code=ErrorCode.TRANSPORT_FAILURE,
            message=str(exc)[:MAX_ERROR_MESSAGE_CHARS] or exc.__class__.__name__,
            type=exc.__class__.__name__,
        )

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "type": self.type,
            "param": self.param,
            "vendor_code": self.vendor_code,
        }


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


__all__ = ["StreamError"]
