"""Unified wire error taxonomy public surface.

This module re-exports the one-class-per-file implementations under
``chatwire.base.errors_parts`` to maintain a stable import path.
"""

from .errors_parts.error_code import ErrorCode, TERMINAL_CODES
from .errors_parts.wire_error import WireError
from .errors_parts.diagnostic import Diagnostic
from .errors_parts.stream_error import StreamError

__all__ = ["ErrorCode", "TERMINAL_CODES", "WireError", "Diagnostic", "StreamError"]
