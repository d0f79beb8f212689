"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatwire.base.errors` for the stable surface.
"""

from .error_code import ErrorCode, TERMINAL_CODES
from .wire_error import WireError
from .diagnostic import Diagnostic
from .stream_error import StreamError

__all__ = ["ErrorCode", "TERMINAL_CODES", "WireError", "Diagnostic", "StreamError"]
