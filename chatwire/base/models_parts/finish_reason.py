"""
Canonical finish-reason enumeration.

Every vendor token (``STOP``, ``end_turn``, ``eos``, ``""`` ...) is reduced to
one of these values by :class:`chatwire.base.finish_reason.FinishReasonMapper`.
"""
from __future__ import annotations

from enum import Enum


class FinishReason(str, Enum):
    """Terminal status of one choice's generation."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    CONTENT_FILTER = "content_filter"
    ERROR = "error"
    UNKNOWN = "unknown"


__all__ = ["FinishReason"]
