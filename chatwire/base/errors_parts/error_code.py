"""
Normalized wire error codes (taxonomy).

Defines the `ErrorCode` enumeration shared by diagnostics, terminal stream
errors and raised exceptions. Values are lowercase snake_case and are a
stable public contract for logging and analytics.
"""
from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Enumerated normalized error codes representing failure categories.

    ``SCHEMA_VIOLATION`` and ``PROTOCOL_INCONSISTENCY`` are absorbed per unit;
    ``VENDOR_ERROR`` and ``TRANSPORT_FAILURE`` terminate a request.
    """

    SCHEMA_VIOLATION = "schema_violation"
    VENDOR_ERROR = "vendor_error"
    PROTOCOL_INCONSISTENCY = "protocol_inconsistency"
    TRANSPORT_FAILURE = "transport_failure"
    INVALID_REQUEST = "invalid_request"
    INVALID_STATE = "invalid_state"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


TERMINAL_CODES = frozenset(
    {
        ErrorCode.VENDOR_ERROR,
        ErrorCode.TRANSPORT_FAILURE,
        ErrorCode.CANCELLED,
    }
)


__all__ = ["ErrorCode", "TERMINAL_CODES"]
