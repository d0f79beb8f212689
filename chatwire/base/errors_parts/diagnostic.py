"""
Per-unit diagnostic record.

A ``Diagnostic`` describes a failure that was absorbed instead of raised: a
dropped chunk (schema violation) or a best-effort merge of contradictory
tool-call fragments (protocol inconsistency).
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from .error_code import ErrorCode


@dataclass(frozen=True)
class Diagnostic:
    """A single absorbed failure observed while processing a stream.

    Attributes:
        code: Failure category (usually ``SCHEMA_VIOLATION`` or
            ``PROTOCOL_INCONSISTENCY``).
        message: Human-readable description.
        path: Dotted field path within the unit, when known.
        choice_index: Choice the failure relates to, when known.
        chunk_id: Vendor chunk id, when the unit carried one.
    """

    code: ErrorCode
    message: str
    path: Optional[str] = None
    choice_index: Optional[int] = None
    chunk_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["code"] = self.code.value
        return {k: v for k, v in data.items() if v is not None}


__all__ = ["Diagnostic"]
