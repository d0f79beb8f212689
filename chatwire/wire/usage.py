"""Token usage shape shared by responses and chunks."""
from __future__ import annotations

from typing import Optional

from ..base.models import Usage
from .wire_model import WireModel


class WireUsage(WireModel):
    # All optional: some vendors report only a subset.
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    total_tokens: Optional[int] = None

    def to_usage(self) -> Usage:
        return Usage.build(self.prompt_tokens, self.completion_tokens, self.total_tokens)


__all__ = ["WireUsage"]
