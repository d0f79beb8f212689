"""
``GET /models`` response body.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from .wire_model import WireModel


class ModelEntry(WireModel):
    id: str
    object: Literal["model"]
    created: Optional[int] = None
    # OpenAI: 'openai', 'openai-dev', 'openai-internal', 'system'
    owned_by: Optional[str] = None


class ModelsListResponse(WireModel):
    object: Literal["list"]
    data: List[ModelEntry]

    def ids(self) -> List[str]:
        return [m.id for m in self.data]


__all__ = ["ModelEntry", "ModelsListResponse"]
