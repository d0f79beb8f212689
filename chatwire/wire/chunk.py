"""
Streaming chunk shape.

Only ``id`` and ``choices`` are required. Everything else is optional or
nullable because at least one OpenAI-compatible vendor omits or nulls it:

- ``object``: ``chat.completion`` on Perplexity, ``""`` on Azure's
  prompt-filter packet.
- ``choices[].index``: missing on OpenRouter.
- ``choices[].finish_reason``: missing on OpenRouter, any token elsewhere.
- ``delta.role``: null on Deepseek.
- ``delta.tool_calls[].index``: missing on Mistral.
- ``function.name`` / ``function.arguments``: null on TogetherAI (one or
  the other per fragment).
"""
from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field, field_validator

from ..config.defaults import CHUNK_OBJECT_TAGS
from .usage import WireUsage
from .wire_model import WireModel


class ChunkError(WireModel):
    """Undocumented ``error`` object sent mid-stream."""

    message: Optional[str] = None
    type: Optional[str] = None
    param: Optional[str] = None
    code: Optional[Union[str, int]] = None


class ChunkFunctionDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ChunkToolCallDelta(WireModel):
    index: Optional[int] = None
    type: Optional[str] = None
    # Usually only present on the first fragment of a call.
    id: Optional[str] = None
    function: Optional[ChunkFunctionDelta] = None


class ChunkDelta(WireModel):
    role: Optional[str] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ChunkToolCallDelta]] = None


class ChunkChoice(WireModel):
    index: Optional[int] = None
    delta: ChunkDelta = Field(default_factory=ChunkDelta)
    finish_reason: Optional[str] = None


class ChunkResponse(WireModel):
    """One decoded streaming unit.

    ``choices`` may be empty on the trailing usage chunk requested through
    ``stream_options.include_usage``.
    """

    object: Optional[str] = None
    id: str
    choices: List[ChunkChoice]
    model: Optional[str] = None
    usage: Optional[WireUsage] = None
    created: Optional[int] = None
    system_fingerprint: Optional[str] = None

    # Object on OpenAI-compatible vendors, a bare string on some proxies.
    error: Optional[Union[ChunkError, str]] = None
    warning: Optional[str] = None

    @field_validator("object")
    @classmethod
    def _known_object_tag(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in CHUNK_OBJECT_TAGS:
            raise ValueError(f"object must be one of {list(CHUNK_OBJECT_TAGS)}")
        return value

    def is_usage_only(self) -> bool:
        """True for the trailing chunk that only reports usage."""
        return not self.choices and self.usage is not None


StreamChunk = ChunkResponse


__all__ = [
    "ChunkError",
    "ChunkFunctionDelta",
    "ChunkToolCallDelta",
    "ChunkDelta",
    "ChunkChoice",
    "ChunkResponse",
    "StreamChunk",
]
