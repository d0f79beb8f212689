"""
Chat completion request body.

This is the shape a vendor receives after
:class:`chatwire.base.request_normalizer.RequestNormalizer` has run; it is
used to check normalizer output and to validate request bodies that come
from elsewhere (replayed logs, proxies).
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from .messages import WireMessage
from .tools import ToolChoice, ToolDefinition
from .wire_model import WireModel


class StreamOptions(WireModel):
    include_usage: Optional[bool] = None


class ResponseFormat(WireModel):
    type: Literal["text", "json_object"]


class ChatCompletionRequest(WireModel):
    """Request body for ``POST /chat/completions``."""

    model: str
    messages: List[WireMessage]

    tools: Optional[List[ToolDefinition]] = None
    tool_choice: Optional[ToolChoice] = None
    parallel_tool_calls: Optional[bool] = None

    max_tokens: Optional[int] = None
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    top_p: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    n: Optional[int] = Field(default=None, gt=0)
    stream: Optional[bool] = None
    stream_options: Optional[StreamOptions] = None
    response_format: Optional[ResponseFormat] = None
    seed: Optional[int] = None
    stop: Optional[List[str]] = None
    user: Optional[str] = None


__all__ = [
    "StreamOptions",
    "ResponseFormat",
    "ChatCompletionRequest",
]
