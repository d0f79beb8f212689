"""
Content part and tool call shapes.

Input parts (``text``, ``image_url``) appear inside user messages; predicted
function calls appear on assistant messages of non-streaming responses (and
on assistant messages replayed in a request history).
"""
from __future__ import annotations

from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field

from .wire_model import WireModel


class TextContentPart(WireModel):
    type: Literal["text"]
    text: str


class ImageUrl(WireModel):
    # Either a URL or a base64 data URL.
    url: str
    detail: Optional[Literal["auto", "low", "high"]] = None


class ImageContentPart(WireModel):
    type: Literal["image_url"]
    image_url: ImageUrl


ContentPart = Annotated[Union[TextContentPart, ImageContentPart], Field(discriminator="type")]


class FunctionCallBody(WireModel):
    name: str
    # Raw model output; frequently not valid JSON.
    arguments: str


class PredictedFunctionCall(WireModel):
    """A complete tool call.

    ``type`` is optional because Mistral omits it on non-streaming responses.
    """

    type: Optional[Literal["function"]] = None
    id: str
    function: FunctionCallBody


ToolCallList = List[PredictedFunctionCall]


__all__ = [
    "TextContentPart",
    "ImageUrl",
    "ImageContentPart",
    "ContentPart",
    "FunctionCallBody",
    "PredictedFunctionCall",
    "ToolCallList",
]
