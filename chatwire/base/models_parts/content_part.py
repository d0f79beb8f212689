"""
Content part model for multi-part user messages.

A user message's content is either a plain string or an ordered list of
``ContentPart`` values. Two kinds exist on the wire: ``text`` and
``image_url`` (a URL or base64 data URL plus an optional detail level).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Optional


ContentPartType = Literal["text", "image_url"]
ImageDetail = Literal["auto", "low", "high"]

_DETAILS = ("auto", "low", "high")


@dataclass(frozen=True)
class ContentPart:
    """A single piece of user message content.

    Attributes:
        type: ``"text"`` or ``"image_url"``.
        text: Text for ``text`` parts.
        url: Image URL (or data URL) for ``image_url`` parts.
        detail: Optional fidelity hint for ``image_url`` parts.

    Raises:
        ValueError: When the fields do not match the part type.
    """

    type: ContentPartType
    text: Optional[str] = None
    url: Optional[str] = None
    detail: Optional[ImageDetail] = None

    def __post_init__(self) -> None:
        if self.type == "text":
            if self.text is None or self.url is not None:
                raise ValueError("text content part requires 'text' only")
        elif self.type == "image_url":
            if not self.url or self.text is not None:
                raise ValueError("image_url content part requires 'url' only")
            if self.detail is not None and self.detail not in _DETAILS:
                raise ValueError(f"image detail must be one of {_DETAILS}")
        else:
            raise ValueError(f"unsupported content part type: {self.type!r}")

    @classmethod
    def text_part(cls, text: str) -> "ContentPart":
        return cls(type="text", text=text)

    @classmethod
    def image_part(cls, url: str, detail: Optional[ImageDetail] = None) -> "ContentPart":
        return cls(type="image_url", url=url, detail=detail)

    def to_dict(self) -> Dict[str, Any]:
        """Return the OpenAI wire shape of this part."""
        if self.type == "text":
            return {"type": "text", "text": self.text}
        image: Dict[str, Any] = {"url": self.url}
        if self.detail is not None:
            image["detail"] = self.detail
        return {"type": "image_url", "image_url": image}


__all__ = [
    "ContentPart",
    "ContentPartType",
    "ImageDetail",
]
