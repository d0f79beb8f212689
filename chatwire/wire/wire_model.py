"""Shared pydantic base for wire shapes."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """Base for every vendor-facing shape.

    Unknown fields are ignored: vendors add undocumented keys all the time
    (``prompt_filter_results``, ``logprobs``, ``service_tier``, ...) and none
    of them may fail validation.
    """

    model_config = ConfigDict(extra="ignore")


__all__ = ["WireModel"]
