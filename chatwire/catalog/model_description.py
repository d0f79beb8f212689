"""
Model description records.

A superset of what vendors' model listings report, curated by hand or by a
vendor-specific refresher. Field names follow the camelCase used by catalog
files; Python attributes are snake_case.
"""
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# Capability tags a model can carry.
IF_OAI_CHAT = "oai-chat"
IF_OAI_FN = "oai-chat-fn"
IF_OAI_COMPLETE = "oai-complete"
IF_OAI_VISION = "oai-chat-vision"
IF_OAI_JSON = "oai-chat-json"

ModelInterface = Literal["oai-chat", "oai-chat-fn", "oai-complete", "oai-chat-vision", "oai-chat-json"]


class _CatalogModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class ModelPricing(_CatalogModel):
    # USD per million tokens
    chat_in: Optional[float] = Field(default=None, alias="chatIn")
    chat_out: Optional[float] = Field(default=None, alias="chatOut")


class ModelBenchmark(_CatalogModel):
    cba_elo: Optional[float] = Field(default=None, alias="cbaElo")
    cba_mmlu: Optional[float] = Field(default=None, alias="cbaMmlu")
    # HumanEval, code, 0-shot
    he_code: Optional[float] = Field(default=None, alias="heCode")
    # Visual question answering, MMMU, 0-shot
    vqa_mmmu: Optional[float] = Field(default=None, alias="vqaMmmu")


class ModelDescription(_CatalogModel):
    """One catalog entry.

    ``context_window`` is required but nullable: ``null`` means the vendor
    does not publish it.
    """

    id: str
    label: str
    created: Optional[int] = None
    updated: Optional[int] = None
    description: str
    context_window: Optional[int] = Field(..., alias="contextWindow")
    max_completion_tokens: Optional[int] = Field(default=None, alias="maxCompletionTokens")
    training_data_cutoff: Optional[str] = Field(default=None, alias="trainingDataCutoff")
    interfaces: List[ModelInterface]
    benchmark: Optional[ModelBenchmark] = None
    pricing: Optional[ModelPricing] = None
    hidden: Optional[bool] = None

    def supports(self, interface: str) -> bool:
        return interface in self.interfaces

    @property
    def visible(self) -> bool:
        return not self.hidden

    def to_dict(self) -> dict:
        """Catalog (camelCase) representation, unset fields omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)


class ModelDescriptionList(_CatalogModel):
    models: List[ModelDescription]


__all__ = [
    "IF_OAI_CHAT",
    "IF_OAI_FN",
    "IF_OAI_COMPLETE",
    "IF_OAI_VISION",
    "IF_OAI_JSON",
    "ModelInterface",
    "ModelPricing",
    "ModelBenchmark",
    "ModelDescription",
    "ModelDescriptionList",
]
