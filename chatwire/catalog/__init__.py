"""Model catalog: description schema and read-only loader."""

from .model_description import (
    IF_OAI_CHAT,
    IF_OAI_COMPLETE,
    IF_OAI_FN,
    IF_OAI_JSON,
    IF_OAI_VISION,
    ModelBenchmark,
    ModelDescription,
    ModelDescriptionList,
    ModelInterface,
    ModelPricing,
)
from .loader import ModelCatalog, load_model_catalog, parse_model_catalog

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
    "ModelCatalog",
    "parse_model_catalog",
    "load_model_catalog",
]
