"""Read-only model catalog loaded from a YAML or JSON file.

Catalog file shape
------------------

.. code-block:: yaml

    models:
      - id: gpt-4o
        label: GPT-4o
        description: Flagship multimodal model
        contextWindow: 128000
        maxCompletionTokens: 16384
        interfaces: [oai-chat, oai-chat-fn, oai-chat-vision, oai-chat-json]
        pricing: {chatIn: 2.5, chatOut: 10}

JSON with the same structure is accepted. Entries are validated with
:class:`~chatwire.catalog.model_description.ModelDescription`; any invalid
entry rejects the whole file.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Union

import yaml
from pydantic import ValidationError

from ..base.errors import ErrorCode, WireError
from ..base.logging import get_logger, log_event
from ..wire.validation import SchemaViolation
from .model_description import ModelDescription, ModelDescriptionList

logger = get_logger("chatwire.catalog")


class ModelCatalog:
    """Immutable lookup over model descriptions, in file order."""

    def __init__(self, models: Iterable[ModelDescription]) -> None:
        self._models: List[ModelDescription] = list(models)
        self._by_id: Dict[str, ModelDescription] = {}
        for model in self._models:
            self._by_id.setdefault(model.id, model)

    def __len__(self) -> int:
        return len(self._models)

    def __iter__(self) -> Iterator[ModelDescription]:
        return iter(self._models)

    def __contains__(self, model_id: object) -> bool:
        return model_id in self._by_id

    def get(self, model_id: str) -> Optional[ModelDescription]:
        return self._by_id.get(model_id)

    def ids(self) -> List[str]:
        return [m.id for m in self._models]

    def with_interface(self, interface: str) -> List[ModelDescription]:
        return [m for m in self._models if m.supports(interface)]

    def visible(self) -> List[ModelDescription]:
        return [m for m in self._models if m.visible]


def _parse_document(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return yaml.safe_load(text)


def parse_model_catalog(data: Union[Mapping[str, Any], List[Any]], *, source: str = "<memory>") -> ModelCatalog:
    """Validate an already-decoded catalog document.

    A bare list is treated as the ``models`` list.

    Raises:
        WireError: ``SCHEMA_VIOLATION`` with the path of the first bad field.
    """
    if isinstance(data, list):
        data = {"models": data}
    try:
        parsed = ModelDescriptionList.model_validate(data)
    except ValidationError as exc:
        violation = SchemaViolation.from_validation_error(exc)
        raise WireError(
            code=ErrorCode.SCHEMA_VIOLATION,
            message=f"{source}: {violation.message}",
            path=violation.path,
            raw=violation,
        ) from exc
    return ModelCatalog(parsed.models)


def load_model_catalog(path: Union[str, Path]) -> ModelCatalog:
    """Load a catalog file (JSON first, then YAML).

    Raises:
        FileNotFoundError: When ``path`` does not exist.
        yaml.YAMLError: When the file is neither valid JSON nor YAML.
        WireError: ``SCHEMA_VIOLATION`` when an entry is invalid.
    """
    p = Path(path)
    data = _parse_document(p.read_text(encoding="utf-8")) or {}
    catalog = parse_model_catalog(data, source=str(p))
    log_event(logger, "catalog.loaded", path=str(p), models=len(catalog))
    return catalog


__all__ = ["ModelCatalog", "parse_model_catalog", "load_model_catalog"]
