"""Model catalog schema and file loader."""
from __future__ import annotations

import json

import pytest

from chatwire.base.errors import ErrorCode, WireError
from chatwire.catalog import IF_OAI_FN, IF_OAI_VISION, load_model_catalog, parse_model_catalog

CATALOG_YAML = """\
models:
  - id: gpt-4o
    label: GPT-4o
    description: Flagship multimodal model
    contextWindow: 128000
    maxCompletionTokens: 16384
    trainingDataCutoff: Oct 2023
    interfaces: [oai-chat, oai-chat-fn, oai-chat-vision, oai-chat-json]
    pricing: {chatIn: 2.5, chatOut: 10}
    benchmark: {cbaElo: 1287, heCode: 90.2}
    vendorRank: 1
  - id: local-llama
    label: Local Llama
    description: Whatever LocalAI serves
    contextWindow: null
    interfaces: [oai-chat]
    hidden: true
"""


def test_load_yaml_catalog(tmp_path, log_events):
    path = tmp_path / "models.yaml"
    path.write_text(CATALOG_YAML, encoding="utf-8")

    catalog = load_model_catalog(path)

    assert len(catalog) == 2 and catalog.ids() == ["gpt-4o", "local-llama"]  # nosec B101
    gpt = catalog.get("gpt-4o")
    assert gpt.context_window == 128000  # nosec B101
    assert gpt.pricing.chat_in == 2.5 and gpt.benchmark.he_code == 90.2  # nosec B101
    assert gpt.supports(IF_OAI_VISION)  # nosec B101
    assert catalog.get("local-llama").context_window is None  # nosec B101
    assert [m.id for m in catalog.with_interface(IF_OAI_FN)] == ["gpt-4o"]  # nosec B101
    assert [m.id for m in catalog.visible()] == ["gpt-4o"]  # nosec B101
    assert "local-llama" in catalog and "missing" not in catalog  # nosec B101
    loaded = [e for e in log_events if e.get("event") == "catalog.loaded"]
    assert loaded and loaded[0]["models"] == 2  # nosec B101


def test_to_dict_uses_catalog_field_names(tmp_path):
    path = tmp_path / "models.json"
    entry = {
        "id": "m",
        "label": "M",
        "description": "d",
        "contextWindow": 8192,
        "interfaces": ["oai-chat"],
        "pricing": {"chatIn": 1},
    }
    path.write_text(json.dumps({"models": [entry]}), encoding="utf-8")
    model = load_model_catalog(str(path)).get("m")
    assert model.to_dict() == entry  # nosec B101


def test_bare_list_accepted():
    catalog = parse_model_catalog([{"id": "a", "label": "A", "description": "", "contextWindow": 1, "interfaces": []}])
    assert catalog.ids() == ["a"]  # nosec B101


@pytest.mark.parametrize(
    "entry, path",
    [
        ({"id": "a", "label": "A", "description": "", "interfaces": []}, "models.0.contextWindow"),
        ({"id": "a", "label": "A", "description": "", "contextWindow": 1, "interfaces": ["oai-telepathy"]}, "models.0.interfaces.0"),
    ],
)
def test_invalid_entry_rejects_catalog(entry, path):
    with pytest.raises(WireError) as info:
        parse_model_catalog({"models": [entry]}, source="inline")
    assert info.value.code is ErrorCode.SCHEMA_VIOLATION  # nosec B101
    assert info.value.path == path  # nosec B101
    assert info.value.message.startswith("inline:")  # nosec B101


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_model_catalog(tmp_path / "nope.yaml")
