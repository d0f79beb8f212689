"""FinishReasonMapper vocabulary, extension and merge rule."""
from __future__ import annotations

import pytest

from chatwire.base.finish_reason import (
    DEFAULT_FINISH_REASONS,
    FinishReasonMapper,
    merge_finish_reason,
)
from chatwire.base.models import FinishReason


@pytest.mark.parametrize(
    "token, expected",
    [
        ("stop", FinishReason.STOP),
        ("stop_sequence", FinishReason.STOP),
        ("STOP", FinishReason.STOP),
        ("end_turn", FinishReason.STOP),
        ("eos", FinishReason.STOP),
        ("COMPLETE", FinishReason.STOP),
        ("length", FinishReason.LENGTH),
        ("MAX_TOKENS", FinishReason.LENGTH),
        ("tool_calls", FinishReason.TOOL_CALLS),
        ("function_call", FinishReason.TOOL_CALLS),
        ("content_filter", FinishReason.CONTENT_FILTER),
        ("SAFETY", FinishReason.CONTENT_FILTER),
        ("error", FinishReason.ERROR),
        ("", FinishReason.UNKNOWN),
        (None, FinishReason.UNKNOWN),
        ("recitation", FinishReason.UNKNOWN),
    ],
)
def test_default_vocabulary(token, expected):
    assert FinishReasonMapper().map(token) is expected  # nosec B101


def test_lookup_falls_back_to_case_insensitive():
    mapper = FinishReasonMapper()
    assert mapper.map("End_Turn") is FinishReason.STOP  # nosec B101
    assert mapper.is_known("Tool_Calls")  # nosec B101
    assert not mapper.is_known("recitation")  # nosec B101
    assert not mapper.is_known(None)  # nosec B101


def test_extend_returns_new_mapper():
    base = FinishReasonMapper()
    extended = base.extend({"RECITATION": FinishReason.CONTENT_FILTER, "stop": "length"})

    assert extended.map("recitation") is FinishReason.CONTENT_FILTER  # nosec B101
    assert extended.map("stop") is FinishReason.LENGTH  # nosec B101
    assert base.map("recitation") is FinishReason.UNKNOWN  # nosec B101
    assert base.map("stop") is FinishReason.STOP  # nosec B101


def test_extend_rejects_unknown_canonical_value():
    with pytest.raises(ValueError):
        FinishReasonMapper().extend({"weird": "exploded"})


def test_from_config_layers_finish_reasons():
    mapper = FinishReasonMapper.from_config({"finish_reasons": {"MAX_TOKENS_REACHED": "LENGTH"}})
    assert mapper.map("MAX_TOKENS_REACHED") is FinishReason.LENGTH  # nosec B101
    assert FinishReasonMapper.from_config(None).table() == FinishReasonMapper().table()  # nosec B101


def test_custom_table_replaces_defaults():
    mapper = FinishReasonMapper({"done": "stop"})
    assert mapper.map("done") is FinishReason.STOP  # nosec B101
    assert mapper.map("stop") is FinishReason.UNKNOWN  # nosec B101


def test_default_table_is_not_shared():
    table = FinishReasonMapper().table()
    table["stop"] = FinishReason.ERROR
    assert DEFAULT_FINISH_REASONS["stop"] is FinishReason.STOP  # nosec B101
    assert FinishReasonMapper().map("stop") is FinishReason.STOP  # nosec B101


@pytest.mark.parametrize(
    "current, new, expected",
    [
        (None, FinishReason.UNKNOWN, FinishReason.UNKNOWN),
        (FinishReason.STOP, FinishReason.UNKNOWN, FinishReason.STOP),
        (FinishReason.STOP, FinishReason.LENGTH, FinishReason.LENGTH),
        (FinishReason.UNKNOWN, FinishReason.TOOL_CALLS, FinishReason.TOOL_CALLS),
    ],
)
def test_merge_never_downgrades_to_unknown(current, new, expected):
    assert merge_finish_reason(current, new) is expected  # nosec B101
