"""Structured logging helpers."""
from __future__ import annotations

import json
import logging

from chatwire.base.logging import (
    BASE_LOGGER_NAME,
    LogContext,
    REQUIRED_NORMALIZED_KEYS,
    configure_logger,
    get_logger,
    log_event,
    normalized_log_event,
)
from chatwire.base.log_support import JsonFormatter


def test_child_loggers_propagate_to_base():
    child = get_logger("chatwire.stream")
    base = get_logger()
    assert child.propagate is True  # nosec B101
    assert child.handlers == []  # nosec B101
    assert base.name == BASE_LOGGER_NAME  # nosec B101
    assert base.propagate is False  # nosec B101


def test_log_event_merges_context_and_drops_none(log_events):
    ctx = LogContext(dialect="mistral", model="mistral-large", extra={"tenant": "t1", "skip": None})
    log_event(get_logger("chatwire.request"), "request.field.omitted", ctx, field="user", reason=None)
    assert log_events[-1] == {  # nosec B101
        "event": "request.field.omitted",
        "dialect": "mistral",
        "model": "mistral-large",
        "tenant": "t1",
        "field": "user",
        "level": "INFO",
    }


def test_log_event_respects_level(log_events):
    log_event(get_logger("chatwire.stream"), "noisy", level=logging.DEBUG)
    assert not any(e.get("event") == "noisy" for e in log_events)  # nosec B101


def test_normalized_event_always_has_required_keys(log_events):
    normalized_log_event(get_logger("chatwire.stream"), "stream.end", phase="finalize", tokens=None, extra="x")
    payload = log_events[-1]
    for key in REQUIRED_NORMALIZED_KEYS:
        if key == "error_code":
            assert key not in payload  # nosec B101
            continue
        assert key in payload  # nosec B101
    assert payload["tokens"] is None and payload["extra"] == "x"  # nosec B101


def test_normalized_event_extras_never_override(log_events):
    normalized_log_event(
        get_logger("chatwire.stream"),
        "stream.end",
        phase="finalize",
        error_code="vendor_error",
        emitted=True,
        tokens={"prompt": 1},
        phase_override="ignored",
    )
    payload = log_events[-1]
    assert payload["phase"] == "finalize"  # nosec B101
    assert payload["error_code"] == "vendor_error"  # nosec B101
    assert payload["tokens"] == {"prompt": 1}  # nosec B101


def test_json_formatter_hoists_event_payload():
    record = logging.LogRecord("chatwire.stream", logging.WARNING, __file__, 1, json.dumps({"event": "e", "k": 1}), None, None)
    line = json.loads(JsonFormatter().format(record))
    assert line["event"] == "e" and line["k"] == 1  # nosec B101
    assert line["level"] == "WARNING" and "msg" not in line  # nosec B101


def test_configure_logger_file_handler(tmp_path):
    target = tmp_path / "logs" / "wire.log"
    logger = configure_logger(file_path=str(target))
    try:
        log_event(get_logger("chatwire.stream"), "file.check", value=1)
        for handler in logger.handlers:
            handler.flush()
        assert target.exists()  # nosec B101
        assert '"file.check"' in target.read_text(encoding="utf-8")  # nosec B101
    finally:
        configure_logger(file_path=None)
    assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)  # nosec B101
