"""Pytest configuration for the chatwire test suite.

Provides chunk builders shared by the streaming tests, a structured log
collector attached to the shared ``chatwire`` logger, and isolation from
``CHATWIRE_*`` environment variables and the config file cache.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import pytest

from chatwire.base.logging import BASE_LOGGER_NAME, get_logger
from chatwire.config import clear_config_cache


class ListHandler(logging.Handler):
    """Collect decoded JSON log payloads."""

    def __init__(self) -> None:
        super().__init__(level=logging.DEBUG)
        self.events: List[Dict[str, Any]] = []

    def emit(self, record: logging.LogRecord) -> None:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            payload = {"event": None, "msg": record.getMessage()}
        payload.setdefault("level", record.levelname)
        self.events.append(payload)


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Strip chatwire environment variables and the config cache per test."""
    for name in ("CHATWIRE_CONFIG_FILE", "CHATWIRE_DIALECT", "CHATWIRE_INCLUDE_USAGE", "CHATWIRE_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture()
def log_events() -> Iterator[List[Dict[str, Any]]]:
    """Yield the list of structured events logged during the test."""
    logger = get_logger(BASE_LOGGER_NAME)
    handler = ListHandler()
    logger.addHandler(handler)
    try:
        yield handler.events
    finally:
        logger.removeHandler(handler)


def make_choice(
    delta: Optional[Dict[str, Any]] = None,
    *,
    index: Optional[int] = 0,
    finish_reason: Optional[str] = None,
) -> Dict[str, Any]:
    choice: Dict[str, Any] = {"delta": delta or {}, "finish_reason": finish_reason}
    if index is not None:
        choice["index"] = index
    return choice


def make_chunk_dict(choices: Optional[List[Dict[str, Any]]] = None, *, chunk_id: str = "chatcmpl-1", **extra: Any) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "id": chunk_id,
        "object": "chat.completion.chunk",
        "created": 1720000000,
        "model": "gpt-test",
        "choices": choices if choices is not None else [],
    }
    body.update(extra)
    return body


@pytest.fixture()
def choice() -> Callable[..., Dict[str, Any]]:
    return make_choice


@pytest.fixture()
def chunk() -> Callable[..., Dict[str, Any]]:
    return make_chunk_dict
