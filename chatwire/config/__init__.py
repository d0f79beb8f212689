"""Unified configuration layer for the wire normalizer.

Goals
-----
* Centralize defaults (dialect, stream usage reporting).
* Merge sources in a predictable order (later wins):
    1. Built-in defaults
    2. Optional external config file (JSON or YAML) pointed to by CHATWIRE_CONFIG_FILE
    3. Environment variables (CHATWIRE_DIALECT, CHATWIRE_INCLUDE_USAGE)
    4. In-code overrides passed to the helper
* Provide a single call site: ``get_wire_config()``.

Core components never read the environment themselves; they take explicit
arguments and expose ``from_config`` constructors fed by this module.

External Config File
--------------------
JSON is tried first, then YAML. Structure example:

```
dialect: mistral
include_usage: true
finish_reasons:
  MAX_TOKENS_REACHED: length
dialects:
  localai:
    unsupported_fields: [parallel_tool_calls, stream_options, user, seed]
```
"""
from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .defaults import (
    CONFIG_FILE_ENV,
    DEFAULT_DIALECT,
    DEFAULT_INCLUDE_USAGE,
    DIALECT_ENV,
    INCLUDE_USAGE_ENV,
)


DEFAULTS: Dict[str, Any] = {
    "dialect": DEFAULT_DIALECT,
    "include_usage": DEFAULT_INCLUDE_USAGE,
    "finish_reasons": {},
    "dialects": {},
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

_FILE_CACHE: Dict[str, Dict[str, Any]] = {}


def _parse_config_text(text: str) -> Dict[str, Any]:
    """Parse JSON, falling back to YAML; non-mapping documents yield ``{}``."""
    try:
        data = json.loads(text)
    except ValueError:
        data = yaml.safe_load(text)
    return data if isinstance(data, dict) else {}


def load_config_file(path: Optional[str] = None) -> Dict[str, Any]:
    """Load (and cache) the external config file.

    ``path`` defaults to ``$CHATWIRE_CONFIG_FILE``. A missing variable or
    file yields ``{}``. Malformed YAML raises ``yaml.YAMLError`` so a broken
    config is noticed rather than silently ignored.
    """
    path = path or os.getenv(CONFIG_FILE_ENV)
    if not path:
        return {}
    if path in _FILE_CACHE:
        return _FILE_CACHE[path]
    p = Path(path)
    if not p.is_file():
        _FILE_CACHE[path] = {}
        return {}
    data = _parse_config_text(p.read_text(encoding="utf-8"))
    _FILE_CACHE[path] = data
    return data


def clear_config_cache() -> None:
    """Forget cached config files (tests and long-lived processes)."""
    _FILE_CACHE.clear()


def _parse_bool(value: str) -> Optional[bool]:
    v = value.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return None


def _env_overrides() -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if dialect := os.getenv(DIALECT_ENV, "").strip():
        out["dialect"] = dialect.lower()
    raw_usage = os.getenv(INCLUDE_USAGE_ENV)
    if raw_usage is not None:
        parsed = _parse_bool(raw_usage)
        if parsed is not None:
            out["include_usage"] = parsed
    return out


def _merge(base: Dict[str, Any], layer: Dict[str, Any]) -> None:
    """Merge ``layer`` into ``base``; nested mappings merge one level deep."""
    for key, value in layer.items():
        if value is None:
            continue
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            base[key] = {**base[key], **value}
        else:
            base[key] = value


def get_wire_config(overrides: Optional[Dict[str, Any]] = None, *, config_file: Optional[str] = None) -> Dict[str, Any]:
    """Return the merged wire configuration.

    Merge order (later wins): defaults -> config file -> env vars -> overrides.
    """
    cfg: Dict[str, Any] = copy.deepcopy(DEFAULTS)
    _merge(cfg, load_config_file(config_file))
    _merge(cfg, _env_overrides())
    if overrides:
        _merge(cfg, overrides)
    cfg["dialect"] = str(cfg.get("dialect") or DEFAULT_DIALECT).lower()
    return cfg


__all__ = [
    "DEFAULTS",
    "get_wire_config",
    "load_config_file",
    "clear_config_cache",
]
