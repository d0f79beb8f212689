"""Architecture enforcement tests for the wire normalization package.

The package is a pure transformation layer: it receives decoded JSON values
from a transport owned by the caller and hands back typed results. These
checks keep it that way.

Rules validated here:
1) No module imports an HTTP client or a vendor SDK.
2) Only the config layer reads environment variables.
3) ``chatwire.wire`` (schemas) never imports the streaming or request layers.

These tests are intentionally static-file scans to avoid import-time side
effects, and they emit clear failure messages for quick remediation.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, List

import pytest

PACKAGE_ROOT = Path(__file__).resolve().parent.parent / "chatwire"


def _iter_python_files(root: Path) -> Iterable[Path]:
    """Yield source files under ``root``, skipping caches and the test suite.

    Parameters
    ----------
    root: Path
        The directory to scan recursively.

    Yields
    ------
    Path
        Paths to ``.py`` files that ship with the package.
    """

    for path in root.rglob("*.py"):
        if "__pycache__" in path.parts or "tests" in path.relative_to(root).parts:
            continue
        yield path


def _read_text(path: Path) -> str:
    """Read a file as UTF-8, replacing undecodable bytes so the scan continues."""

    return path.read_text(encoding="utf-8", errors="replace")


def _scan(root: Path, patterns: List[str]) -> List[str]:
    offenders: List[str] = []
    compiled = [re.compile(p, re.MULTILINE) for p in patterns]
    for py in _iter_python_files(root):
        src = _read_text(py)
        offenders.extend(f"{py.relative_to(PACKAGE_ROOT.parent)}: matches {rx.pattern!r}" for rx in compiled if rx.search(src))
    return offenders


def test_no_transport_or_vendor_sdk_imports() -> None:
    """The core never performs I/O against a vendor."""

    if not PACKAGE_ROOT.is_dir():
        pytest.skip("chatwire package not found next to tests/")
    libs = ["httpx", "requests", "aiohttp", "urllib3", "openai", "anthropic", "fastapi", "uvicorn"]
    patterns = [rf"^\s*(from|import)\s+{lib}\b" for lib in libs]
    offenders = _scan(PACKAGE_ROOT, patterns)
    if offenders:
        pytest.fail("Transport and SDK imports are not allowed in chatwire:\n" + "\n".join(offenders))


def test_environment_read_only_in_config_layer() -> None:
    """Core components take explicit arguments; ``chatwire.config`` reads the environment."""

    allowed = {PACKAGE_ROOT / "config" / "__init__.py", PACKAGE_ROOT / "base" / "logging.py"}
    offenders = [
        line
        for line in _scan(PACKAGE_ROOT, [r"os\.(getenv|environ)"])
        if PACKAGE_ROOT.parent / line.split(":", 1)[0] not in allowed
    ]
    if offenders:
        pytest.fail("Environment access outside the config layer:\n" + "\n".join(offenders))


def test_wire_schemas_do_not_depend_on_processing_layers() -> None:
    """Schemas sit below the accumulator, assembler and normalizer."""

    patterns = [
        r"^\s*from\s+\.\.base\.(streaming|request_normalizer|nonstream|dialects)\b",
        r"^\s*from\s+chatwire\.base\.(streaming|request_normalizer|nonstream|dialects)\b",
    ]
    offenders = _scan(PACKAGE_ROOT / "wire", patterns)
    if offenders:
        pytest.fail("chatwire.wire must not import processing layers:\n" + "\n".join(offenders))
