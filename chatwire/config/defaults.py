"""chatwire.config.defaults
=========================

Central place for small, stable default values used across the wire layer.
These can be overridden through :func:`chatwire.config.get_wire_config`, but
provide sensible fallbacks for library use and tests.

This module intentionally avoids importing from other chatwire packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Environment variable names (config layer only) ----
CONFIG_FILE_ENV = "CHATWIRE_CONFIG_FILE"
DIALECT_ENV = "CHATWIRE_DIALECT"
INCLUDE_USAGE_ENV = "CHATWIRE_INCLUDE_USAGE"

# ---- Request defaults ----
# Dialect used when neither configuration nor the caller names one.
DEFAULT_DIALECT = "openai"
# Multi-completion is not uniformly supported; ask for one choice unless told otherwise.
DEFAULT_N = 1
# Request a trailing usage chunk on streams when the dialect allows it.
DEFAULT_INCLUDE_USAGE = True
# Function/tool names: letters, digits, underscore, hyphen, 1-64 chars.
TOOL_NAME_PATTERN = r"^[a-zA-Z0-9_-]{1,64}$"

# ---- Stream defaults ----
# Sentinel line that ends an OpenAI-style SSE stream (owned by the transport,
# but accepted by the assembler when forwarded as-is).
DONE_SENTINEL = "[DONE]"
# Object tags observed on streaming chunks: the nominal one, Perplexity's
# misnomer, and Azure's empty tag on the prompt-filter packet.
CHUNK_OBJECT_TAGS = ("chat.completion.chunk", "chat.completion", "")
# Cap on characters of a vendor message copied into logs and errors.
MAX_ERROR_MESSAGE_CHARS = 260


__all__ = [
    "CONFIG_FILE_ENV",
    "DIALECT_ENV",
    "INCLUDE_USAGE_ENV",
    "DEFAULT_DIALECT",
    "DEFAULT_N",
    "DEFAULT_INCLUDE_USAGE",
    "TOOL_NAME_PATTERN",
    "DONE_SENTINEL",
    "CHUNK_OBJECT_TAGS",
    "MAX_ERROR_MESSAGE_CHARS",
]
