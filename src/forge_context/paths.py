"""Configuration resolution.

Resolves optional overrides from environment variables, falls back to
conventional defaults.

Environment variables:
    FORGE_CONTEXT_TAXONOMY — YAML keyword taxonomy (default: built-in tables)
    FORGE_CONTEXT_TARGET — instruction file to sync (default: AGENTS.md)
"""

from __future__ import annotations

import os
from pathlib import Path

_DEFAULT_TARGET = "AGENTS.md"


def taxonomy_path() -> Path | None:
    """Return the taxonomy override path, or None for the built-in tables."""
    env = os.environ.get("FORGE_CONTEXT_TAXONOMY")
    if env:
        return Path(env).expanduser()
    return None


def default_target() -> str:
    """Return the default instruction filename."""
    return os.environ.get("FORGE_CONTEXT_TARGET", _DEFAULT_TARGET)
