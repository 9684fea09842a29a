"""Environment helper utilities.

Provides functions for parsing environment variables used by the
configuration modules.
"""

from __future__ import annotations

import os
from pathlib import Path


def env_flag(name: str, default: bool) -> bool:
    """Return True/False for typical truthy env encodings."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def env_path(name: str, default: str) -> Path:
    """Return an env-provided path with ``~`` expanded."""
    value = os.getenv(name) or default
    return Path(value).expanduser()


__all__ = ["env_flag", "env_path"]
