"""In-memory configuration adapter for testing.

Returns configuration built from a plain dictionary instead of reading the
layered files from disk.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lib_layered_config import Config


def get_config_in_memory(
    *,
    profile: str | None = None,
    start_dir: str | None = None,
) -> Config:
    """Return an empty in-memory Config."""
    return Config({}, {})


def config_from_mapping(data: Mapping[str, Any]) -> Config:
    """Wrap *data* in a Config without touching the filesystem."""
    return Config(dict(data), {})


__all__ = ["config_from_mapping", "get_config_in_memory"]
