"""Static package metadata and layered-configuration identifiers.

Kept in sync with ``pyproject.toml``; read by the logging and
configuration adapters.
"""

from __future__ import annotations

name = "logmail"
title = "Logging transport that delivers log records by email"
version = "1.0.0"

# lib_layered_config identifiers for platform-specific config paths
LAYEREDCONF_VENDOR = "bitranox"
LAYEREDCONF_APP = "logmail"
LAYEREDCONF_SLUG = "logmail"


def print_info() -> None:
    """Print the package metadata."""
    fields = (
        ("name", name),
        ("title", title),
        ("version", version),
    )
    width = max(len(label) for label, _ in fields)
    print(f"Info for {name}:\n")
    for label, value in fields:
        print(f"    {label.ljust(width)} = {value}")


__all__ = [
    "LAYEREDCONF_APP",
    "LAYEREDCONF_SLUG",
    "LAYEREDCONF_VENDOR",
    "name",
    "print_info",
    "title",
    "version",
]
