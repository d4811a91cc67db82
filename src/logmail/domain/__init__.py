"""Domain layer - pure types with no I/O.

Contents:
    * :mod:`.errors` - Typed exceptions raised at the boundaries
    * :mod:`.enums` - Transport event names and log level names
    * :mod:`.rendering` - Mail body composition
"""

from __future__ import annotations

from .enums import LogLevel, TransportEvent
from .errors import ConfigurationError, SendError, VerificationError
from .rendering import compose_body, render_metadata

__all__ = [
    "ConfigurationError",
    "LogLevel",
    "SendError",
    "TransportEvent",
    "VerificationError",
    "compose_body",
    "render_metadata",
]
