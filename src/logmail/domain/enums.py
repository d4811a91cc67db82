"""Type-safe domain enums for transport events and log levels."""

from __future__ import annotations

import logging
from enum import Enum


class TransportEvent(str, Enum):
    """Events emitted on a transport's own event channel.

    Attributes:
        ERROR: A send attempt failed; payload is the exception.
        INFO: A send attempt succeeded; payload is the mail client receipt.

    Example:
        >>> TransportEvent.ERROR.value
        'error'
        >>> TransportEvent.INFO == "info"
        True
    """

    ERROR = "error"
    INFO = "info"


_LEVEL_NUMBERS: dict[str, int] = {
    "silly": 5,
    "debug": logging.DEBUG,
    "verbose": 15,
    "http": 18,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class LogLevel(str, Enum):
    """Severity names a transport accepts as its minimum level.

    Covers the stdlib names plus the npm-style names (``silly``,
    ``verbose``, ``http``, ``warn``) that log shippers commonly use.

    Example:
        >>> LogLevel.parse("ERROR")
        <LogLevel.ERROR: 'error'>
        >>> LogLevel.parse("warn").logging_level
        30
        >>> LogLevel.parse("verbose").logging_level
        15
    """

    SILLY = "silly"
    DEBUG = "debug"
    VERBOSE = "verbose"
    HTTP = "http"
    INFO = "info"
    WARN = "warn"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"

    @property
    def logging_level(self) -> int:
        """Numeric level understood by :mod:`logging`."""
        return _LEVEL_NUMBERS[self.value]

    @classmethod
    def parse(cls, name: str) -> LogLevel:
        """Return the level for *name*, ignoring case and surrounding blanks.

        Raises:
            ValueError: When *name* is not a known level.
        """
        normalized = name.strip().lower()
        try:
            return cls(normalized)
        except ValueError:
            known = ", ".join(level.value for level in cls)
            raise ValueError(f"unknown log level {name!r} (expected one of: {known})") from None


__all__ = ["LogLevel", "TransportEvent"]
