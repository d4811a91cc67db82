"""Domain-specific exceptions for typed error handling at boundaries."""

from __future__ import annotations


class ConfigurationError(Exception):
    """Missing, invalid, or incomplete transport configuration.

    Raised synchronously while a transport is being constructed, before any
    mail client exists. Also raised by the transport registry for unknown
    or duplicate transport names.

    Example:
        >>> from logmail.domain.errors import ConfigurationError
        >>> err = ConfigurationError("No recipient configured (to is empty)")
        >>> str(err)
        'No recipient configured (to is empty)'
    """


class VerificationError(Exception):
    """Connectivity check against the mail endpoint failed.

    Never fatal: the transport reports it on its diagnostic logger and the
    send attempt proceeds regardless.

    Example:
        >>> from logmail.domain.errors import VerificationError
        >>> err = VerificationError("Connection refused by smtp.example.com:25")
        >>> str(err)
        'Connection refused by smtp.example.com:25'
    """


class SendError(Exception):
    """Mail delivery failed at SMTP level.

    Emitted on the transport's ``"error"`` event channel. Never raised
    across the worker-thread boundary.

    Example:
        >>> from logmail.domain.errors import SendError
        >>> err = SendError("Recipient refused: a@x.com")
        >>> str(err)
        'Recipient refused: a@x.com'
    """


__all__ = [
    "ConfigurationError",
    "SendError",
    "VerificationError",
]
