"""Bridge from the stdlib logging pipeline to a log transport.

Contents:
    * :class:`MailHandler` - ``logging.Handler`` forwarding records to a transport
    * :func:`attach_transport` - Wires a transport into a logger
"""

from __future__ import annotations

import logging
import sys
from types import TracebackType
from typing import TYPE_CHECKING

from logmail.domain.enums import LogLevel

if TYPE_CHECKING:
    from logmail.application.ports import LogTransport

METADATA_ATTRIBUTE = "meta"

_PACKAGE_LOGGER = __name__.partition(".")[0]


class MailHandler(logging.Handler):
    """Logging handler that hands each record to a LogTransport.

    The handler level comes from the transport's configured level, so the
    logging framework decides which records reach the transport. Metadata
    is taken from ``record.meta``, set via ``extra={"meta": ...}``.

    Records from this package's own loggers are dropped; otherwise a failed
    delivery would be reported by mail through the same failing transport.

    Example:
        >>> from logmail.adapters.email.transport import MailTransport
        >>> from logmail.adapters.memory import MailClientSpy
        >>> spy = MailClientSpy()
        >>> transport = MailTransport({"to": "ops@example.com", "level": "warn"}, client_factory=spy.factory)
        >>> handler = MailHandler(transport)
        >>> logging.getLevelName(handler.level)
        'WARNING'
        >>> handler.close()
    """

    def __init__(self, transport: LogTransport) -> None:
        super().__init__(level=LogLevel.parse(transport.level).logging_level)
        self.transport = transport
        self.set_name(transport.name)
        self.addFilter(self._skip_own_records)

    @staticmethod
    def _skip_own_records(record: logging.LogRecord) -> bool:
        return record.name != _PACKAGE_LOGGER and not record.name.startswith(f"{_PACKAGE_LOGGER}.")

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            metadata = getattr(record, METADATA_ATTRIBUTE, None)
            self.transport.log(record.levelname.lower(), message, metadata)
        except Exception:
            self.handleError(record)

    def flush(self) -> None:
        self.transport.flush()

    def close(self) -> None:
        try:
            self.transport.close()
        finally:
            super().close()


def _install_excepthook(logger: logging.Logger) -> None:
    """Log uncaught exceptions at CRITICAL, then defer to the previous hook."""
    previous = sys.excepthook

    def _log_uncaught(
        exc_type: type[BaseException],
        exc_value: BaseException,
        exc_traceback: TracebackType | None,
    ) -> None:
        if not issubclass(exc_type, KeyboardInterrupt):
            logger.critical("Uncaught exception", exc_info=(exc_type, exc_value, exc_traceback))
        previous(exc_type, exc_value, exc_traceback)

    sys.excepthook = _log_uncaught


def attach_transport(logger: logging.Logger, transport: LogTransport) -> MailHandler:
    """Route *logger*'s records to *transport*.

    When the transport is configured with ``handle_exceptions``, uncaught
    exceptions are additionally logged to *logger* at CRITICAL before the
    previously installed ``sys.excepthook`` runs.

    Args:
        logger: Logger whose records (and those of its children) should be mailed.
        transport: Transport receiving the records.

    Returns:
        The handler added to *logger*, e.g. for later removal.
    """
    handler = MailHandler(transport)
    logger.addHandler(handler)
    if transport.handle_exceptions:
        _install_excepthook(logger)
    return handler


__all__ = ["METADATA_ATTRIBUTE", "MailHandler", "attach_transport"]
