"""MailHandler stories: records become transport log calls."""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from types import TracebackType
from typing import Any

import pytest

from logmail.adapters.email.transport import MailTransport
from logmail.adapters.logging.handler import MailHandler, attach_transport
from logmail.adapters.memory import MailClientSpy


class TransportStub:
    """Minimal LogTransport recording every call."""

    def __init__(self, *, level: str = "error", name: str = "mail", handle_exceptions: bool = False) -> None:
        self.level = level
        self.name = name
        self.handle_exceptions = handle_exceptions
        self.logged: list[tuple[str, str, Any]] = []
        self.flushed = 0
        self.closed = 0

    def log(self, level: str, message: str, metadata: Any = None, callback: Any = None) -> None:
        self.logged.append((level, message, metadata))

    def flush(self, timeout: float | None = None) -> bool:
        self.flushed += 1
        return True

    def close(self) -> None:
        self.closed += 1


@pytest.fixture
def app_logger() -> Iterator[logging.Logger]:
    """An isolated application logger cleaned up after the test."""
    logger = logging.getLogger("tests.mailhandler.app")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.os_agnostic
def test_handler_level_follows_transport_level() -> None:
    """The transport's level name becomes the handler threshold."""
    assert MailHandler(TransportStub(level="warn")).level == logging.WARNING
    assert MailHandler(TransportStub(level="silly")).level == 5


@pytest.mark.os_agnostic
def test_handler_is_named_after_transport() -> None:
    """Handlers can be found by their transport name."""
    assert MailHandler(TransportStub(name="ops-mail")).get_name() == "ops-mail"


@pytest.mark.os_agnostic
def test_records_at_or_above_level_are_forwarded(app_logger: logging.Logger) -> None:
    """The logging framework filters; the handler forwards the rest."""
    stub = TransportStub(level="error")
    attach_transport(app_logger, stub)

    app_logger.warning("ignored")
    app_logger.error("disk %s", "full")
    app_logger.critical("down")

    assert stub.logged == [("error", "disk full", None), ("critical", "down", None)]


@pytest.mark.os_agnostic
def test_meta_extra_travels_as_metadata(app_logger: logging.Logger) -> None:
    """``extra={"meta": ...}`` becomes the transport metadata."""
    stub = TransportStub()
    attach_transport(app_logger, stub)

    app_logger.error("boom", extra={"meta": {"code": 1}})

    assert stub.logged == [("error", "boom", {"code": 1})]


@pytest.mark.os_agnostic
def test_own_package_records_are_not_forwarded() -> None:
    """Diagnostics of this package never loop back into the transport."""
    stub = TransportStub()
    handler = MailHandler(stub)
    record = logging.LogRecord("logmail.adapters.email.transport", logging.ERROR, __file__, 1, "failed", None, None)

    handler.handle(record)

    assert stub.logged == []


@pytest.mark.os_agnostic
def test_similarly_named_loggers_are_forwarded() -> None:
    """Only the package's own namespace is filtered."""
    stub = TransportStub()
    handler = MailHandler(stub)
    record = logging.LogRecord("logmailer", logging.ERROR, __file__, 1, "kept", None, None)

    handler.handle(record)

    assert stub.logged == [("error", "kept", None)]


@pytest.mark.os_agnostic
def test_transport_failure_goes_to_handle_error(monkeypatch: pytest.MonkeyPatch) -> None:
    """A raising transport never breaks the logging call."""
    stub = TransportStub()
    handler = MailHandler(stub)
    seen: list[logging.LogRecord] = []
    monkeypatch.setattr(handler, "handleError", seen.append)

    def _explode(*_args: Any, **_kwargs: Any) -> None:
        raise RuntimeError("transport bug")

    monkeypatch.setattr(stub, "log", _explode)
    record = logging.LogRecord("app", logging.ERROR, __file__, 1, "boom", None, None)

    handler.handle(record)

    assert len(seen) == 1


@pytest.mark.os_agnostic
def test_flush_and_close_reach_the_transport() -> None:
    """Handler lifecycle drives the transport lifecycle."""
    stub = TransportStub()
    handler = MailHandler(stub)

    handler.flush()
    handler.close()

    assert stub.flushed == 1
    assert stub.closed == 1


@pytest.mark.os_agnostic
def test_end_to_end_logger_to_mail(
    app_logger: logging.Logger, make_transport: Callable[..., MailTransport], mail_spy: MailClientSpy
) -> None:
    """A logged error arrives as one mail with its metadata."""
    transport = make_transport(to="ops@example.com", subject="Alert")
    handler = attach_transport(app_logger, transport)

    app_logger.info("too quiet")
    app_logger.error("disk full", extra={"meta": {"free": 0}})
    handler.flush()

    assert [mail["text"] for mail in mail_spy.sent] == ["disk full\n\n{'free': 0}"]
    assert mail_spy.sent[0]["subject"] == "Alert"


# ======================== Uncaught exceptions ========================


@pytest.mark.os_agnostic
def test_handle_exceptions_logs_uncaught_errors(app_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    """Uncaught exceptions are logged at CRITICAL, then the previous hook runs."""
    previous_calls: list[type[BaseException]] = []

    def _previous(
        exc_type: type[BaseException], _exc: BaseException, _tb: TracebackType | None
    ) -> None:
        previous_calls.append(exc_type)

    monkeypatch.setattr(sys, "excepthook", _previous)
    stub = TransportStub(handle_exceptions=True)
    attach_transport(app_logger, stub)

    error = ValueError("unhandled")
    sys.excepthook(ValueError, error, None)

    assert stub.logged[0][0] == "critical"
    assert stub.logged[0][1].startswith("Uncaught exception")
    assert previous_calls == [ValueError]


@pytest.mark.os_agnostic
def test_keyboard_interrupt_is_not_mailed(app_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch) -> None:
    """Ctrl-C is a user action, not an error report."""
    monkeypatch.setattr(sys, "excepthook", lambda *_args: None)
    stub = TransportStub(handle_exceptions=True)
    attach_transport(app_logger, stub)

    sys.excepthook(KeyboardInterrupt, KeyboardInterrupt(), None)

    assert stub.logged == []


@pytest.mark.os_agnostic
def test_excepthook_untouched_without_handle_exceptions(
    app_logger: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Only opted-in transports take over uncaught exceptions."""

    def _sentinel(*_args: object) -> None:
        return None

    monkeypatch.setattr(sys, "excepthook", _sentinel)
    attach_transport(app_logger, TransportStub())

    assert sys.excepthook is _sentinel
