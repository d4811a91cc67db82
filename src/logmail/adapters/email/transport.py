"""Mail transport - turns log calls into outgoing email.

A MailTransport owns one mail client for its whole lifetime and a small
worker pool. Every ``log`` call schedules a connectivity check and a send
on that pool and returns at once; outcomes surface as ``"info"`` and
``"error"`` events plus the optional completion callback.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import Executor, Future, ThreadPoolExecutor, wait
from typing import TYPE_CHECKING, Any

from logmail.domain.enums import TransportEvent
from logmail.domain.errors import SendError
from logmail.domain.rendering import compose_body

from .client import create_transport
from .config import TransportConfig, load_transport_config

if TYPE_CHECKING:
    from logmail.application.ports import CreateTransport, EventListener, LogCallback, MailClient

logger = logging.getLogger(__name__)


class MailTransport:
    """Logging transport that forwards each log call as one email.

    Args:
        options: Raw transport options or a prepared TransportConfig.
        client_factory: Builds the mail client from the chosen options
            branch. Called exactly once, after the config validated.
        executor: Pool running verify and send tasks. A private
            ThreadPoolExecutor is created when omitted; an injected
            executor is not shut down by :meth:`close`.

    Raises:
        ConfigurationError: When ``to`` is missing or any option is invalid.

    Example:
        >>> from logmail.adapters.memory import MailClientSpy
        >>> spy = MailClientSpy()
        >>> transport = MailTransport({"to": "ops@example.com"}, client_factory=spy.factory)
        >>> transport.log("error", "disk full", {"free": 0})
        >>> transport.flush()
        True
        >>> spy.sent[0]["text"]
        "disk full\\n\\n{'free': 0}"
        >>> transport.close()
    """

    def __init__(
        self,
        options: TransportConfig | Mapping[str, Any] | None = None,
        *,
        client_factory: CreateTransport = create_transport,
        executor: Executor | None = None,
    ) -> None:
        self.config = load_transport_config(options)
        self.name = self.config.name
        self.to = self.config.to
        self.from_address = self.config.from_address
        self.subject = self.config.subject
        self.level = self.config.level
        self.handle_exceptions = self.config.handle_exceptions

        self.client: MailClient = client_factory(self.config.client_options())

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=self.config.max_workers,
            thread_name_prefix=f"logmail-{self.name}",
        )
        self._listeners: dict[TransportEvent, list[EventListener]] = {event: [] for event in TransportEvent}
        # future -> token identifying the task while it runs on a worker
        self._pending: dict[Future[None], object] = {}
        self._pending_lock = threading.Lock()
        self._local = threading.local()
        self._closed = False

    def __repr__(self) -> str:
        return f"MailTransport(name={self.name!r}, to={self.to!r}, level={self.level!r})"

    # ------------------------------------------------------------------ events

    def on(self, event: TransportEvent | str, listener: EventListener) -> None:
        """Subscribe *listener* to ``"error"`` or ``"info"`` events."""
        self._listeners[TransportEvent(event)].append(listener)

    def off(self, event: TransportEvent | str, listener: EventListener) -> None:
        """Unsubscribe *listener*; unknown listeners are ignored."""
        listeners = self._listeners[TransportEvent(event)]
        if listener in listeners:
            listeners.remove(listener)

    def emit(self, event: TransportEvent | str, payload: object) -> None:
        """Deliver *payload* to every listener of *event*.

        An ``"error"`` nobody listens to is written to the diagnostic log
        instead of being dropped.
        """
        kind = TransportEvent(event)
        listeners = list(self._listeners[kind])
        if not listeners and kind is TransportEvent.ERROR:
            logger.error("Unobserved mail transport error: %s", payload, extra={"transport": self.name})
            return
        for listener in listeners:
            listener(payload)

    # --------------------------------------------------------------------- log

    def log(
        self,
        level: str,
        message: str,
        metadata: object | None = None,
        callback: LogCallback | None = None,
    ) -> None:
        """Send *message* (plus rendered *metadata*) as one email.

        *level* is informational; filtering belongs to the logging
        framework. Verification and send run concurrently on the worker
        pool; a failed verification is only reported, never blocking the
        send. *callback* runs exactly once after the send resolved.
        """
        body = compose_body(message, metadata)
        try:
            self._submit(self._verify)
            self._submit(self._send, level, body, callback)
        except RuntimeError as exc:
            failure = SendError(f"Mail transport {self.name!r} cannot schedule delivery: {exc}")
            self._report(failure, None, callback)

    def _submit(self, task: Any, *args: Any) -> None:
        if self._closed:
            raise RuntimeError("transport is closed")
        token = object()
        future: Future[None] = self._executor.submit(self._run, token, task, *args)
        with self._pending_lock:
            self._pending[future] = token
        future.add_done_callback(self._forget)

    def _run(self, token: object, task: Any, *args: Any) -> None:
        self._local.token = token
        try:
            task(*args)
        finally:
            self._local.token = None

    def _forget(self, future: Future[None]) -> None:
        with self._pending_lock:
            self._pending.pop(future, None)
        if not future.cancelled() and future.exception() is not None:
            logger.error("Mail transport task failed", exc_info=future.exception(), extra={"transport": self.name})

    def _verify(self) -> None:
        try:
            self.client.verify()
        except Exception as exc:
            logger.error("Cannot verify mail server connection: %s", exc, extra={"transport": self.name})

    def _send(self, level: str, body: str, callback: LogCallback | None) -> None:
        try:
            receipt = self.client.send_mail(
                from_address=self.from_address,
                to=self.to,
                subject=self.subject,
                text=body,
            )
        except Exception as exc:
            logger.debug("Log mail delivery failed", exc_info=True, extra={"transport": self.name, "level": level})
            self._report(exc, None, callback)
        else:
            self._report(None, receipt, callback)

    def _report(self, error: BaseException | None, receipt: str | None, callback: LogCallback | None) -> None:
        try:
            if error is not None:
                self.emit(TransportEvent.ERROR, error)
            else:
                self.emit(TransportEvent.INFO, receipt)
        finally:
            if callback is not None:
                if error is not None and self.config.report_failures_to_callback:
                    callback(error, False)
                else:
                    callback(None, True)

    # --------------------------------------------------------------- lifecycle

    def flush(self, timeout: float | None = None) -> bool:
        """Wait for in-flight verify and send tasks.

        Called from a listener or callback, the task running that listener
        is not waited for.

        Returns:
            True when every awaited task finished within *timeout*.
        """
        current = getattr(self._local, "token", None)
        with self._pending_lock:
            pending = [future for future, token in self._pending.items() if token is not current]
        if not pending:
            return True
        _, not_done = wait(pending, timeout=timeout)
        return not not_done

    def close(self) -> None:
        """Finish in-flight work and stop accepting log calls. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self.flush()
        if self._owns_executor:
            # a worker cannot join its own pool
            in_worker = getattr(self._local, "token", None) is not None
            self._executor.shutdown(wait=not in_worker)


__all__ = ["MailTransport"]
