"""In-memory mail client for testing.

Provides a mail client that satisfies the MailClient protocol but performs
no SMTP operations, plus a factory recording the options it was built from.

Contents:
    * :class:`MailClientSpy` - Captures verify/send calls for test assertions.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from logmail.domain.errors import SendError, VerificationError

from ..email.config import DirectOptions, ServiceOptions


def _empty_record_list() -> list[dict[str, Any]]:
    """Create an empty typed list for captured records."""
    return []


def _empty_options_list() -> list[ServiceOptions | DirectOptions]:
    """Create an empty typed list for factory calls."""
    return []


@dataclass
class MailClientSpy:
    """Captures mail client operations for test assertions.

    Each test should create its own MailClientSpy instance to avoid
    cross-test pollution. Pass :meth:`factory` as a transport's
    ``client_factory`` to have the transport use this spy as its client.

    Attributes:
        sent: Captured send_mail calls.
        verifications: Number of verify calls.
        factory_calls: Options each factory call received.
        receipt: Receipt returned by successful sends.
        should_fail: When True, send_mail raises SendError.
        fail_verify: When True, verify raises VerificationError.
        raise_exception: When set, send_mail raises this exception instead.

    Example:
        >>> spy = MailClientSpy(receipt="250 OK")
        >>> spy.send_mail(from_address="a@x.com", to="b@x.com", subject="s", text="t")
        '250 OK'
        >>> len(spy.sent)
        1
    """

    sent: list[dict[str, Any]] = field(default_factory=_empty_record_list)
    verifications: int = 0
    factory_calls: list[ServiceOptions | DirectOptions] = field(default_factory=_empty_options_list)
    receipt: str = "250 OK"
    should_fail: bool = False
    fail_verify: bool = False
    raise_exception: Exception | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def factory(self, options: ServiceOptions | DirectOptions) -> MailClientSpy:
        """Record *options* and return this spy as the built client."""
        self.factory_calls.append(options)
        return self

    def clear(self) -> None:
        """Reset captured data for next test."""
        with self._lock:
            self.sent.clear()
            self.verifications = 0
        self.factory_calls.clear()
        self.raise_exception = None

    def verify(self) -> bool:
        """Count the call; raise VerificationError when ``fail_verify`` is set."""
        with self._lock:
            self.verifications += 1
        if self.fail_verify:
            raise VerificationError("simulated verification failure")
        return True

    def send_mail(self, *, from_address: str, to: str, subject: str, text: str) -> str:
        """Record the call and return the receipt or fail based on spy state.

        Raises:
            SendError: When should_fail is True.
            Exception: If raise_exception is set, raises that exception.
        """
        with self._lock:
            self.sent.append({"from_address": from_address, "to": to, "subject": subject, "text": text})
        if self.raise_exception is not None:
            raise self.raise_exception
        if self.should_fail:
            raise SendError("simulated send failure")
        return self.receipt


__all__ = ["MailClientSpy"]
