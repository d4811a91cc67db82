"""SMTP mail client and its factory.

Provides the production MailClient: one short SMTP session per verify or
send call, implicit TLS or opportunistic STARTTLS, optional login.

Contents:
    * :class:`SmtpMailClient` - ``verify``/``send_mail`` over smtplib
    * :func:`create_transport` - Builds a client from service or direct options
"""

from __future__ import annotations

import logging
import smtplib
from collections.abc import Iterator
from contextlib import contextmanager
from email.message import EmailMessage
from email.utils import formatdate, make_msgid

from logmail.domain.errors import ConfigurationError, SendError, VerificationError

from .config import DEFAULT_TIMEOUT_MS, DirectOptions, ServiceOptions
from .services import resolve_service

logger = logging.getLogger(__name__)

DEFAULT_HOST = "localhost"

# Keywords that may indicate sensitive data in exception messages
_SENSITIVE_KEYWORDS = frozenset(
    {
        "password",
        "credential",
        "auth",
        "secret",
        "token",
        "login",
    }
)


def _sanitize_exception_message(exc: BaseException, fallback: str) -> str:
    """Return *fallback* when the exception text may carry credentials.

    Example:
        >>> _sanitize_exception_message(OSError("Connection refused"), "failed")
        'Connection refused'
        >>> _sanitize_exception_message(OSError("535 Auth password rejected"), "failed")
        'failed'
    """
    message = str(exc)
    if any(keyword in message.lower() for keyword in _SENSITIVE_KEYWORDS):
        return fallback
    return message


class SmtpMailClient:
    """Mail client speaking SMTP through :mod:`smtplib`.

    Each call opens its own connection, so one client may be shared by
    several worker threads.

    Example:
        >>> client = SmtpMailClient(host="smtp.example.com", port=587)
        >>> client.endpoint
        'smtp.example.com:587'
    """

    def __init__(
        self,
        *,
        host: str = DEFAULT_HOST,
        port: int = 25,
        secure: bool = False,
        timeout: int = DEFAULT_TIMEOUT_MS,
        username: str | None = None,
        password: str | None = None,
    ) -> None:
        self.host = host
        self.port = port
        self.secure = secure
        self.timeout = timeout
        self.username = username
        self._password = password

    @property
    def endpoint(self) -> str:
        return f"{self.host}:{self.port}"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000

    @contextmanager
    def _session(self) -> Iterator[smtplib.SMTP]:
        """Open an SMTP session, upgrade it to TLS and log in when possible."""
        smtp_class = smtplib.SMTP_SSL if self.secure else smtplib.SMTP
        with smtp_class(self.host, self.port, timeout=self.timeout_seconds) as smtp:
            if not self.secure:
                smtp.ehlo()
                if smtp.has_extn("starttls"):
                    smtp.starttls()
                    smtp.ehlo()
            if self.username is not None and self._password is not None:
                smtp.login(self.username, self._password)
            yield smtp

    def verify(self) -> bool:
        """Check that the server accepts a connection (and login).

        Raises:
            VerificationError: When connecting, upgrading or logging in fails.
        """
        try:
            with self._session() as smtp:
                smtp.noop()
        except (smtplib.SMTPException, OSError) as exc:
            logger.debug("SMTP verification failed", exc_info=True)
            message = _sanitize_exception_message(exc, "Check SMTP credentials.")
            raise VerificationError(f"Cannot verify {self.endpoint}: {message}") from exc
        return True

    def send_mail(self, *, from_address: str, to: str, subject: str, text: str) -> str:
        """Send one plain-text message and return its Message-ID as receipt.

        Raises:
            SendError: When the server rejects the message or any recipient,
                or the connection fails.
        """
        message = EmailMessage()
        message["From"] = from_address
        message["To"] = to
        message["Subject"] = subject
        message["Date"] = formatdate(localtime=True)
        message_id = make_msgid(domain=from_address.rpartition("@")[2].rstrip(">") or self.host)
        message["Message-ID"] = message_id
        message.set_content(text)

        logger.info(
            "Sending log mail",
            extra={"endpoint": self.endpoint, "sender": from_address, "recipients": to, "subject": subject},
        )

        try:
            with self._session() as smtp:
                refused = smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.debug("SMTP delivery failed", exc_info=True)
            detail = _sanitize_exception_message(exc, "Check SMTP configuration.")
            raise SendError(f"Mail delivery via {self.endpoint} failed: {detail}") from exc

        if refused:
            raise SendError(f"Some recipients were refused: {', '.join(sorted(refused))}")

        logger.info("Log mail sent", extra={"endpoint": self.endpoint, "message_id": message_id})
        return message_id


def create_transport(options: ServiceOptions | DirectOptions) -> SmtpMailClient:
    """Build an SMTP client from exactly one configuration branch.

    Args:
        options: Service-mode options (named provider preset plus
            credentials) or direct-mode options (host, port, TLS, timeout).

    Returns:
        Client bound to the resolved endpoint.

    Raises:
        ConfigurationError: When a service name matches no known preset.

    Example:
        >>> client = create_transport(ServiceOptions(service="Gmail", username="u", password="p"))
        >>> (client.endpoint, client.secure)
        ('smtp.gmail.com:465', True)
        >>> create_transport(DirectOptions()).endpoint
        'localhost:25'
    """
    if isinstance(options, ServiceOptions):
        preset = resolve_service(options.service)
        if preset is None:
            raise ConfigurationError(f"Unknown mail service {options.service!r}")
        return SmtpMailClient(
            host=preset.host,
            port=preset.port,
            secure=preset.secure,
            username=options.username,
            password=options.password,
        )
    return SmtpMailClient(
        host=options.host or DEFAULT_HOST,
        port=options.port,
        secure=options.secure,
        timeout=options.timeout,
    )


__all__ = ["DEFAULT_HOST", "SmtpMailClient", "create_transport"]
