"""Application ports: Protocol definitions the adapters plug into.

The logging handler and the transport registry depend on these protocols
only. Concrete adapters (SMTP client, in-memory spy, ``MailTransport``)
satisfy them through structural subtyping (PEP 544).

System Role:
    Sits between domain and adapters. Infrastructure types (``Config``,
    option dataclasses) are imported under ``TYPE_CHECKING`` only.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from lib_layered_config import Config

    from ..adapters.email.config import DirectOptions, ServiceOptions


class MailClient(Protocol):
    """Capability that checks connectivity and hands one message to a server."""

    def verify(self) -> bool: ...

    def send_mail(self, *, from_address: str, to: str, subject: str, text: str) -> str: ...


class CreateTransport(Protocol):
    """Build a mail client from service-mode or direct-mode options."""

    def __call__(self, options: ServiceOptions | DirectOptions) -> MailClient: ...


class LogCallback(Protocol):
    """Completion callback invoked once per ``log`` call."""

    def __call__(self, error: BaseException | None, logged: bool) -> None: ...


class EventListener(Protocol):
    """Observer attached to a transport event."""

    def __call__(self, payload: object) -> None: ...


class LogTransport(Protocol):
    """Pluggable sink a logging framework forwards log events to."""

    name: str
    level: str
    handle_exceptions: bool

    def log(
        self,
        level: str,
        message: str,
        metadata: object | None = ...,
        callback: LogCallback | None = ...,
    ) -> None: ...

    def flush(self, timeout: float | None = ...) -> bool: ...

    def close(self) -> None: ...


class TransportFactory(Protocol):
    """Create a transport from raw options (used by the registry)."""

    def __call__(self, options: Mapping[str, Any] | None) -> LogTransport: ...


class GetConfig(Protocol):
    """Load layered configuration with application defaults."""

    def __call__(self, *, profile: str | None = ..., start_dir: str | None = ...) -> Config: ...


class InitLogging(Protocol):
    """Initialize lib_log_rich runtime with the provided configuration."""

    def __call__(self, config: Config) -> None: ...


__all__ = [
    "CreateTransport",
    "EventListener",
    "GetConfig",
    "InitLogging",
    "LogCallback",
    "LogTransport",
    "MailClient",
    "TransportFactory",
]
