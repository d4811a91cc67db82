"""Composition root - explicit transport registration.

Nothing registers itself at import time. An application builds a
registry at startup (``build_production()``), optionally registers more
transport types, then creates transports by name and attaches them to
its loggers.

Example:
    >>> from logmail.adapters.memory import MailClientSpy
    >>> spy = MailClientSpy()
    >>> registry = build_testing(spy=spy)
    >>> registry.names()
    ['mail']
    >>> transport = registry.create("mail", {"to": "ops@example.com"})
    >>> transport.name
    'mail'
    >>> transport.close()
"""

from __future__ import annotations

from collections.abc import Mapping
from functools import partial
from typing import TYPE_CHECKING, Any

from ..adapters.email.client import create_transport
from ..adapters.email.transport import MailTransport
from ..domain.errors import ConfigurationError

if TYPE_CHECKING:
    from ..adapters.memory.email import MailClientSpy
    from ..application.ports import CreateTransport, LogTransport, TransportFactory

    _assert_create_transport: CreateTransport = create_transport
    _assert_mail_transport: TransportFactory = MailTransport

MAIL_TRANSPORT_NAME = "mail"


class TransportRegistry:
    """Named transport types a logging setup can instantiate.

    Example:
        >>> registry = TransportRegistry()
        >>> "mail" in registry
        False
    """

    def __init__(self) -> None:
        self._factories: dict[str, TransportFactory] = {}

    def __contains__(self, name: object) -> bool:
        return name in self._factories

    def names(self) -> list[str]:
        """Registered transport names in registration order."""
        return list(self._factories)

    def register(self, name: str, factory: TransportFactory) -> None:
        """Register *factory* under *name*.

        Raises:
            ConfigurationError: When *name* is already registered.
        """
        if name in self._factories:
            raise ConfigurationError(f"Transport {name!r} is already registered")
        self._factories[name] = factory

    def create(self, name: str, options: Mapping[str, Any] | None = None) -> LogTransport:
        """Instantiate the transport registered as *name*.

        Raises:
            ConfigurationError: When *name* is unknown, or the transport
                rejects *options*.
        """
        try:
            factory = self._factories[name]
        except KeyError:
            known = ", ".join(self._factories) or "none"
            raise ConfigurationError(f"Unknown transport {name!r} (registered: {known})") from None
        return factory(options)


def register_mail_transport(
    registry: TransportRegistry,
    *,
    client_factory: CreateTransport = create_transport,
    name: str = MAIL_TRANSPORT_NAME,
) -> None:
    """Register :class:`MailTransport` on *registry* under *name*."""
    registry.register(name, partial(MailTransport, client_factory=client_factory))


def build_production() -> TransportRegistry:
    """Registry whose mail transport delivers over SMTP."""
    registry = TransportRegistry()
    register_mail_transport(registry)
    return registry


def build_testing(*, spy: MailClientSpy | None = None) -> TransportRegistry:
    """Registry whose mail transport records sends in a MailClientSpy.

    Args:
        spy: Optional MailClientSpy capturing client operations. When None,
            a fresh MailClientSpy is created.
    """
    from ..adapters.memory import MailClientSpy

    mail_spy = spy if spy is not None else MailClientSpy()
    registry = TransportRegistry()
    register_mail_transport(registry, client_factory=mail_spy.factory)
    return registry


__all__ = [
    "MAIL_TRANSPORT_NAME",
    "TransportRegistry",
    "build_production",
    "build_testing",
    "register_mail_transport",
]
