"""In-memory adapter implementations for testing.

Provides lightweight implementations of the application ports that operate
entirely in memory -- no filesystem, no SMTP, no logging framework.

Contents:
    * :mod:`.config` - In-memory configuration adapters
    * :mod:`.email` - In-memory mail client (MailClientSpy class)
    * :mod:`.logging` - In-memory logging adapter
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import config_from_mapping, get_config_in_memory
from .email import MailClientSpy
from .logging import init_logging_in_memory

# Static conformance assertions
if TYPE_CHECKING:
    from logmail.application.ports import CreateTransport, GetConfig, InitLogging, MailClient

    _assert_get_config: GetConfig = get_config_in_memory
    _assert_init_logging: InitLogging = init_logging_in_memory
    _assert_client: MailClient = MailClientSpy()
    _assert_factory: CreateTransport = MailClientSpy().factory

__all__ = [
    "MailClientSpy",
    "config_from_mapping",
    "get_config_in_memory",
    "init_logging_in_memory",
]
