"""Logging adapter - lib_log_rich setup and the mail handler.

Contents:
    * :func:`.setup.init_logging` - Idempotent logging initialization
    * :class:`.handler.MailHandler` - Stdlib handler forwarding to a transport
    * :func:`.handler.attach_transport` - Adds a MailHandler to a logger
"""

from __future__ import annotations

from .handler import MailHandler, attach_transport
from .setup import init_logging

__all__ = ["MailHandler", "attach_transport", "init_logging"]
