"""Public package surface: the mail transport and its logging integration.

Routes imports through the architectural layers:
- Domain exports: errors, event and level names, body composition
- Adapter exports: transport, config, SMTP client, logging handler
- Composition exports: transport registry
- Metadata: package information
"""

from __future__ import annotations

# Metadata
from .__init__conf__ import print_info

# Adapter exports
from .adapters.config import get_config
from .adapters.email import (
    DirectOptions,
    MailTransport,
    ServiceOptions,
    SmtpMailClient,
    TransportConfig,
    create_transport,
    load_transport_config,
    load_transport_config_from_dict,
)
from .adapters.logging import MailHandler, attach_transport, init_logging

# Composition exports
from .composition import TransportRegistry, build_production, register_mail_transport

# Domain exports
from .domain import (
    ConfigurationError,
    LogLevel,
    SendError,
    TransportEvent,
    VerificationError,
    compose_body,
    render_metadata,
)

__all__ = [
    "ConfigurationError",
    "DirectOptions",
    "LogLevel",
    "MailHandler",
    "MailTransport",
    "SendError",
    "ServiceOptions",
    "SmtpMailClient",
    "TransportConfig",
    "TransportEvent",
    "TransportRegistry",
    "VerificationError",
    "attach_transport",
    "build_production",
    "compose_body",
    "create_transport",
    "get_config",
    "init_logging",
    "load_transport_config",
    "load_transport_config_from_dict",
    "print_info",
    "register_mail_transport",
    "render_metadata",
]
