"""Email adapter - transport configuration, SMTP client and MailTransport.

Structure:
    * :mod:`.config` - TransportConfig model and loaders
    * :mod:`.services` - Well-known provider presets
    * :mod:`.client` - SMTP mail client and factory
    * :mod:`.transport` - The MailTransport log sink
"""

from __future__ import annotations

from .client import SmtpMailClient, create_transport
from .config import (
    DirectOptions,
    ServiceOptions,
    TransportConfig,
    load_transport_config,
    load_transport_config_from_dict,
)
from .services import ServicePreset, known_services, resolve_service
from .transport import MailTransport

__all__ = [
    "DirectOptions",
    "MailTransport",
    "ServiceOptions",
    "ServicePreset",
    "SmtpMailClient",
    "TransportConfig",
    "create_transport",
    "known_services",
    "load_transport_config",
    "load_transport_config_from_dict",
    "resolve_service",
]
