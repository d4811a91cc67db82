"""Mail transport configuration model and loaders.

Provides the TransportConfig Pydantic model for validated, immutable
transport settings, the option records handed to the mail client factory,
and the loader functions that turn raw option mappings into a config.
"""

from __future__ import annotations

import socket
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, cast

from btx_lib_mail import validate_email_address
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from logmail.domain.enums import LogLevel
from logmail.domain.errors import ConfigurationError

DEFAULT_NAME = "mail"
DEFAULT_LEVEL = LogLevel.ERROR.value
DEFAULT_PORT = 25
DEFAULT_TIMEOUT_MS = 10_000
DEFAULT_SENDER_LOCAL_PART = "al-winston"
DEFAULT_SUBJECT_PREFIX = "Winston"

CONFIG_SECTION = "mail_transport"


@dataclass(frozen=True, slots=True)
class ServiceOptions:
    """Client options for a named provider preset (service mode)."""

    service: str
    username: str | None = None
    password: str | None = None

    def __repr__(self) -> str:
        password = "'[REDACTED]'" if self.password is not None else "None"
        return f"ServiceOptions(service={self.service!r}, username={self.username!r}, password={password})"


@dataclass(frozen=True, slots=True)
class DirectOptions:
    """Client options for a raw host/port connection (direct mode).

    Attributes:
        host: SMTP server hostname; ``None`` lets the client use localhost.
        port: SMTP server port.
        secure: Use implicit TLS (SMTPS) from the first byte.
        timeout: Connection timeout in milliseconds.
    """

    host: str | None = None
    port: int = DEFAULT_PORT
    secure: bool = False
    timeout: int = DEFAULT_TIMEOUT_MS


def _hostname() -> str:
    return socket.gethostname()


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


class TransportConfig(BaseModel):
    """Validated, immutable mail transport configuration.

    Unset and empty values fall back to their defaults. ``from`` and
    ``handleExceptions`` are accepted as input aliases.

    Example:
        >>> config = TransportConfig(to="ops@example.com", from_address="app@example.com")
        >>> config.level
        'error'
        >>> config.port
        25
        >>> config.is_service_mode
        False
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = DEFAULT_NAME
    to: str = Field(min_length=1)
    from_address: str = Field(default="", alias="from")
    subject: str = ""
    level: str = DEFAULT_LEVEL
    handle_exceptions: bool = Field(default=False, alias="handleExceptions")

    # Service mode
    service: str | None = None
    username: str | None = None
    password: str | None = None

    # Direct mode
    host: str | None = None
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    secure: bool = False
    timeout: int = Field(default=DEFAULT_TIMEOUT_MS, gt=0)

    report_failures_to_callback: bool = False
    max_workers: int = Field(default=4, gt=0)

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        """Drop blank values and derive sender and subject defaults.

        Blank means ``None`` or a whitespace-only string; such entries are
        treated as "not configured" so the field default applies.

        Examples:
            >>> raw = TransportConfig._apply_defaults({"to": "a@x.com", "host": ""})
            >>> "host" in raw
            False
        """
        if not isinstance(data, Mapping):
            return data
        raw = {key: value for key, value in cast(Mapping[str, Any], data).items() if not _is_blank(value)}

        hostname = _hostname()
        sender = raw.get("from", raw.get("from_address"))
        if sender is None:
            # The hostname is not guaranteed to form a valid domain, so the
            # derived sender is not validated.
            raw["from_address"] = f"{DEFAULT_SENDER_LOCAL_PART}@{hostname}.io"
        else:
            validate_email_address(str(sender))
        if "subject" not in raw:
            level = str(raw.get("level", DEFAULT_LEVEL)).strip().lower()
            raw["subject"] = f"{DEFAULT_SUBJECT_PREFIX}: {level} {hostname}"
        return raw

    @field_validator("to", mode="before")
    @classmethod
    def _join_recipient_list(cls, v: Any) -> Any:
        """Join a sequence of recipients into one comma-separated string.

        Examples:
            >>> TransportConfig._join_recipient_list(["a@x.com", "b@x.com"])
            'a@x.com, b@x.com'
            >>> TransportConfig._join_recipient_list("a@x.com")
            'a@x.com'
        """
        if isinstance(v, Sequence) and not isinstance(v, str):
            return ", ".join(str(item) for item in cast(Sequence[Any], v))
        return v

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return LogLevel.parse(v).value
        return v

    @model_validator(mode="after")
    def _validate_recipients(self) -> TransportConfig:
        """Validate every recipient address listed in ``to``.

        Raises:
            ValueError: When an address is malformed.
        """
        for recipient in self.recipients:
            validate_email_address(recipient)
        return self

    @property
    def recipients(self) -> list[str]:
        """Individual recipient addresses parsed from ``to``."""
        return [part.strip() for part in self.to.split(",") if part.strip()]

    @property
    def is_service_mode(self) -> bool:
        """True when a named provider preset selects the mail server."""
        return bool(self.service and self.service.strip())

    def client_options(self) -> ServiceOptions | DirectOptions:
        """Return the options for exactly one client configuration branch.

        Example:
            >>> TransportConfig(to="a@x.com", service="Gmail", username="u", password="p").client_options()
            ServiceOptions(service='Gmail', username='u', password='[REDACTED]')
            >>> TransportConfig(to="a@x.com", host="smtp.x.com").client_options()
            DirectOptions(host='smtp.x.com', port=25, secure=False, timeout=10000)
        """
        if self.is_service_mode:
            return ServiceOptions(
                service=cast(str, self.service),
                username=self.username,
                password=self.password,
            )
        return DirectOptions(
            host=self.host,
            port=self.port,
            secure=self.secure,
            timeout=self.timeout,
        )

    def __repr__(self) -> str:
        """Return string representation with password redacted.

        Example:
            >>> config = TransportConfig(to="a@x.com", service="Gmail", password="secret123")
            >>> "secret123" in repr(config)
            False
            >>> "[REDACTED]" in repr(config)
            True
        """
        fields: list[str] = []
        for name, value in self:
            if name == "password" and value is not None:
                fields.append(f"{name}='[REDACTED]'")
            else:
                fields.append(f"{name}={value!r}")
        return f"TransportConfig({', '.join(fields)})"


def _describe_validation_error(exc: ValidationError) -> str:
    """Summarize a validation error without echoing input values."""
    parts = []
    for error in exc.errors(include_input=False):
        location = ".".join(str(item) for item in error["loc"]) or "config"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def load_transport_config(options: TransportConfig | Mapping[str, Any] | None = None) -> TransportConfig:
    """Build a TransportConfig from raw transport options.

    Args:
        options: Mapping of option names (``to``, ``from``, ``service``, ...),
            an existing TransportConfig (returned unchanged), or None.

    Returns:
        Validated configuration with every default applied.

    Raises:
        ConfigurationError: When ``to`` is missing or empty, or when any
            other option fails validation.

    Example:
        >>> load_transport_config({"to": "a@x.com"}).name
        'mail'
        >>> load_transport_config({})  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        ...
        ConfigurationError: No recipient configured (to is empty)
    """
    if isinstance(options, TransportConfig):
        return options

    raw: dict[str, Any] = dict(options) if options else {}
    recipient = raw.get("to")
    if _is_blank(recipient) or not recipient:
        raise ConfigurationError("No recipient configured (to is empty)")

    try:
        return TransportConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid mail transport configuration: {_describe_validation_error(exc)}") from exc


def load_transport_config_from_dict(config_dict: Mapping[str, Any]) -> TransportConfig:
    """Load TransportConfig from a layered configuration dictionary.

    Bridges lib_layered_config's dictionary output with the typed
    TransportConfig model by reading its ``[mail_transport]`` section.

    Raises:
        ConfigurationError: When the section is not a table, or when
            :func:`load_transport_config` rejects it.

    Example:
        >>> config = load_transport_config_from_dict({"mail_transport": {"to": "ops@example.com", "level": "WARN"}})
        >>> config.level
        'warn'
    """
    section: Any = config_dict.get(CONFIG_SECTION, {})
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"[{CONFIG_SECTION}] must be a table, got {type(section).__name__}")
    return load_transport_config(cast(Mapping[str, Any], section))


__all__ = [
    "CONFIG_SECTION",
    "DEFAULT_PORT",
    "DEFAULT_TIMEOUT_MS",
    "DirectOptions",
    "ServiceOptions",
    "TransportConfig",
    "load_transport_config",
    "load_transport_config_from_dict",
]
