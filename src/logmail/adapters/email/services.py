"""Well-known mail provider presets for service-mode transports.

A service name such as ``"Gmail"`` or ``"SES-EU-WEST-1"`` stands in for the
provider's SMTP host, port and TLS mode. Lookups ignore case and any
character other than letters, digits, dots and hyphens.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServicePreset:
    """SMTP endpoint of a named provider."""

    host: str
    port: int
    secure: bool = False


_SERVICES: dict[str, tuple[ServicePreset, tuple[str, ...]]] = {
    "126": (ServicePreset("smtp.126.com", 465, True), ()),
    "163": (ServicePreset("smtp.163.com", 465, True), ()),
    "1und1": (ServicePreset("smtp.1und1.de", 465, True), ()),
    "AOL": (ServicePreset("smtp.aol.com", 587), ()),
    "DebugMail": (ServicePreset("debugmail.io", 25), ()),
    "DynectEmail": (ServicePreset("smtp.dynect.net", 25), ()),
    "FastMail": (ServicePreset("smtp.fastmail.com", 465, True), ()),
    "GandiMail": (ServicePreset("mail.gandi.net", 587), ("Gandi", "Gandi Mail")),
    "Gmail": (ServicePreset("smtp.gmail.com", 465, True), ("Google Mail",)),
    "Godaddy": (ServicePreset("smtpout.secureserver.net", 25), ()),
    "GodaddyAsia": (ServicePreset("smtp.asia.secureserver.net", 25), ()),
    "GodaddyEurope": (ServicePreset("smtp.europe.secureserver.net", 25), ()),
    "Hotmail": (ServicePreset("smtp-mail.outlook.com", 587), ("Outlook", "Outlook.com", "Hotmail.com")),
    "iCloud": (ServicePreset("smtp.mail.me.com", 587), ("Me", "Mac")),
    "Mail.ru": (ServicePreset("smtp.mail.ru", 465, True), ()),
    "Maildev": (ServicePreset("127.0.0.1", 1025), ()),
    "Mailgun": (ServicePreset("smtp.mailgun.org", 465, True), ()),
    "Mailjet": (ServicePreset("in-v3.mailjet.com", 587), ()),
    "Mailosaur": (ServicePreset("mailosaur.io", 25), ()),
    "Mandrill": (ServicePreset("smtp.mandrillapp.com", 587), ("Mandrill App",)),
    "Naver": (ServicePreset("smtp.naver.com", 587), ()),
    "OpenMailBox": (ServicePreset("smtp.openmailbox.org", 465, True), ("OMB", "openmailbox.org")),
    "Outlook365": (ServicePreset("smtp.office365.com", 587), ()),
    "Postmark": (ServicePreset("smtp.postmarkapp.com", 2525), ("PostmarkApp",)),
    "QQ": (ServicePreset("smtp.qq.com", 465, True), ()),
    "QQex": (ServicePreset("smtp.exmail.qq.com", 465, True), ()),
    "SendCloud": (ServicePreset("smtpcloud.sohu.com", 25), ()),
    "SendGrid": (ServicePreset("smtp.sendgrid.net", 587), ()),
    "SendinBlue": (ServicePreset("smtp-relay.sendinblue.com", 587), ()),
    "SendPulse": (ServicePreset("smtp-pulse.com", 465, True), ()),
    "SES": (ServicePreset("email-smtp.us-east-1.amazonaws.com", 465, True), ()),
    "SES-US-EAST-1": (ServicePreset("email-smtp.us-east-1.amazonaws.com", 465, True), ()),
    "SES-US-WEST-2": (ServicePreset("email-smtp.us-west-2.amazonaws.com", 465, True), ()),
    "SES-EU-WEST-1": (ServicePreset("email-smtp.eu-west-1.amazonaws.com", 465, True), ()),
    "Sparkpost": (ServicePreset("smtp.sparkpostmail.com", 587), ("SparkPost", "SparkPost Mail")),
    "Yahoo": (ServicePreset("smtp.mail.yahoo.com", 465, True), ()),
    "Yandex": (ServicePreset("smtp.yandex.ru", 465, True), ()),
    "Zoho": (ServicePreset("smtp.zoho.com", 465, True), ()),
    "qiye.aliyun": (ServicePreset("smtp.mxhichina.com", 465, True), ()),
}

_KEY_NOISE = re.compile(r"[^a-z0-9.-]")


def normalize_service_name(name: str) -> str:
    """Return the lookup key for *name*.

    Example:
        >>> normalize_service_name("Google Mail")
        'googlemail'
        >>> normalize_service_name("SES-EU-WEST-1")
        'ses-eu-west-1'
    """
    return _KEY_NOISE.sub("", name.lower())


def _build_index() -> dict[str, ServicePreset]:
    index: dict[str, ServicePreset] = {}
    for name, (preset, aliases) in _SERVICES.items():
        for key in (name, *aliases):
            index[normalize_service_name(key)] = preset
    return index


_INDEX = _build_index()


def resolve_service(name: str) -> ServicePreset | None:
    """Return the preset for *name*, or None for an unknown service.

    Example:
        >>> resolve_service("gmail")
        ServicePreset(host='smtp.gmail.com', port=465, secure=True)
        >>> resolve_service("Outlook.com").host
        'smtp-mail.outlook.com'
        >>> resolve_service("no-such-provider") is None
        True
    """
    return _INDEX.get(normalize_service_name(name))


def known_services() -> list[str]:
    """Return the canonical names of every supported service."""
    return sorted(_SERVICES, key=str.lower)


__all__ = ["ServicePreset", "known_services", "normalize_service_name", "resolve_service"]
