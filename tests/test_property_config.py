"""Property-based tests for the TransportConfig model.

Uses hypothesis to check that validation holds across generated inputs:
valid addresses pass, ports inside the TCP range pass and ports outside
fail, non-positive timeouts fail, and level names ignore case.
"""

from __future__ import annotations

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from logmail.adapters.email.config import load_transport_config
from logmail.domain.enums import LogLevel
from logmail.domain.errors import ConfigurationError

# ======================== Strategy helpers ========================

# Syntactically valid email addresses: local@domain.tld
_email_local_part = st.from_regex(r"[a-z][a-z0-9_.]{0,20}", fullmatch=True)
_email_domain = st.from_regex(r"[a-z][a-z0-9]{0,10}\.[a-z]{2,4}", fullmatch=True)
_valid_email = st.builds(lambda local, domain: f"{local}@{domain}", _email_local_part, _email_domain)  # type: ignore[arg-type]

_level_name = st.sampled_from([level.value for level in LogLevel])


def _random_case(text: str, flips: list[bool]) -> str:
    return "".join(char.upper() if flip else char for char, flip in zip(text, flips))


# ======================== Addresses ========================


@pytest.mark.os_agnostic
@given(email=_valid_email)
@settings(max_examples=100)
def test_valid_email_addresses_are_accepted_as_recipient(email: str) -> None:
    """Syntactically valid addresses are accepted in ``to``."""
    assert load_transport_config({"to": email}).recipients == [email]


@pytest.mark.os_agnostic
@given(emails=st.lists(_valid_email, min_size=1, max_size=5))
@settings(max_examples=50)
def test_recipient_lists_keep_every_address(emails: list[str]) -> None:
    """A list of valid addresses survives joining and splitting unchanged."""
    assert load_transport_config({"to": emails}).recipients == emails


@pytest.mark.os_agnostic
@given(email=_valid_email)
@settings(max_examples=50)
def test_valid_email_addresses_are_accepted_as_sender(email: str) -> None:
    """Syntactically valid addresses are accepted as ``from``."""
    assert load_transport_config({"to": "ops@example.com", "from": email}).from_address == email


# ======================== Connection settings ========================


@pytest.mark.os_agnostic
@given(port=st.integers(min_value=1, max_value=65535))
@settings(max_examples=50)
def test_ports_in_tcp_range_are_accepted(port: int) -> None:
    """Every valid TCP port is kept as configured."""
    assert load_transport_config({"to": "ops@example.com", "port": port}).port == port


@pytest.mark.os_agnostic
@given(port=st.one_of(st.integers(max_value=0), st.integers(min_value=65536)))
@settings(max_examples=50)
def test_ports_outside_tcp_range_are_rejected(port: int) -> None:
    """Ports below 1 or above 65535 never reach a socket."""
    with pytest.raises(ConfigurationError):
        load_transport_config({"to": "ops@example.com", "port": port})


@pytest.mark.os_agnostic
@given(timeout=st.integers(max_value=0))
@settings(max_examples=50)
def test_non_positive_timeouts_are_rejected(timeout: int) -> None:
    """Zero or negative timeouts are rejected."""
    with pytest.raises(ConfigurationError):
        load_transport_config({"to": "ops@example.com", "timeout": timeout})


# ======================== Levels ========================


@pytest.mark.os_agnostic
@given(data=st.data(), level=_level_name)
@settings(max_examples=100)
def test_level_names_ignore_case(data: st.DataObject, level: str) -> None:
    """``ERROR``, ``Error`` and ``error`` configure the same level."""
    flips = data.draw(st.lists(st.booleans(), min_size=len(level), max_size=len(level)))

    assert load_transport_config({"to": "ops@example.com", "level": _random_case(level, flips)}).level == level
