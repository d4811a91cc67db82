"""Shared pytest fixtures for transport, handler and config tests.

Centralizes test infrastructure:
- All shared fixtures live here
- Tests import fixtures implicitly via pytest's conftest discovery
- Fixtures use descriptive names that read as plain English
"""

from __future__ import annotations

import contextlib
import os
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from lib_layered_config import Config

from logmail.adapters.email.transport import MailTransport
from logmail.adapters.memory import MailClientSpy

_COVERAGE_BASENAME = ".coverage.logmail"

TEST_HOSTNAME = "testhost"


def _purge_stale_coverage_files(cov_path: Path) -> None:
    """Delete leftover SQLite database and journal files from crashed runs."""
    for suffix in ("", "-journal", "-wal", "-shm"):
        with contextlib.suppress(FileNotFoundError):
            Path(str(cov_path) + suffix).unlink()


def pytest_configure(config: pytest.Config) -> None:
    """Redirect the coverage database to a **local** temp directory.

    Runs before ``pytest-cov`` creates its ``Coverage()`` object, so the
    ``COVERAGE_FILE`` value is picked up however pytest is invoked.
    """
    if "COVERAGE_FILE" not in os.environ:
        cov_path = Path(tempfile.gettempdir()) / _COVERAGE_BASENAME
        _purge_stale_coverage_files(cov_path)
        os.environ["COVERAGE_FILE"] = str(cov_path)


@pytest.fixture
def fixed_hostname(monkeypatch: pytest.MonkeyPatch) -> str:
    """Pin ``socket.gethostname()`` so derived sender/subject defaults are predictable.

    Returns:
        str: The hostname every default is derived from.
    """
    monkeypatch.setattr("socket.gethostname", lambda: TEST_HOSTNAME)
    return TEST_HOSTNAME


@pytest.fixture
def mail_spy() -> MailClientSpy:
    """Provide a fresh MailClientSpy per test."""
    return MailClientSpy()


@pytest.fixture
def make_transport(mail_spy: MailClientSpy) -> Iterator[Callable[..., MailTransport]]:
    """Build MailTransports wired to ``mail_spy`` and close them afterwards.

    Example:
        def test_send(make_transport, mail_spy) -> None:
            transport = make_transport(to="ops@example.com")
            transport.log("error", "boom")
            transport.flush()
            assert mail_spy.sent
    """
    created: list[MailTransport] = []

    def _make(**options: Any) -> MailTransport:
        transport = MailTransport(options, client_factory=mail_spy.factory)
        created.append(transport)
        return transport

    yield _make

    for transport in created:
        transport.close()


@pytest.fixture
def clear_config_cache() -> Iterator[None]:
    """Clear the get_config lru_cache before and after each test."""
    from logmail.adapters.config import loader as config_mod

    config_mod.get_config.cache_clear()
    yield
    config_mod.get_config.cache_clear()


@pytest.fixture
def config_factory() -> Callable[[dict[str, Any]], Config]:
    """Create real Config instances from test data dicts.

    Builds actual ``lib_layered_config.Config`` objects without filesystem I/O.
    The second argument (empty dict) represents no source provenance info.
    """

    def _factory(data: dict[str, Any]) -> Config:
        return Config(data, {})

    return _factory
