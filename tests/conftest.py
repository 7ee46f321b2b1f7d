"""Pytest configuration and shared fixtures.

This module registers custom markers for CI job separation and provides
shared fixtures for the test suite.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING

import pytest
import structlog


if TYPE_CHECKING:
    from collections.abc import Iterator

    from portmatch.core.models import PackageIdentifier
    from portmatch.core.ports import PackageDatabase


INDEX_LINE = (
    "nginx-1.24.0_2,3|/usr/ports/www/nginx|/usr/local|Robust and small WWW server"
    "|/usr/ports/www/nginx/pkg-descr|joneum@FreeBSD.org|www"
    "|/usr/ports/devel/pcre2 /usr/ports/security/openssl"
    "|/usr/ports/devel/pcre2|https://nginx.org/"
    "|/usr/ports/archivers/xz||/usr/ports/ftp/curl\n"
)


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "core: Core models, matching and parsing")
    config.addinivalue_line("markers", "adapters: pkg and INDEX adapters")
    config.addinivalue_line("markers", "cli: CLI tests")
    config.addinivalue_line(
        "markers", "tra: Test Responsibility Anchor (TRA) - namespace.Anchor format"
    )
    config.addinivalue_line(
        "markers",
        "tier: Test tier for CI job separation (0=instant, 1=fast, 2=standard, 3=slow, 4=manual)",
    )


@pytest.fixture
def index_line() -> str:
    """A realistic INDEX line rooted at /usr/ports."""
    return INDEX_LINE


@pytest.fixture
def install_dates() -> dict[str, datetime]:
    """Installation times keyed by package name, used by fake_package_db."""
    return {
        "foo": datetime(2021, 6, 1, 12, 0, tzinfo=UTC),
        "bar": datetime(2019, 3, 15, 8, 30, tzinfo=UTC),
        "baz": datetime(2021, 6, 1, 12, 0, tzinfo=UTC),
    }


@pytest.fixture
def fake_package_db(install_dates: dict[str, datetime]) -> PackageDatabase:
    """Reusable in-memory package database for testing.

    Implements PackageDatabase over install_dates. Lookups accept a bare
    name or a ``<name>-<version>`` string, like pkg query does.
    """
    from portmatch.core.dates import parse_date
    from portmatch.core.exceptions import FormatError
    from portmatch.core.models import PackageIdentifier

    class FakePackageDatabase:
        def date_installed(self, pkgname: str) -> datetime | None:
            if pkgname in install_dates:
                return install_dates[pkgname]
            try:
                return install_dates.get(PackageIdentifier.parse(pkgname).name)
            except FormatError:
                return None

        def parse_date(self, text: str) -> datetime:
            return parse_date(text)

        def installed(self) -> list[PackageIdentifier]:
            return [PackageIdentifier.parse(f"{name}-1.0") for name in sorted(install_dates)]

    return FakePackageDatabase()


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
