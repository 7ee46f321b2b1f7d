"""Port interfaces for hexagonal architecture.

Ports define contracts that adapters must implement. The core domain
depends only on these protocols, never on concrete implementations.
(These are architectural ports; the FreeBSD ports tree is modelled by
PortRecord.)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    import re
    from datetime import datetime

    from portmatch.core.models import PackageIdentifier
    from portmatch.core.records import PortRecord


@runtime_checkable
class PackageDatabase(Protocol):
    """Database of installed packages (pkg, or a fake in tests)."""

    def date_installed(self, pkgname: str) -> datetime | None:
        """Return when a package was installed.

        Args:
            pkgname: Package name, with or without version.

        Returns:
            Timezone-aware installation time, or None if not installed.
        """
        ...

    def parse_date(self, text: str) -> datetime:
        """Parse an absolute date the way this database's tools do.

        Raises:
            FormatError: If text is not a recognizable date.
        """
        ...

    def installed(self) -> list[PackageIdentifier]:
        """List all installed packages."""
        ...


@runtime_checkable
class PortsDatabase(Protocol):
    """Database of available ports, keyed by origin."""

    def get(self, origin: str) -> PortRecord | None:
        """Return the record for an origin such as "www/nginx", or None."""
        ...

    def select(self, pattern: str | re.Pattern[str] | bool) -> list[PortRecord]:
        """Return records matching a query pattern, sorted by origin."""
        ...
