"""Package database adapter backed by pkg(8)."""

from __future__ import annotations

import re
import subprocess
from typing import TYPE_CHECKING

import structlog

from portmatch.core import shell
from portmatch.core.dates import from_timestamp, parse_date
from portmatch.core.exceptions import FormatError, PackageDatabaseError
from portmatch.core.models import PackageIdentifier


if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from datetime import datetime
    from pathlib import Path

    from portmatch.config import Settings

    Runner = Callable[[Sequence[str]], subprocess.CompletedProcess[str]]


logger = structlog.get_logger(__name__)

# pkg-query(8) format for each kind of information get_info() returns
QUERY_FLAGS: dict[str, str] = {
    "prefix": "%p",
    "comment": "%c",
    "message": "%M",
    "req": "%dn-%dv",
    "required_by": "%rn-%rv",
    "mtime": "%t",
    "files": "%Fp",
    "totalsize": "%sb",
    "origin": "%o",
}

_REPEATED_SLASHES = re.compile(r"//+")


def _run(args: Sequence[str]) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        check=False,
    )


class PkgngDatabase:
    """PackageDatabase over ``pkg query``.

    Implements the PackageDatabase protocol. pkg exits non-zero when no
    installed package matches, which is reported as "no information"
    rather than as an error.
    """

    def __init__(self, settings: Settings, runner: Runner | None = None) -> None:
        """Initialize the adapter.

        Args:
            settings: Provides the pkg command to run.
            runner: Executes a command and returns the completed process.
                Defaults to subprocess.run without a shell.
        """
        self._pkg = settings.pkg_command
        self._runner = runner or _run

    def query(
        self, fmt: str, *pkgnames: str, options: Sequence[str] = ()
    ) -> str | None:
        """Run ``pkg query`` and return its output.

        Args:
            fmt: pkg-query(8) format string, e.g. "%n-%v".
            *pkgnames: Packages to query.
            options: Options placed before the format, e.g. ("-a",).

        Returns:
            Output with the trailing newline removed, or None if pkg found
            nothing.

        Raises:
            PackageDatabaseError: If pkg cannot be executed.
        """
        command = [self._pkg, "query", *options, fmt, *pkgnames]
        command_line = shell.join(command)
        logger.debug("pkg_query", command=command_line)

        try:
            result = self._runner(command)
        except OSError as e:
            raise PackageDatabaseError(
                f"Could not run {self._pkg}: {e}", command=command_line, cause=e
            ) from e

        output = result.stdout.rstrip("\n")
        if result.returncode != 0 or not output:
            return None
        return output

    def get_info(self, pkgname: str, what: str) -> str | None:
        """Query one kind of information about an installed package.

        Args:
            pkgname: Package name, with or without version.
            what: A key of QUERY_FLAGS, e.g. "comment" or "required_by".

        Returns:
            The raw output, or None if the package is not installed or the
            information is empty.

        Raises:
            ValueError: If what is not a key of QUERY_FLAGS.
        """
        fmt = QUERY_FLAGS.get(what)
        if fmt is None:
            raise ValueError(f"{what}: Unsupported information")
        return self.query(fmt, pkgname)

    def date_installed(self, pkgname: str) -> datetime | None:
        """Return the installation time of a package, or None if not installed.

        Raises:
            PackageDatabaseError: If pkg reports a non-numeric timestamp.
        """
        output = self.get_info(pkgname, "mtime")
        if output is None:
            return None

        first = output.splitlines()[0]
        try:
            return from_timestamp(int(first))
        except ValueError as e:
            raise PackageDatabaseError(
                f"{pkgname}: unexpected install time {first!r}",
                command=shell.join([self._pkg, "query", "%t", pkgname]),
                cause=e,
            ) from e

    def parse_date(self, text: str) -> datetime:
        """Parse an absolute date (see portmatch.core.dates.parse_date)."""
        return parse_date(text)

    def installed(self) -> list[PackageIdentifier]:
        """List installed packages, sorted by name and version."""
        output = self.query("%n-%v", options=("-a",))
        if output is None:
            return []
        return sorted(PackageIdentifier.parse(line) for line in output.splitlines())

    def origin(self, pkgname: str) -> str | None:
        """Return the origin an installed package was built from."""
        return self.get_info(pkgname, "origin")

    def prefix(self, pkgname: str) -> str | None:
        """Return the installation prefix of a package."""
        return self.get_info(pkgname, "prefix")

    def comment(self, pkgname: str) -> str | None:
        """Return the one-line description of a package."""
        return self.get_info(pkgname, "comment")

    def message(self, pkgname: str) -> str | None:
        return self.get_info(pkgname, "message")

    def requires(self, pkgname: str) -> list[PackageIdentifier]:
        """List the packages a package depends on."""
        return _identifiers(self.get_info(pkgname, "req"))

    def required_by(self, pkgname: str) -> list[PackageIdentifier]:
        """List the installed packages that depend on a package."""
        return _identifiers(self.get_info(pkgname, "required_by"))

    def files(self, pkgname: str) -> list[str]:
        """List the files a package installed, with repeated slashes collapsed."""
        output = self.get_info(pkgname, "files")
        if output is None:
            return []
        return _REPEATED_SLASHES.sub("/", output).splitlines()

    def total_size(self, pkgname: str) -> int | None:
        """Return the installed size of a package in bytes.

        Raises:
            PackageDatabaseError: If pkg reports a non-numeric size.
        """
        output = self.get_info(pkgname, "totalsize")
        if output is None:
            return None
        try:
            return int(output.splitlines()[0])
        except ValueError as e:
            raise PackageDatabaseError(
                f"{pkgname}: unexpected size {output!r}",
                command=shell.join([self._pkg, "query", QUERY_FLAGS["totalsize"], pkgname]),
                cause=e,
            ) from e

    def identify_file(self, pkgfile: Path) -> PackageIdentifier:
        """Read the package identifier out of a package file.

        Raises:
            FormatError: If pkg cannot read a name from the file.
        """
        output = self.query("%n-%v", options=("-F", str(pkgfile)))
        if output is None:
            raise FormatError(f"{pkgfile}: Couldn't get package name", str(pkgfile))
        return PackageIdentifier.parse(output.splitlines()[0])


def _identifiers(output: str | None) -> list[PackageIdentifier]:
    if output is None:
        return []
    return [PackageIdentifier.parse(line) for line in output.splitlines()]
