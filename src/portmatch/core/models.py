"""Core domain models for portmatch.

These models are pure Python dataclasses with no I/O dependencies.
They represent installed packages and the versions they carry.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Self

from portmatch.core.exceptions import FormatError, UnsupportedComparisonError
from portmatch.core.version import PkgVersion


_PKGNAME = re.compile(r"^(.+)-([^-]+)$", re.DOTALL)
_WHITESPACE = re.compile(r"\s")
_PLIST_NAME = re.compile(r"^@name\s+(\S+)$", re.MULTILINE)


@dataclass(frozen=True, slots=True, eq=False)
class PackageIdentifier:
    """A package designation of the form ``<name>-<version>``.

    The name is everything before the last ``-``; the version is the
    remainder. Identifiers compare by name first, then by version.

    Equality also accepts strings and PkgVersion objects (see compare()),
    but hashing is only consistent among PackageIdentifier objects, so
    parse strings before mixing them into sets or dict keys.

    Attributes:
        name: Package name, e.g. "p5-libwww".
        version: Parsed version, e.g. PkgVersion("6.05_1").

    Example:
        >>> pkg = PackageIdentifier.parse("p5-libwww-6.05_1")
        >>> pkg.name
        'p5-libwww'
        >>> str(pkg.version)
        '6.05_1'
    """

    name: str
    version: PkgVersion

    @classmethod
    def parse(cls, pkgname: str) -> Self:
        """Parse a ``<name>-<version>`` string.

        Args:
            pkgname: The full package name.

        Returns:
            The parsed identifier.

        Raises:
            FormatError: If pkgname contains whitespace or has no ``-``
                separating a non-empty name from a non-empty version.
        """
        if _WHITESPACE.search(pkgname):
            raise FormatError(f"{pkgname}: contains whitespace", pkgname)

        m = _PKGNAME.match(pkgname)
        if m is None:
            raise FormatError(f"{pkgname}: not in <name>-<version> form", pkgname)

        return cls(name=m.group(1), version=PkgVersion(m.group(2)))

    @classmethod
    def from_plist(cls, plist: str) -> Self:
        """Extract the identifier from a packing list's ``@name`` line.

        Raises:
            FormatError: If the packing list has no ``@name`` line.
        """
        m = _PLIST_NAME.search(plist)
        if m is None:
            raise FormatError("Packing list has no @name line")
        return cls.parse(m.group(1))

    @property
    def fullname(self) -> str:
        """The canonical ``<name>-<version>`` string."""
        return f"{self.name}-{self.version}"

    def __str__(self) -> str:
        return self.fullname

    def compare(self, other: PackageIdentifier | PkgVersion | str) -> int:
        """Three-way compare against an identifier, a version or a string.

        A string containing ``-`` is parsed as an identifier and compared by
        name, then version. Any other string is parsed as a bare version and
        only the versions are compared, as they are for a PkgVersion.

        Returns:
            -1, 0 or 1.

        Raises:
            FormatError: If a string operand cannot be parsed.
            UnsupportedComparisonError: For any other operand type.
        """
        other_name: str | None = None

        if isinstance(other, PackageIdentifier):
            other_name, other_version = other.name, other.version
        elif isinstance(other, PkgVersion):
            other_version = other
        elif isinstance(other, str):
            if "-" in other:
                parsed = PackageIdentifier.parse(other)
                other_name, other_version = parsed.name, parsed.version
            else:
                other_version = PkgVersion(other)
        else:
            raise UnsupportedComparisonError(self, other)

        if other_name is not None and self.name != other_name:
            return -1 if self.name < other_name else 1

        return self.version.compare(other_version)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PackageIdentifier | PkgVersion | str):
            return NotImplemented
        try:
            return self.compare(other) == 0
        except FormatError:
            return False

    def __hash__(self) -> int:
        return hash((self.name, self.version))

    def __lt__(self, other: PackageIdentifier | PkgVersion | str) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: PackageIdentifier | PkgVersion | str) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: PackageIdentifier | PkgVersion | str) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: PackageIdentifier | PkgVersion | str) -> bool:
        return self.compare(other) >= 0
