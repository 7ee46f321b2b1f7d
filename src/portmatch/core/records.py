"""Port records as found in a ports tree INDEX file.

Each line of an INDEX file describes one port in 13 ``|``-separated
fields::

    pkgname|/usr/ports/origin|prefix|comment|descr_file|maintainer|
    categories|build_depends|run_depends|www|extract_depends|
    patch_depends|fetch_depends

List fields are whitespace-separated. ``origin`` and ``descr_file`` are
absolute paths inside the ports tree; the tree root is stripped on parse
and added back on serialize.
"""

from __future__ import annotations

import posixpath
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Self

from portmatch.core.exceptions import FormatError, UnsupportedComparisonError
from portmatch.core.matching import QueryMatcher, match_origin
from portmatch.core.models import PackageIdentifier


if TYPE_CHECKING:
    from portmatch.core.matching import PatternSource


FIELDS = (
    "pkgname",
    "origin",
    "prefix",
    "comment",
    "descr_file",
    "maintainer",
    "categories",
    "build_depends",
    "run_depends",
    "www",
    "extract_depends",
    "patch_depends",
    "fetch_depends",
)
LIST_FIELDS = frozenset(
    {
        "categories",
        "build_depends",
        "run_depends",
        "extract_depends",
        "patch_depends",
        "fetch_depends",
    }
)
PORTS_DIR_FIELDS = frozenset({"origin", "descr_file"})
NFIELDS = len(FIELDS)
FIELD_SEPARATOR = "|"

_ORIGIN = re.compile(r"^(?:(.*)/)?([^/]+/[^/]+)$", re.DOTALL)


@dataclass(frozen=True, slots=True, eq=False)
class PortRecord:
    """One port from an INDEX file.

    Records compare, hash and sort by origin only, so a set of records
    holds one entry per port whatever versions they carry.

    Attributes:
        pkgname: Package the port builds.
        origin: Port location relative to the tree, e.g. "www/nginx".
        ports_dir: Tree root stripped off origin, None if origin had none.
        categories: Categories, primary category first.
        build_depends: Build dependencies (paths as listed in the INDEX).
        run_depends: Run dependencies.
        extract_depends: Extract dependencies.
        patch_depends: Patch dependencies.
        fetch_depends: Fetch dependencies.
        prefix, comment, descr_file, maintainer, www: Scalar fields;
            None when empty.
    """

    pkgname: PackageIdentifier
    origin: str
    prefix: str | None = None
    comment: str | None = None
    descr_file: str | None = None
    maintainer: str | None = None
    categories: tuple[str, ...] = ()
    build_depends: tuple[str, ...] = ()
    run_depends: tuple[str, ...] = ()
    www: str | None = None
    extract_depends: tuple[str, ...] = ()
    patch_depends: tuple[str, ...] = ()
    fetch_depends: tuple[str, ...] = ()
    ports_dir: str | None = None

    @classmethod
    def parse(cls, line: str) -> Self:
        """Parse one INDEX line.

        Args:
            line: The record, with or without its trailing newline.

        Returns:
            The parsed record.

        Raises:
            FormatError: If the line does not have exactly 13 fields, the
                package name is malformed, or the origin is not a
                ``category/name`` path.
        """
        values = _chomp(line).split(FIELD_SEPARATOR, NFIELDS - 1)

        if len(values) < NFIELDS or FIELD_SEPARATOR in values[-1]:
            raise FormatError(
                f"Port info line must consist of {NFIELDS} fields", line
            )

        raw = dict(zip(FIELDS, values, strict=True))

        try:
            pkgname = PackageIdentifier.parse(raw["pkgname"])
        except FormatError as e:
            raise FormatError(f"Invalid port info line: {e}", line) from e

        m = _ORIGIN.match(raw["origin"])
        if m is None:
            raise FormatError(f"{pkgname}: {raw['origin']}: malformed origin", line)
        ports_dir, origin = m.group(1), m.group(2)

        descr_file = raw["descr_file"]
        if ports_dir is not None and descr_file.startswith(ports_dir + "/"):
            descr_file = descr_file[len(ports_dir) + 1 :]

        decoded: dict[str, object] = {}
        for field in FIELDS[2:]:
            value = descr_file if field == "descr_file" else raw[field]
            if field in LIST_FIELDS:
                decoded[field] = tuple(value.split())
            else:
                decoded[field] = value or None

        return cls(pkgname=pkgname, origin=origin, ports_dir=ports_dir, **decoded)  # type: ignore[arg-type]

    def serialize(self, ports_dir: str | None = None) -> str:
        """Render the record as an INDEX line.

        Args:
            ports_dir: Tree root to prefix origin and descr_file with.
                Defaults to the root the record was parsed with.

        Returns:
            The ``|``-separated line, newline-terminated.
        """
        root = self.ports_dir if ports_dir is None else ports_dir.rstrip("/")

        values: list[str] = []
        for field in FIELDS:
            value = getattr(self, field)
            if value is None:
                values.append("")
            elif field in LIST_FIELDS:
                values.append(" ".join(value))
            elif field in PORTS_DIR_FIELDS and root is not None:
                values.append(_join_ports_dir(root, value))
            else:
                values.append(str(value))

        return FIELD_SEPARATOR.join(values) + "\n"

    def __str__(self) -> str:
        return self.serialize()

    @property
    def category(self) -> str | None:
        """Primary category, or None if the record lists none."""
        return self.categories[0] if self.categories else None

    def all_depends(self) -> tuple[str, ...]:
        """All dependencies, in order of first appearance, without duplicates."""
        return _ordered_union(
            self.build_depends,
            self.run_depends,
            self.extract_depends,
            self.patch_depends,
            self.fetch_depends,
        )

    def required_depends(self) -> tuple[str, ...]:
        """Build and run dependencies, without duplicates."""
        return _ordered_union(self.build_depends, self.run_depends)

    def matches(
        self,
        pattern: PatternSource,
        matcher: QueryMatcher | None = None,
    ) -> bool:
        """Check the origin, then the package, against a query pattern.

        Like QueryMatcher.matches, never raises for unsupported patterns.

        Args:
            pattern: A query pattern (see portmatch.core.matching).
            matcher: Matcher for the package name; pass one with a package
                database to enable date relations.
        """
        try:
            if match_origin(pattern, self.origin):
                return True
        except TypeError:
            # Rejected and logged by the matcher below
            pass
        return (matcher or QueryMatcher()).matches(self.pkgname, pattern)

    def _origin_of(self, other: object) -> str:
        if isinstance(other, PortRecord):
            return other.origin
        if isinstance(other, str):
            return other
        raise UnsupportedComparisonError(self, other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PortRecord | str):
            return NotImplemented
        return self.origin == self._origin_of(other)

    def __hash__(self) -> int:
        return hash(self.origin)

    def __lt__(self, other: PortRecord | str) -> bool:
        return self.origin < self._origin_of(other)

    def __le__(self, other: PortRecord | str) -> bool:
        return self.origin <= self._origin_of(other)

    def __gt__(self, other: PortRecord | str) -> bool:
        return self.origin > self._origin_of(other)

    def __ge__(self, other: PortRecord | str) -> bool:
        return self.origin >= self._origin_of(other)


def _chomp(line: str) -> str:
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def _join_ports_dir(root: str, value: str) -> str:
    if posixpath.isabs(value):
        return value
    return f"{root}/{value}"


def _ordered_union(*lists: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(item for items in lists for item in items))
