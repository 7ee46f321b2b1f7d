"""Query matching for packages and ports.

A query pattern is one of:

1. ``True`` or ``"*"``: matches everything.
2. A compiled regular expression: searched for in the full package name.
3. A string ``<rest``, ``<=rest``, ``>rest`` or ``>=rest``: compares the
   package's installation date against the installation date of the
   package named by ``rest``, or else against ``rest`` parsed as a date.
4. Any other string: a shell glob matched against the full package name,
   or an exact package name without version.

No other forms exist.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from portmatch.core.exceptions import (
    ConfigurationError,
    FormatError,
    PackageNotInstalledError,
)
from portmatch.core.glob_utils import glob_match, glob_match_path
from portmatch.core.models import PackageIdentifier


if TYPE_CHECKING:
    from portmatch.core.ports import PackageDatabase


logger = structlog.get_logger(__name__)

PatternSource = str | re.Pattern[str] | bool

_DATE_RELATION = re.compile(r"^([<>])(=?)(.*)$", re.DOTALL)


@dataclass(frozen=True, slots=True)
class Wildcard:
    """Matches every package."""


@dataclass(frozen=True, slots=True)
class GlobPattern:
    """Shell glob against the full name, or exact match on the bare name."""

    pattern: str


@dataclass(frozen=True, slots=True)
class RegexPattern:
    """Regular expression searched for in the full name."""

    regex: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class DateRelation:
    """Installation-date comparison.

    Attributes:
        operator: "<" or ">".
        inclusive: True if the operator was followed by "=".
        reference: Package name or absolute date to compare against.
    """

    operator: str
    inclusive: bool
    reference: str

    def accepts(self, cmp: int) -> bool:
        """Decide a match from installed-date <=> reference-date."""
        if self.operator == ">" and cmp > 0:
            return True
        if self.operator == "<" and cmp < 0:
            return True
        return self.inclusive and cmp == 0


QueryPattern = Wildcard | GlobPattern | RegexPattern | DateRelation


def classify_pattern(pattern: PatternSource) -> QueryPattern:
    """Turn a caller-supplied pattern into a QueryPattern.

    Raises:
        TypeError: If pattern is not True, a string or a compiled regex.
    """
    if pattern is True or pattern == "*":
        return Wildcard()
    if isinstance(pattern, re.Pattern):
        return RegexPattern(pattern)
    if isinstance(pattern, str):
        m = _DATE_RELATION.match(pattern)
        if m:
            return DateRelation(
                operator=m.group(1),
                inclusive=m.group(2) == "=",
                reference=m.group(3),
            )
        return GlobPattern(pattern)
    raise TypeError(f"Unsupported query pattern: {pattern!r}")


def match_origin(pattern: PatternSource, origin: str) -> bool:
    """Match a port origin such as "www/nginx".

    Glob wildcards do not cross ``/``, so ``"www/*"`` matches
    ``"www/nginx"`` but ``"*"`` does not.
    """
    if pattern is True:
        return True
    if isinstance(pattern, re.Pattern):
        return pattern.search(origin) is not None
    if isinstance(pattern, str):
        return glob_match_path(pattern, origin)
    raise TypeError(f"Unsupported query pattern: {pattern!r}")


class QueryMatcher:
    """Decides whether packages match query patterns.

    Date relations need a package database to look up installation dates;
    without one they never match.

    Example:
        >>> matcher = QueryMatcher()
        >>> matcher.matches("foo-1.0", "foo-*")
        True
        >>> matcher.matches("foo-1.0", "foo")
        True
    """

    def __init__(self, package_db: PackageDatabase | None = None) -> None:
        self._package_db = package_db

    def matches(
        self,
        target: PackageIdentifier | str,
        pattern: PatternSource | QueryPattern,
    ) -> bool:
        """Check whether a package matches a pattern.

        Never raises. An unsupported pattern value, or any failure while
        resolving a date relation, is logged and counts as no match.

        Args:
            target: An identifier, a ``<name>-<version>`` string or a bare name.
            pattern: A pattern source or an already classified QueryPattern.

        Returns:
            True if the package matches.
        """
        fullname, name = _split_target(target)

        if isinstance(pattern, Wildcard | GlobPattern | RegexPattern | DateRelation):
            query = pattern
        else:
            try:
                query = classify_pattern(pattern)
            except TypeError as e:
                logger.warning("query_match_failed", target=fullname, error=str(e))
                return False

        if isinstance(query, Wildcard):
            return True
        if isinstance(query, RegexPattern):
            return query.regex.search(fullname) is not None
        if isinstance(query, GlobPattern):
            return glob_match(query.pattern, fullname) or name == query.pattern

        try:
            return query.accepts(self.date_cmp(fullname, query.reference))
        except Exception as e:
            logger.warning(
                "query_match_failed",
                target=fullname,
                reference=query.reference,
                error=str(e),
            )
            return False

    def date_cmp(self, pkgname: str, reference: str) -> int:
        """Compare a package's installation date with a reference.

        The reference is the installation date of the package it names,
        or else the reference parsed as a date.

        Returns:
            -1, 0 or 1 as the package was installed before, at or after
            the reference.

        Raises:
            ConfigurationError: If the matcher has no package database.
            PackageNotInstalledError: If pkgname is not installed.
            FormatError: If reference is neither installed nor a date.
        """
        if self._package_db is None:
            raise ConfigurationError("Date relations require a package database")

        installed = self._package_db.date_installed(pkgname)
        if installed is None:
            raise PackageNotInstalledError(pkgname)

        base = self._package_db.date_installed(reference)
        if base is None:
            base = self._package_db.parse_date(reference)

        return (installed > base) - (installed < base)


def _split_target(target: PackageIdentifier | str) -> tuple[str, str]:
    if isinstance(target, PackageIdentifier):
        return target.fullname, target.name
    try:
        parsed = PackageIdentifier.parse(target)
    except FormatError:
        return target, target
    return target, parsed.name
