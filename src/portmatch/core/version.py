"""Package version strings with FreeBSD-style ordering.

A version has the form ``<version>[_<revision>][,<epoch>]``. Versions are
ordered by epoch, then by the components of ``<version>``, then by
revision. Components are runs of digits (compared numerically) or letters;
``alpha``, ``beta``, ``pre`` and ``rc`` sort below a missing component,
any other letters sort above every number. Missing trailing components
count as zero, so ``1.0`` and ``1.0.0`` are equal.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from itertools import zip_longest
from typing import Self

from portmatch.core.exceptions import FormatError, UnsupportedComparisonError


_COMPONENT = re.compile(r"\d+|[A-Za-z]+")
_PRERELEASE_RANK = {"alpha": 0, "beta": 1, "pre": 2, "rc": 3}

# (kind, number, letters): prerelease < number < other letters
_Component = tuple[int, int, str]
_ZERO: _Component = (1, 0, "")


def _component_key(token: str) -> _Component:
    if token.isdigit():
        return (1, int(token), "")
    lowered = token.lower()
    if lowered in _PRERELEASE_RANK:
        return (0, _PRERELEASE_RANK[lowered], "")
    return (2, 0, lowered)


def _compare_components(
    left: tuple[_Component, ...], right: tuple[_Component, ...]
) -> int:
    for a, b in zip_longest(left, right, fillvalue=_ZERO):
        if a != b:
            return -1 if a < b else 1
    return 0


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass(frozen=True, slots=True, eq=False)
class PkgVersion:
    """A parsed package version.

    Versions compare equal to version strings they are equivalent to, but
    hash only consistently with other PkgVersion objects. Convert strings
    with PkgVersion(...) before using them as set members or dict keys.

    Attributes:
        text: The version exactly as given; str() returns it unchanged.
        base: The version proper, without revision and epoch.
        revision: Port revision (the ``_N`` suffix), 0 if absent.
        epoch: Port epoch (the ``,N`` suffix), 0 if absent.
    """

    text: str
    base: str = field(init=False)
    revision: int = field(init=False)
    epoch: int = field(init=False)
    _components: tuple[_Component, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Split the text into base, revision and epoch."""
        if not self.text:
            raise FormatError("Version cannot be empty", self.text)
        if any(ch.isspace() for ch in self.text):
            raise FormatError(f"{self.text}: contains whitespace", self.text)

        rest, epoch = _split_numeric_suffix(self.text, ",")
        base, revision = _split_numeric_suffix(rest, "_")
        if not base:
            raise FormatError(f"{self.text}: missing version", self.text)

        object.__setattr__(self, "base", base)
        object.__setattr__(self, "revision", revision)
        object.__setattr__(self, "epoch", epoch)
        object.__setattr__(
            self,
            "_components",
            tuple(_component_key(t) for t in _COMPONENT.findall(base)),
        )

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse a version string.

        Raises:
            FormatError: If the string is empty or contains whitespace.
        """
        return cls(text)

    def __str__(self) -> str:
        return self.text

    def compare(self, other: PkgVersion | str) -> int:
        """Three-way compare against another version or version string.

        Returns:
            -1, 0 or 1.

        Raises:
            UnsupportedComparisonError: If other is neither a PkgVersion nor a str.
        """
        if isinstance(other, str):
            other = PkgVersion(other)
        elif not isinstance(other, PkgVersion):
            raise UnsupportedComparisonError(self, other)

        if self.epoch != other.epoch:
            return _sign(self.epoch - other.epoch)
        cmp = _compare_components(self._components, other._components)
        if cmp:
            return cmp
        return _sign(self.revision - other.revision)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PkgVersion | str):
            return NotImplemented
        try:
            return self.compare(other) == 0
        except FormatError:
            return False

    def __hash__(self) -> int:
        components = list(self._components)
        while components and components[-1] == _ZERO:
            components.pop()
        return hash((self.epoch, tuple(components), self.revision))

    def __lt__(self, other: PkgVersion | str) -> bool:
        return self.compare(other) < 0

    def __le__(self, other: PkgVersion | str) -> bool:
        return self.compare(other) <= 0

    def __gt__(self, other: PkgVersion | str) -> bool:
        return self.compare(other) > 0

    def __ge__(self, other: PkgVersion | str) -> bool:
        return self.compare(other) >= 0


def _split_numeric_suffix(text: str, separator: str) -> tuple[str, int]:
    head, sep, tail = text.rpartition(separator)
    if sep and tail.isdecimal():
        return head, int(tail)
    return text, 0
