"""Ports database adapter backed by an INDEX file."""

from __future__ import annotations

from typing import TYPE_CHECKING, Self

import structlog

from portmatch.core.exceptions import FormatError
from portmatch.core.records import PortRecord
from portmatch.core.search import sorted_search


if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

    from portmatch.core.matching import PatternSource, QueryMatcher


logger = structlog.get_logger(__name__)

# INDEX files are byte-transparent; undecodable bytes survive a load/dump cycle
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


class PortsIndex:
    """PortsDatabase over the records of an INDEX file.

    Records are kept sorted by origin. When several records share an
    origin, the first one wins.
    """

    def __init__(
        self,
        records: Iterable[PortRecord],
        matcher: QueryMatcher | None = None,
    ) -> None:
        """Initialize the index.

        Args:
            records: Port records in any order.
            matcher: Matcher used by select(); pass one with a package
                database to enable date relations.
        """
        unique: dict[str, PortRecord] = {}
        for record in records:
            unique.setdefault(record.origin, record)
        self._records = sorted(unique.values())
        self._matcher = matcher

    @classmethod
    def load(cls, path: Path, matcher: QueryMatcher | None = None) -> Self:
        """Read an INDEX file.

        Blank lines are skipped.

        Raises:
            FormatError: If a line is not a valid record; the message
                carries the file name and line number.
        """
        records: list[PortRecord] = []
        with path.open(encoding=_ENCODING, errors=_ERRORS) as f:
            for lineno, line in enumerate(f, 1):
                if not line.strip():
                    continue
                try:
                    records.append(PortRecord.parse(line))
                except FormatError as e:
                    raise FormatError(f"{path}:{lineno}: {e}", e.value) from e

        logger.debug("ports_index_loaded", path=str(path), records=len(records))
        return cls(records, matcher=matcher)

    def dump(self, path: Path, ports_dir: str | None = None) -> None:
        """Write the records to an INDEX file, sorted by origin.

        Args:
            path: Destination file.
            ports_dir: Tree root for origin and descr_file; defaults to
                each record's own.
        """
        with path.open("w", encoding=_ENCODING, errors=_ERRORS) as f:
            for record in self._records:
                f.write(record.serialize(ports_dir))

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[PortRecord]:
        return iter(self._records)

    def __contains__(self, origin: object) -> bool:
        return isinstance(origin, str) and self.get(origin) is not None

    def get(self, origin: str) -> PortRecord | None:
        """Return the record for an origin such as "www/nginx", or None."""
        index = sorted_search(self._records, origin)
        return None if index is None else self._records[index]

    def select(self, pattern: PatternSource) -> list[PortRecord]:
        """Return records whose origin or package matches pattern."""
        return [r for r in self._records if r.matches(pattern, self._matcher)]
