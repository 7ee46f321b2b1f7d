"""Core domain module for portmatch.

This module contains pure Python domain models, the query matcher and
port definitions. It has no I/O dependencies and can be tested in isolation.
"""

from portmatch.core.matching import QueryMatcher, classify_pattern, match_origin
from portmatch.core.models import PackageIdentifier
from portmatch.core.ports import PackageDatabase, PortsDatabase
from portmatch.core.records import PortRecord
from portmatch.core.search import sorted_contains, sorted_search
from portmatch.core.version import PkgVersion


__all__ = [
    "PackageDatabase",
    "PackageIdentifier",
    "PkgVersion",
    "PortRecord",
    "PortsDatabase",
    "QueryMatcher",
    "classify_pattern",
    "match_origin",
    "sorted_contains",
    "sorted_search",
]
