"""portmatch - package identifiers, ports INDEX records and query matching.

This library provides the parsing and matching core of a FreeBSD-style
package toolchain: ``<name>-<version>`` identifiers with version ordering,
INDEX record parsing and serialization, a query language of globs, regular
expressions and installation-date relations, and shell-safe command line
splitting and joining.

Example:
    >>> from portmatch import PackageIdentifier, QueryMatcher
    >>> pkg = PackageIdentifier.parse("nginx-1.24.0_2,3")
    >>> QueryMatcher().matches(pkg, "nginx-1.*")
    True
    >>> pkg > "nginx-1.22.1"
    True
"""

from portmatch.adapters import PkgngDatabase, PortsIndex
from portmatch.config import Settings
from portmatch.core import shell
from portmatch.core.exceptions import (
    ConfigurationError,
    FormatError,
    PackageDatabaseError,
    PackageNotInstalledError,
    PortmatchError,
    ShellSyntaxError,
    UnsupportedComparisonError,
    UnterminatedQuoteError,
)
from portmatch.core.matching import QueryMatcher, classify_pattern, match_origin
from portmatch.core.models import PackageIdentifier
from portmatch.core.ports import PackageDatabase, PortsDatabase
from portmatch.core.records import PortRecord
from portmatch.core.search import sorted_contains, sorted_search
from portmatch.core.version import PkgVersion
from portmatch.tmpdir import scratch_directory


__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "FormatError",
    "PackageDatabase",
    "PackageDatabaseError",
    "PackageIdentifier",
    "PackageNotInstalledError",
    "PkgVersion",
    "PkgngDatabase",
    "PortRecord",
    "PortmatchError",
    "PortsDatabase",
    "PortsIndex",
    "QueryMatcher",
    "Settings",
    "ShellSyntaxError",
    "UnsupportedComparisonError",
    "UnterminatedQuoteError",
    "__version__",
    "classify_pattern",
    "match_origin",
    "scratch_directory",
    "shell",
    "sorted_contains",
    "sorted_search",
]
