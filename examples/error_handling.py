"""Error handling patterns with recovery hints.

This example demonstrates how to handle common errors and use
the recovery_hint property to provide actionable guidance.
"""

from pathlib import Path

from portmatch import (
    FormatError,
    PackageDatabaseError,
    PackageIdentifier,
    PkgngDatabase,
    PortmatchError,
    PortsIndex,
    QueryMatcher,
    Settings,
    UnterminatedQuoteError,
    shell,
)


# Pattern 1: Reject malformed package names
def parse_or_none(text: str) -> PackageIdentifier | None:
    """Parse a package name, returning None if it is malformed."""
    try:
        return PackageIdentifier.parse(text)
    except FormatError as e:
        print(f"Skipping {e.value!r}: {e}")
        return None


# Pattern 2: Report unterminated quotes with a hint
def split_command(line: str) -> list[str]:
    """Split a command line, explaining how to fix bad quoting."""
    try:
        return shell.tokenize(line)
    except UnterminatedQuoteError as e:
        print(f"Error: {e}")
        print(f"Hint: {e.recovery_hint}")
        raise


# Pattern 3: pkg is not available
def installed_since(date: str) -> list[PackageIdentifier]:
    """List packages installed after a date, or nothing if pkg cannot run."""
    database = PkgngDatabase(Settings.from_env())
    matcher = QueryMatcher(database)
    try:
        packages = database.installed()
    except PackageDatabaseError as e:
        print(f"Error: {e}")
        print(f"Hint: {e.recovery_hint}")
        return []
    return [pkg for pkg in packages if matcher.matches(pkg, f">{date}")]


# Pattern 4: Catch every library error at once
def load_index(path: Path) -> PortsIndex | None:
    """Load an INDEX file, reporting any problem."""
    try:
        return PortsIndex.load(path)
    except OSError as e:
        print(f"Could not read {path}: {e.strerror}")
    except PortmatchError as e:
        print(f"Error: {e}")
        if e.recovery_hint:
            print(f"Hint: {e.recovery_hint}")
    return None


if __name__ == "__main__":
    parse_or_none("not-a-package name-1.0")
    load_index(Path("/usr/ports/INDEX"))
    print(installed_since("2024-01-01"))
