"""Pure utility functions for glob pattern handling.

These functions contain no I/O and are safe to use in the core domain.
"""

from __future__ import annotations

from fnmatch import fnmatchcase


# Characters that indicate a glob pattern
_GLOB_METACHARACTERS = frozenset("*?[")


def is_glob_pattern(pattern: str) -> bool:
    """Check if a string contains glob metacharacters.

    Args:
        pattern: A package name, origin or pattern.

    Returns:
        True if pattern contains *, ?, or [ characters.
    """
    return any(char in pattern for char in _GLOB_METACHARACTERS)


def glob_match(pattern: str, name: str) -> bool:
    """Match a whole string against a glob pattern.

    Wildcards match any character, including ``/``. Matching is
    case-sensitive on every platform.

    This is the fnmatch dialect, not the shell's: a backslash is an
    ordinary character rather than an escape.

    Examples:
        >>> glob_match("foo-*", "foo-1.0")
        True
    """
    return fnmatchcase(name, pattern)


def glob_match_path(pattern: str, path: str) -> bool:
    """Match a ``/``-separated path against a glob, segment by segment.

    Wildcards never cross a ``/``: the pattern and the path must have the
    same number of segments and each segment must match on its own.

    Unlike fnmatch(3) with FNM_PERIOD, ``*`` also matches a leading ``.``
    in a segment, and a backslash does not escape the next character.

    Examples:
        >>> glob_match_path("www/*", "www/nginx")
        True
        >>> glob_match_path("*", "www/nginx")
        False
    """
    pattern_parts = pattern.split("/")
    path_parts = path.split("/")

    if len(pattern_parts) != len(path_parts):
        return False

    return all(
        fnmatchcase(part, part_pattern)
        for part_pattern, part in zip(pattern_parts, path_parts, strict=True)
    )
