"""Shell word splitting and joining.

The dialect is the POSIX subset needed to pass arguments to external
tools: double quotes with backslash escapes, single quotes without
escapes, bare backslash escapes and unquoted runs. ``join`` only produces
forms that ``tokenize`` reads back unchanged.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from portmatch.core.exceptions import ShellSyntaxError, UnterminatedQuoteError


if TYPE_CHECKING:
    from collections.abc import Iterable


_DOUBLE_QUOTED = re.compile(r'"((?:[^"\\]|\\.)*)"', re.DOTALL)
_SINGLE_QUOTED = re.compile(r"'([^']*)'")
_ESCAPED = re.compile(r"\\(.)", re.DOTALL)
_UNQUOTED = re.compile(r"[^\s\\'\"]+")
_WHITESPACE = re.compile(r"\s+")
_UNESCAPE = re.compile(r"\\(.)", re.DOTALL)

# Anything here makes an argument need quoting
_METACHARACTERS = re.compile(r"[*?{}\[\]<>()~&|\\$;'\"`#\s]")
_ESCAPE_IN_DOUBLE_QUOTES = re.compile(r'([$\\"`])')


def tokenize(line: str) -> list[str]:
    """Split a command line into words.

    Args:
        line: The command line to split.

    Returns:
        List of words with quoting and escaping removed.

    Raises:
        UnterminatedQuoteError: If a quote is opened but never closed.
        ShellSyntaxError: If the line ends with a lone backslash.

    Examples:
        >>> tokenize('make -C "/usr/ports/www/my port" a"b"c')
        ['make', '-C', '/usr/ports/www/my port', 'abc']
    """
    words: list[str] = []
    pos = _skip_whitespace(line, 0)

    while pos < len(line):
        word: list[str] = []
        while pos < len(line):
            if m := _DOUBLE_QUOTED.match(line, pos):
                word.append(_UNESCAPE.sub(r"\1", m.group(1)))
            elif line[pos] == '"':
                raise UnterminatedQuoteError('"', line[pos:])
            elif m := _SINGLE_QUOTED.match(line, pos):
                word.append(m.group(1))
            elif line[pos] == "'":
                raise UnterminatedQuoteError("'", line[pos:])
            elif m := _ESCAPED.match(line, pos):
                word.append(m.group(1))
            elif line[pos] == "\\":
                raise ShellSyntaxError("Dangling backslash at end of line", line[pos:])
            elif m := _UNQUOTED.match(line, pos):
                word.append(m.group(0))
            else:
                # Unquoted whitespace ends the word
                break
            pos = m.end()
        words.append("".join(word))
        pos = _skip_whitespace(line, pos)

    return words


def join(args: Iterable[str]) -> str:
    """Join arguments into a single shell-safe command line.

    Args:
        args: Arguments to join.

    Returns:
        The arguments separated by single spaces, each quoted if needed.

    Examples:
        >>> join(["pkg", "query", "%n-%v", "my port"])
        'pkg query %n-%v "my port"'
    """
    return " ".join(quote(arg) for arg in args)


def quote(arg: str) -> str:
    """Quote one argument for ``join`` if it contains shell metacharacters."""
    if not arg:
        return '""'
    if _METACHARACTERS.search(arg):
        return '"' + _ESCAPE_IN_DOUBLE_QUOTES.sub(r"\\\1", arg) + '"'
    return arg


def _skip_whitespace(line: str, pos: int) -> int:
    m = _WHITESPACE.match(line, pos)
    return m.end() if m else pos
