"""Domain exceptions for portmatch.

All library errors inherit from PortmatchError, allowing callers to catch
any library exception with a single except clause. Each exception provides
a recovery_hint property with guidance on resolving the error.
"""

from __future__ import annotations


class PortmatchError(Exception):
    """Base class for all portmatch exceptions.

    Catch this to handle any error from the library.
    """

    @property
    def recovery_hint(self) -> str | None:
        """Optional guidance on how to resolve this error."""
        return None


class FormatError(PortmatchError, ValueError):
    """Raised when a string cannot be parsed into a domain value.

    Covers malformed package identifiers, versions, INDEX records, origins,
    dates and packing lists.

    Attributes:
        value: The offending input, if known.
    """

    def __init__(self, message: str, value: str | None = None) -> None:
        self.value = value
        super().__init__(message)


class ShellSyntaxError(PortmatchError, ValueError):
    """Raised when a command line cannot be split into words.

    Attributes:
        remainder: The unconsumed part of the line where lexing stopped.
    """

    def __init__(self, message: str, remainder: str = "") -> None:
        self.remainder = remainder
        super().__init__(message)


class UnterminatedQuoteError(ShellSyntaxError):
    """Raised when a quoted run is opened but never closed.

    Attributes:
        quote: The quote character that was left open.
    """

    def __init__(self, quote: str, remainder: str) -> None:
        self.quote = quote
        kind = "double" if quote == '"' else "single"
        super().__init__(f"Unmatched {kind} quote: {remainder}", remainder)

    @property
    def recovery_hint(self) -> str:
        """Suggest closing the quote."""
        return f"Add the closing {self.quote} or escape the opening one"


class UnsupportedComparisonError(PortmatchError, TypeError):
    """Raised when a value is compared with an incompatible type."""

    def __init__(self, left: object, right: object) -> None:
        self.left_type = type(left).__name__
        self.right_type = type(right).__name__
        super().__init__(
            f"Comparison between {self.right_type} and {self.left_type} is not supported"
        )


class PackageNotInstalledError(PortmatchError, LookupError):
    """Raised when the package database has no record of a package.

    Attributes:
        pkgname: The package name that was looked up.
    """

    def __init__(self, pkgname: str) -> None:
        self.pkgname = pkgname
        super().__init__(f"{pkgname}: not installed")

    @property
    def recovery_hint(self) -> str:
        """Suggest listing installed packages."""
        return "Run 'portmatch installed \"*\"' to list installed packages"


class PackageDatabaseError(PortmatchError):
    """Raised when the package database tool fails.

    Attributes:
        command: The command line that failed.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        command: str,
        cause: Exception | None = None,
    ) -> None:
        self.command = command
        self.cause = cause
        super().__init__(message)

    @property
    def recovery_hint(self) -> str:
        """Suggest running the command by hand."""
        return f"Try running the command manually: {self.command}"


class ConfigurationError(PortmatchError):
    """Raised for configuration problems (missing directories, bad settings)."""

    pass
