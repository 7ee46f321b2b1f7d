"""Tests validating that example code patterns work correctly.

These tests ensure the examples in the examples/ directory represent
working, copy-pasteable code patterns.
"""

import re
from pathlib import Path

import pytest

from portmatch import (
    FormatError,
    PackageIdentifier,
    PkgVersion,
    PortmatchError,
    PortsIndex,
    UnterminatedQuoteError,
    shell,
)


@pytest.mark.core
class TestBasicUsage:
    """Tests for basic_usage.py example pattern."""

    def test_identifier_and_versions(self) -> None:
        """Identifiers split at the last dash; versions order numerically."""
        pkg = PackageIdentifier.parse("p5-libwww-6.72")

        assert pkg.name == "p5-libwww"
        assert str(pkg.version) == "6.72"
        assert PkgVersion("1.10") > PkgVersion("1.9")
        assert PkgVersion("2.0_1") > PkgVersion("2.0")
        assert PkgVersion("1.0,1") > PkgVersion("9.9")
        assert pkg.compare("p5-libwww-6.8") == 1

    def test_index_lookup_and_select(self, tmp_path: Path, index_line: str) -> None:
        """An INDEX can be queried by origin, glob and regex."""
        path = tmp_path / "INDEX"
        path.write_text(index_line)
        index = PortsIndex.load(path)

        nginx = index.get("www/nginx")
        assert nginx is not None
        assert nginx.comment == "Robust and small WWW server"
        assert [r.origin for r in index.select("www/*")] == ["www/nginx"]
        assert index.select(re.compile(r"^py3\d+-requests-")) == []

    def test_join_then_tokenize(self) -> None:
        """A joined command line splits back into the same words."""
        args = ["make", "-C", "/usr/ports/www/my port", "install"]
        command = shell.join(args)

        assert command == 'make -C "/usr/ports/www/my port" install'
        assert shell.tokenize(command) == args


@pytest.mark.core
class TestErrorHandling:
    """Tests for error_handling.py example pattern."""

    def test_format_error_carries_value(self) -> None:
        """FormatError exposes the rejected input."""
        with pytest.raises(FormatError) as exc_info:
            PackageIdentifier.parse("not-a-package name-1.0")

        assert exc_info.value.value == "not-a-package name-1.0"

    def test_unterminated_quote_has_hint(self) -> None:
        """Quoting errors come with a recovery hint."""
        with pytest.raises(UnterminatedQuoteError) as exc_info:
            shell.tokenize('echo "abc')

        assert exc_info.value.recovery_hint is not None

    def test_base_class_catches_index_errors(self, tmp_path: Path) -> None:
        """PortmatchError catches malformed INDEX files."""
        path = tmp_path / "INDEX"
        path.write_text("broken\n")

        with pytest.raises(PortmatchError):
            PortsIndex.load(path)
