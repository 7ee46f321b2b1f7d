"""Unit tests for the PkgngDatabase adapter.

pkg is never executed: a recording runner stands in for subprocess.run.
"""

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from pathlib import Path

import pytest

from portmatch.config import Settings
from portmatch.core.exceptions import FormatError, PackageDatabaseError
from portmatch.core.models import PackageIdentifier


class RecordingRunner:
    """Returns canned pkg output and records each command."""

    def __init__(self, stdout: str = "", returncode: int = 0) -> None:
        self.stdout = stdout
        self.returncode = returncode
        self.commands: list[list[str]] = []

    def __call__(self, args):
        self.commands.append(list(args))
        return subprocess.CompletedProcess(args, self.returncode, stdout=self.stdout, stderr="")


def _database(runner: RecordingRunner, pkg: str = "pkg"):
    from portmatch.adapters.pkgng import PkgngDatabase

    return PkgngDatabase(Settings.from_env({"PKG_BIN": pkg}), runner=runner)


@pytest.mark.adapters
class TestQuery:
    """Tests for query()."""

    def test_builds_command_with_options_first(self) -> None:
        """Options go between "query" and the format string."""
        runner = RecordingRunner("foo-1.0\n")

        output = _database(runner, pkg="/usr/local/sbin/pkg").query(
            "%n-%v", "foo", options=("-x",)
        )

        assert output == "foo-1.0"
        assert runner.commands == [["/usr/local/sbin/pkg", "query", "-x", "%n-%v", "foo"]]

    def test_nonzero_exit_is_none(self) -> None:
        """pkg's no-match exit status is reported as None."""
        assert _database(RecordingRunner("", returncode=1)).query("%t", "foo") is None

    def test_empty_output_is_none(self) -> None:
        """A successful but silent query is reported as None."""
        assert _database(RecordingRunner("\n")).query("%t", "foo") is None

    def test_unrunnable_pkg_raises(self) -> None:
        """An OSError from the runner becomes PackageDatabaseError."""
        from portmatch.adapters.pkgng import PkgngDatabase

        def missing(args):
            raise FileNotFoundError(2, "No such file or directory", args[0])

        database = PkgngDatabase(Settings.from_env({"PKG_BIN": "nopkg"}), runner=missing)

        with pytest.raises(PackageDatabaseError, match="Could not run nopkg") as exc_info:
            database.query("%t", "foo")

        assert exc_info.value.command == "nopkg query %t foo"
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_logs_command(self) -> None:
        """Each query is logged at debug level with its command line."""
        from structlog.testing import capture_logs

        with capture_logs() as logs:
            _database(RecordingRunner("x\n")).query("%n-%v", "foo bar")

        assert logs[0]["event"] == "pkg_query"
        assert logs[0]["command"] == 'pkg query %n-%v "foo bar"'


@pytest.mark.adapters
class TestDateInstalled:
    """Tests for date_installed()."""

    def test_converts_timestamp(self) -> None:
        """%t output is read as a Unix timestamp in UTC."""
        runner = RecordingRunner("1622548800\n")

        assert _database(runner).date_installed("foo") == datetime(2021, 6, 1, 12, 0, tzinfo=UTC)
        assert runner.commands == [["pkg", "query", "%t", "foo"]]

    def test_uses_first_line(self) -> None:
        """When a glob-like name matches several packages the first wins."""
        runner = RecordingRunner("1622548800\n1552638600\n")

        assert _database(runner).date_installed("foo") == datetime(2021, 6, 1, 12, 0, tzinfo=UTC)

    def test_not_installed(self) -> None:
        """An unknown package has no installation date."""
        assert _database(RecordingRunner("", returncode=1)).date_installed("qux") is None

    def test_garbage_timestamp_raises(self) -> None:
        """Non-numeric output is a PackageDatabaseError."""
        with pytest.raises(PackageDatabaseError, match="unexpected install time"):
            _database(RecordingRunner("soon\n")).date_installed("foo")


@pytest.mark.adapters
class TestInstalled:
    """Tests for installed(), origin() and identify_file()."""

    def test_installed_is_sorted(self) -> None:
        """installed() parses and sorts every listed package."""
        runner = RecordingRunner("zsh-5.9\ncurl-8.4.0\ncurl-8.10.1\n")

        assert _database(runner).installed() == [
            PackageIdentifier.parse("curl-8.4.0"),
            PackageIdentifier.parse("curl-8.10.1"),
            PackageIdentifier.parse("zsh-5.9"),
        ]
        assert runner.commands == [["pkg", "query", "-a", "%n-%v"]]

    def test_installed_empty(self) -> None:
        """No packages gives an empty list."""
        assert _database(RecordingRunner("", returncode=1)).installed() == []

    def test_origin(self) -> None:
        """origin() reports the %o field."""
        runner = RecordingRunner("www/nginx\n")

        assert _database(runner).origin("nginx") == "www/nginx"

    def test_identify_file(self) -> None:
        """identify_file() reads the name out of a package file."""
        runner = RecordingRunner("nginx-1.24.0_2,3\n")

        pkg = _database(runner).identify_file(Path("/tmp/nginx.pkg"))

        assert pkg == PackageIdentifier.parse("nginx-1.24.0_2,3")
        assert runner.commands == [["pkg", "query", "-F", "/tmp/nginx.pkg", "%n-%v"]]

    def test_identify_unreadable_file(self) -> None:
        """A file pkg cannot read is a FormatError."""
        with pytest.raises(FormatError, match="Couldn't get package name"):
            _database(RecordingRunner("", returncode=1)).identify_file(Path("/tmp/junk"))

    def test_parse_date_delegates(self) -> None:
        """parse_date() accepts the command-line date layouts."""
        parsed = _database(RecordingRunner()).parse_date("2024-12-10")

        assert parsed.date() == datetime(2024, 12, 10).date()


@pytest.mark.adapters
class TestGetInfo:
    """Tests for get_info() and the per-field wrappers."""

    @pytest.mark.parametrize(
        ("what", "fmt"),
        [
            ("prefix", "%p"),
            ("comment", "%c"),
            ("message", "%M"),
            ("req", "%dn-%dv"),
            ("required_by", "%rn-%rv"),
            ("mtime", "%t"),
            ("files", "%Fp"),
            ("totalsize", "%sb"),
            ("origin", "%o"),
        ],
    )
    def test_flag_table(self, what: str, fmt: str) -> None:
        """Each kind of information maps to its pkg-query format."""
        runner = RecordingRunner("value\n")

        assert _database(runner).get_info("nginx", what) == "value"
        assert runner.commands == [["pkg", "query", fmt, "nginx"]]

    def test_unsupported_information(self) -> None:
        """Unknown keys are rejected before pkg is run."""
        runner = RecordingRunner("value\n")

        with pytest.raises(ValueError, match="descr: Unsupported information"):
            _database(runner).get_info("nginx", "descr")
        assert runner.commands == []

    def test_scalar_wrappers(self) -> None:
        """prefix(), comment() and message() return the raw text."""
        assert _database(RecordingRunner("/usr/local\n")).prefix("nginx") == "/usr/local"
        assert _database(RecordingRunner("Robust WWW server\n")).comment("nginx") == "Robust WWW server"
        assert _database(RecordingRunner("", returncode=1)).message("nginx") is None

    def test_required_by(self) -> None:
        """required_by() parses one identifier per line."""
        runner = RecordingRunner("py311-certbot-2.7.4\nnextcloud-php82-27.1.3\n")

        assert _database(runner).required_by("nginx") == [
            PackageIdentifier.parse("py311-certbot-2.7.4"),
            PackageIdentifier.parse("nextcloud-php82-27.1.3"),
        ]
        assert runner.commands == [["pkg", "query", "%rn-%rv", "nginx"]]

    def test_requires_empty(self) -> None:
        """A package without dependencies has an empty list."""
        assert _database(RecordingRunner("")).requires("pkg") == []

    def test_files_collapses_slashes(self) -> None:
        """Repeated slashes in file paths are collapsed."""
        runner = RecordingRunner("/usr/local//sbin/nginx\n/usr/local/etc///nginx/mime.types\n")

        assert _database(runner).files("nginx") == [
            "/usr/local/sbin/nginx",
            "/usr/local/etc/nginx/mime.types",
        ]

    def test_files_not_installed(self) -> None:
        """An unknown package has no files."""
        assert _database(RecordingRunner("", returncode=1)).files("qux") == []

    def test_total_size(self) -> None:
        """total_size() reads %sb as bytes."""
        assert _database(RecordingRunner("1048576\n")).total_size("nginx") == 1048576
        assert _database(RecordingRunner("", returncode=1)).total_size("qux") is None

    def test_total_size_garbage(self) -> None:
        """A non-numeric size is a PackageDatabaseError."""
        with pytest.raises(PackageDatabaseError, match="unexpected size"):
            _database(RecordingRunner("big\n")).total_size("nginx")
