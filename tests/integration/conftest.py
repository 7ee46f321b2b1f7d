"""Shared fixtures for integration tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from portmatch.core.records import FIELDS


if TYPE_CHECKING:
    from pathlib import Path


def _line(ports_dir: Path, pkgname: str, origin: str, **fields: str) -> str:
    values = {field: "" for field in FIELDS}
    values.update(
        pkgname=pkgname,
        origin=f"{ports_dir}/{origin}",
        descr_file=f"{ports_dir}/{origin}/pkg-descr",
        categories=origin.split("/")[0],
        **fields,
    )
    return "|".join(values[field] for field in FIELDS) + "\n"


@pytest.fixture
def ports_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A ports tree with an INDEX, selected through PORTSDIR.

    PKG_TMPDIR points at a scratch area inside tmp_path.
    """
    ports_dir = tmp_path / "ports"
    ports_dir.mkdir()
    (tmp_path / "scratch").mkdir()

    (ports_dir / "INDEX").write_text(
        _line(
            ports_dir,
            "nginx-1.24.0_2,3",
            "www/nginx",
            comment="Robust and small WWW server",
            build_depends=f"{ports_dir}/devel/pcre2",
            run_depends=f"{ports_dir}/devel/pcre2 {ports_dir}/security/openssl",
        )
        + _line(ports_dir, "pcre2-10.42", "devel/pcre2", comment="Perl Compatible Regular Expressions")
        + _line(ports_dir, "openssl-3.0.12,1", "security/openssl", comment="TLSv1.3 capable SSL and crypto library")
        + _line(ports_dir, "py311-requests-2.31.0", "www/py-requests", comment="HTTP library written in Python")
    )

    monkeypatch.setenv("PORTSDIR", str(ports_dir))
    monkeypatch.delenv("PORTS_INDEX", raising=False)
    monkeypatch.setenv("PKG_TMPDIR", str(tmp_path / "scratch"))
    return ports_dir
