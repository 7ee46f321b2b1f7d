"""Configuration utilities for portmatch.

Settings are read from the same environment variables the ports and
package tools use.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Self


if TYPE_CHECKING:
    from collections.abc import Mapping


DEFAULT_PORTS_DIR = "/usr/ports"
DEFAULT_TMP_ROOT = "/var/tmp"
DEFAULT_PKG_COMMAND = "pkg"


@dataclass(frozen=True, slots=True)
class Settings:
    """Locations and commands used by the adapters.

    Attributes:
        ports_dir: Root of the ports tree.
        index_file: INDEX file describing the ports tree.
        tmp_root: Directory scratch directories are created in.
        pkg_command: The pkg(8) executable.
    """

    ports_dir: Path
    index_file: Path
    tmp_root: Path
    pkg_command: str = DEFAULT_PKG_COMMAND

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Self:
        """Build settings from environment variables.

        Uses PORTSDIR, PORTS_INDEX, PKG_TMPDIR (falling back to TMPDIR) and
        PKG_BIN. Empty variables count as unset.

        Args:
            environ: Mapping to read instead of os.environ.

        Example:
            >>> settings = Settings.from_env({"PORTSDIR": "/home/ports"})
            >>> str(settings.index_file)
            '/home/ports/INDEX'
        """
        env = os.environ if environ is None else environ

        ports_dir = Path(env.get("PORTSDIR") or DEFAULT_PORTS_DIR)
        index_file = Path(env.get("PORTS_INDEX") or ports_dir / "INDEX")
        tmp_root = Path(
            env.get("PKG_TMPDIR") or env.get("TMPDIR") or DEFAULT_TMP_ROOT
        )
        pkg_command = env.get("PKG_BIN") or DEFAULT_PKG_COMMAND

        return cls(
            ports_dir=ports_dir,
            index_file=index_file,
            tmp_root=tmp_root,
            pkg_command=pkg_command,
        )
