"""Adapters connecting the core to pkg(8) and INDEX files."""

from portmatch.adapters.index import PortsIndex
from portmatch.adapters.pkgng import PkgngDatabase


__all__ = ["PkgngDatabase", "PortsIndex"]
