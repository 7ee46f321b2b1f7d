"""Basic usage of portmatch.

This example shows how to parse package names, compare versions, read
an INDEX file and query it with the same patterns the CLI accepts.
"""

import re
from pathlib import Path

from portmatch import PackageIdentifier, PkgVersion, PortsIndex, shell


# Package identifiers split at the last dash
pkg = PackageIdentifier.parse("p5-libwww-6.72")
print(pkg.name)  # p5-libwww
print(pkg.version)  # 6.72

# Versions compare numerically, with revision and epoch taken into account
print(PkgVersion("1.10") > PkgVersion("1.9"))  # True
print(PkgVersion("2.0_1") > PkgVersion("2.0"))  # True
print(PkgVersion("1.0,1") > PkgVersion("9.9"))  # True
print(pkg.compare("p5-libwww-6.8"))  # 1

# Read an INDEX file and look ports up by origin
index = PortsIndex.load(Path("/usr/ports/INDEX"))
nginx = index.get("www/nginx")
if nginx is not None:
    print(nginx.pkgname, nginx.comment)
    print(nginx.required_depends())

# Origin globs, package globs and regexes all work with select()
for record in index.select("www/*"):
    print(record.origin)
for record in index.select(re.compile(r"^py3\d+-requests-")):
    print(record.pkgname)

# Build a shell-safe command line and split it back into words
command = shell.join(["make", "-C", "/usr/ports/www/my port", "install"])
print(command)  # make -C "/usr/ports/www/my port" install
print(shell.tokenize(command))
