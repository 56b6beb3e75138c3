"""Static lookup from manifest filename to parser.

The supported formats are a closed set, so there is no runtime
registration: ``MANIFEST_PARSERS`` lists one parser per format in the fixed
order the scan engine processes them, which keeps cumulative results
deterministic.

=====================  ======================  ==========
Filename               Parser                  Manager
=====================  ======================  ==========
``package.json``       ``PackageJsonParser``   npm
``package-lock.json``  ``PackageLockParser``   npm
``yarn.lock``          ``YarnLockParser``      yarn
``pnpm-lock.yaml``     ``PnpmLockParser``      pnpm
=====================  ======================  ==========
"""

from __future__ import annotations

from node_pkg_scanner.parsers.base import ManifestParser
from node_pkg_scanner.parsers.package_json import PackageJsonParser
from node_pkg_scanner.parsers.package_lock import PackageLockParser
from node_pkg_scanner.parsers.pnpm_lock import PnpmLockParser
from node_pkg_scanner.parsers.yarn_lock import YarnLockParser

MANIFEST_PARSERS: tuple[ManifestParser, ...] = (
    PackageJsonParser(),
    PackageLockParser(),
    YarnLockParser(),
    PnpmLockParser(),
)

_BY_FILENAME: dict[str, ManifestParser] = {p.filename: p for p in MANIFEST_PARSERS}

MANIFEST_FILENAMES: tuple[str, ...] = tuple(_BY_FILENAME)


def parser_for(filename: str) -> ManifestParser | None:
    """Return the parser for an exact manifest filename, or None."""
    return _BY_FILENAME.get(filename)
