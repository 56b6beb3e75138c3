"""Manifest and lockfile parsers for npm, yarn and pnpm projects."""

from node_pkg_scanner.parsers.base import ManifestParser
from node_pkg_scanner.parsers.package_json import PackageJsonParser
from node_pkg_scanner.parsers.package_lock import PackageLockParser
from node_pkg_scanner.parsers.pnpm_lock import PnpmLockParser
from node_pkg_scanner.parsers.registry import (
    MANIFEST_FILENAMES,
    MANIFEST_PARSERS,
    parser_for,
)
from node_pkg_scanner.parsers.yarn_lock import YarnLockParser

__all__ = [
    "MANIFEST_FILENAMES",
    "MANIFEST_PARSERS",
    "ManifestParser",
    "PackageJsonParser",
    "PackageLockParser",
    "PnpmLockParser",
    "YarnLockParser",
    "parser_for",
]
