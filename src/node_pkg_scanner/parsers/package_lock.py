"""Parser for npm ``package-lock.json`` lockfiles (v1, v2 and v3).

Two layouts exist in the wild:

- **v2/v3** (preferred): a flat ``packages`` object keyed by install path.
  The ``""`` key is the root project; real dependencies live under
  a leading ``node_modules/``. Only that prefix is stripped, so a nested copy
  keeps its parent path as part of its name and never shadows the hoisted
  package of the same name::

      "packages": {
        "": {"name": "my-app"},
        "node_modules/lodash": {"version": "4.17.21"},
        "node_modules/a/node_modules/b": {"version": "1.0.0"}
      }

- **v1** (legacy): a ``dependencies`` object of ``name -> {version}``.

v2 lockfiles carry both. The legacy layout is consulted only when the
``packages`` pass yields nothing, mirroring npm's own preference.
"""

from __future__ import annotations

import json
from typing import Any

from node_pkg_scanner.core.models import DeclarationKind, FormatKind, InstalledPackage
from node_pkg_scanner.parsers.base import ManifestParser

_INSTALL_PREFIX = "node_modules/"

UNKNOWN_VERSION = "unknown"


def _version_of(info: Any) -> str:
    if isinstance(info, dict):
        version = info.get("version")
        if version:
            return str(version)
    return UNKNOWN_VERSION


class PackageLockParser(ManifestParser):
    """Parser for npm ``package-lock.json`` lockfiles."""

    @property
    def format_kind(self) -> FormatKind:
        return FormatKind.PACKAGE_LOCK

    def parse(self, content: str) -> list[InstalledPackage]:
        try:
            data = json.loads(content)
        except (ValueError, RecursionError):
            return []
        if not isinstance(data, dict):
            return []

        packages = self._parse_packages(data.get("packages"))
        if not packages:
            packages = self._parse_legacy(data.get("dependencies"))
        return packages

    def _parse_packages(self, section: Any) -> list[InstalledPackage]:
        """Read the v2/v3 ``packages`` layout, first occurrence per name."""
        if not isinstance(section, dict):
            return []
        seen: set[str] = set()
        packages: list[InstalledPackage] = []
        for install_path, info in section.items():
            # Root project (""), workspace folders and their installs are skipped.
            if not install_path.startswith(_INSTALL_PREFIX):
                continue
            name = install_path[len(_INSTALL_PREFIX):]
            if not name or name in seen:
                continue
            seen.add(name)
            packages.append(InstalledPackage(
                name=name, version=_version_of(info), kind=DeclarationKind.NPM_LOCK,
            ))
        return packages

    def _parse_legacy(self, section: Any) -> list[InstalledPackage]:
        """Read the v1 ``dependencies`` layout."""
        if not isinstance(section, dict):
            return []
        return [
            InstalledPackage(
                name=name, version=_version_of(info), kind=DeclarationKind.NPM_LOCK,
            )
            for name, info in section.items()
        ]
