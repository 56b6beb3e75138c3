"""Parser for ``package.json`` manifests.

Reads the four dependency groups and emits one record per entry::

    {
      "dependencies": {"express": "^4.18.2"},
      "devDependencies": {"jest": "29.7.0"},
      "peerDependencies": {"react": ">=17"},
      "optionalDependencies": {"fsevents": "2.3.3"}
    }

Versions are recorded as written. In a manifest they are usually ranges,
so an exact-version registry entry only matches a pinned declaration.
"""

from __future__ import annotations

import json

from node_pkg_scanner.core.models import DeclarationKind, FormatKind, InstalledPackage
from node_pkg_scanner.parsers.base import ManifestParser

# Declaration groups in the order they are read.
_GROUPS: tuple[DeclarationKind, ...] = (
    DeclarationKind.DEPENDENCIES,
    DeclarationKind.DEV_DEPENDENCIES,
    DeclarationKind.PEER_DEPENDENCIES,
    DeclarationKind.OPTIONAL_DEPENDENCIES,
)


class PackageJsonParser(ManifestParser):
    """Parser for npm ``package.json`` manifests."""

    @property
    def format_kind(self) -> FormatKind:
        return FormatKind.PACKAGE_JSON

    def parse(self, content: str) -> list[InstalledPackage]:
        try:
            data = json.loads(content)
        except (ValueError, RecursionError):
            return []
        if not isinstance(data, dict):
            return []

        packages: list[InstalledPackage] = []
        for kind in _GROUPS:
            group = data.get(kind.value)
            if not isinstance(group, dict):
                continue
            for name, version in group.items():
                packages.append(InstalledPackage(name=name, version=str(version), kind=kind))
        return packages
