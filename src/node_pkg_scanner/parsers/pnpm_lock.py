"""Parser for ``pnpm-lock.yaml`` lockfiles.

Only the top-level dependency blocks are read, by line scanning rather than
a full YAML load. Lockfile v5 puts the version inline::

    dependencies:
      lodash: 4.17.21
      '@types/node': registry.npmjs.org/@types/node/18.11.9
    devDependencies:
      jest: 29.7.0_@babel+core@7.22.5

while v6+ nests it one level deeper::

    dependencies:
      lodash:
        specifier: ^4.17.21
        version: 4.17.21

A block starts at an unindented ``dependencies:`` or ``devDependencies:``
line and ends at the next line that is not indented by two spaces. Inside a
block, each ``key: value`` line at exactly two spaces of indentation yields
one record; a key with no value waits for its nested ``version:`` line.
Keys starting with ``/`` are resolution paths, not names. The version is
the first semver-shaped substring of the value, or the raw value when
there is none.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from node_pkg_scanner.core.models import DeclarationKind, FormatKind, InstalledPackage
from node_pkg_scanner.parsers.base import ManifestParser

_BLOCK_HEADERS = frozenset({"dependencies:", "devDependencies:"})

_INDENT = "  "
_NESTED_INDENT = "    "

_SEMVER_RE = re.compile(r"\d+\.\d+\.\d+(?:[-+.][0-9A-Za-z]+)*")


@dataclass(frozen=True)
class PnpmLockState:
    """Parser state.

    Attributes:
        in_dependencies: Whether the scan is inside a dependency block.
        pending_name: Entry whose nested ``version:`` line is awaited (v6+).
    """

    in_dependencies: bool = False
    pending_name: str | None = None


def extract_version(value: str) -> str:
    """Return the first semver-shaped substring of ``value``, else ``value``."""
    match = _SEMVER_RE.search(value)
    return match.group(0) if match else value


def _split_entry(line: str) -> tuple[str, str] | None:
    """Split a ``key: value`` line into unquoted key and value."""
    key, sep, value = line.strip().partition(":")
    if not sep:
        return None
    return key.strip().strip("'\""), value.strip().strip("'\"")


def _record(name: str, value: str) -> InstalledPackage:
    return InstalledPackage(
        name=name, version=extract_version(value), kind=DeclarationKind.PNPM_LOCK,
    )


def advance(
    state: PnpmLockState, line: str
) -> tuple[PnpmLockState, InstalledPackage | None]:
    """Consume one line and return the next state and any completed record."""
    if line.rstrip() in _BLOCK_HEADERS:
        return PnpmLockState(in_dependencies=True), None
    if not state.in_dependencies:
        return state, None
    if not line.startswith(_INDENT):
        return PnpmLockState(), None

    if line.startswith(_NESTED_INDENT):
        if state.pending_name is None:
            return state, None
        entry = _split_entry(line)
        if entry is None or entry[0] != "version" or not entry[1]:
            return state, None
        return PnpmLockState(in_dependencies=True), _record(state.pending_name, entry[1])

    if line.startswith(_INDENT + " "):
        return state, None
    entry = _split_entry(line)
    if entry is None:
        return PnpmLockState(in_dependencies=True), None
    name, value = entry
    if not name or name.startswith("/"):
        return PnpmLockState(in_dependencies=True), None
    if not value:
        return PnpmLockState(in_dependencies=True, pending_name=name), None
    return PnpmLockState(in_dependencies=True), _record(name, value)


class PnpmLockParser(ManifestParser):
    """Parser for ``pnpm-lock.yaml`` lockfiles."""

    @property
    def format_kind(self) -> FormatKind:
        return FormatKind.PNPM_LOCK

    def parse(self, content: str) -> list[InstalledPackage]:
        packages: list[InstalledPackage] = []
        state = PnpmLockState()
        for line in content.splitlines():
            state, record = advance(state, line)
            if record is not None:
                packages.append(record)
        return packages
