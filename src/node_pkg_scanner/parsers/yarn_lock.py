"""Parser for ``yarn.lock`` lockfiles (classic v1 and berry).

Each block starts with an unindented declaration line and carries the
resolved version on an indented ``version`` line::

    leftpad@^1.0.0, leftpad@^1.1.0:
      version "1.3.0"
      resolved "https://registry.yarnpkg.com/leftpad/-/leftpad-1.3.0.tgz"

    "@babel/core@npm:^7.22.0":
      version: 7.22.5

The range in the declaration key is discarded; only the resolved version is
recorded. Parsing is a two-state machine threaded through one pass over the
lines: either no package is pending, or a declaration has been seen and the
parser waits for its version line. A declaration with no version before the
next declaration is dropped.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from node_pkg_scanner.core.models import DeclarationKind, FormatKind, InstalledPackage
from node_pkg_scanner.parsers.base import ManifestParser

# "name@range:", "@scope/name@range:", optionally quoted, possibly a list.
_DECLARATION_RE = re.compile(r'^"?(@?[^@"\s]+)@[^"]*"?.*:\s*$')

# '  version "1.2.3"' (classic) or '  version: 1.2.3' (berry).
_VERSION_RE = re.compile(r'^\s+version:?\s+"?([^"\s]+)"?\s*$')


@dataclass(frozen=True)
class YarnLockState:
    """Parser state: the package whose version line is awaited, if any."""

    current_name: str | None = None


def advance(
    state: YarnLockState, line: str
) -> tuple[YarnLockState, InstalledPackage | None]:
    """Consume one line and return the next state and any completed record."""
    declaration = _DECLARATION_RE.match(line)
    if declaration:
        return YarnLockState(current_name=declaration.group(1)), None

    if state.current_name is not None:
        version = _VERSION_RE.match(line)
        if version:
            record = InstalledPackage(
                name=state.current_name,
                version=version.group(1),
                kind=DeclarationKind.YARN_LOCK,
            )
            return YarnLockState(), record

    return state, None


class YarnLockParser(ManifestParser):
    """Parser for ``yarn.lock`` lockfiles."""

    @property
    def format_kind(self) -> FormatKind:
        return FormatKind.YARN_LOCK

    def parse(self, content: str) -> list[InstalledPackage]:
        packages: list[InstalledPackage] = []
        state = YarnLockState()
        for line in content.splitlines():
            state, record = advance(state, line)
            if record is not None:
                packages.append(record)
        return packages
