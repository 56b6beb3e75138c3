"""Tests for the yarn.lock parser and its line state machine."""

from __future__ import annotations

import pytest

from node_pkg_scanner.core.models import DeclarationKind, InstalledPackage
from node_pkg_scanner.parsers.yarn_lock import YarnLockParser, YarnLockState, advance


@pytest.fixture
def parser() -> YarnLockParser:
    return YarnLockParser()


def _pairs(parser: YarnLockParser, content: str) -> list[tuple[str, str]]:
    return [(p.name, p.version) for p in parser.parse(content)]


CLASSIC_LOCK = """\
# THIS IS AN AUTOGENERATED FILE. DO NOT EDIT THIS FILE DIRECTLY.
# yarn lockfile v1


"@babel/core@^7.0.0", "@babel/core@^7.22.0":
  version "7.22.5"
  resolved "https://registry.yarnpkg.com/@babel/core/-/core-7.22.5.tgz#abc"
  dependencies:
    "@babel/code-frame" "^7.22.5"
    debug "^4.1.0"

debug@^4.1.0:
  version "4.3.4"
  resolved "https://registry.yarnpkg.com/debug/-/debug-4.3.4.tgz#def"

lodash@^4.17.0, lodash@^4.17.21:
  version "4.17.21"
"""

BERRY_LOCK = """\
__metadata:
  version: 6
  cacheKey: 8

"lodash@npm:^4.17.21":
  version: 4.17.21
  resolution: "lodash@npm:4.17.21"
  languageName: node
  linkType: hard
"""


class TestYarnLockParser:
    def test_leftpad_scenario(self, parser: YarnLockParser) -> None:
        assert parser.parse('leftpad@^1.0.0:\n  version "1.3.0"\n') == [
            InstalledPackage("leftpad", "1.3.0", DeclarationKind.YARN_LOCK),
        ]

    def test_classic_lockfile(self, parser: YarnLockParser) -> None:
        assert _pairs(parser, CLASSIC_LOCK) == [
            ("@babel/core", "7.22.5"),
            ("debug", "4.3.4"),
            ("lodash", "4.17.21"),
        ]

    def test_berry_lockfile(self, parser: YarnLockParser) -> None:
        assert _pairs(parser, BERRY_LOCK) == [("lodash", "4.17.21")]

    def test_key_range_is_discarded(self, parser: YarnLockParser) -> None:
        pkgs = parser.parse('foo@1.0.0:\n  version "1.0.1"\n')
        assert pkgs[0].version == "1.0.1"

    def test_declaration_without_version_dropped(self, parser: YarnLockParser) -> None:
        content = 'orphan@^1.0.0:\n  resolved "x"\n\nkept@^2.0.0:\n  version "2.0.0"\n'
        assert _pairs(parser, content) == [("kept", "2.0.0")]

    def test_version_without_declaration_ignored(self, parser: YarnLockParser) -> None:
        assert parser.parse('  version "1.0.0"\n') == []

    def test_only_first_version_line_counts(self, parser: YarnLockParser) -> None:
        content = 'a@^1:\n  version "1.0.0"\n  version "9.9.9"\n'
        assert _pairs(parser, content) == [("a", "1.0.0")]

    def test_empty_and_garbage(self, parser: YarnLockParser) -> None:
        assert parser.parse("") == []
        assert parser.parse("\x00 binary \x01 junk") == []


class TestYarnLockStateMachine:
    """Transition table of ``advance``."""

    def test_declaration_sets_pending_name(self) -> None:
        state, record = advance(YarnLockState(), "left-pad@^1.3.0:")
        assert state == YarnLockState(current_name="left-pad")
        assert record is None

    def test_version_completes_record_and_resets(self) -> None:
        state, record = advance(YarnLockState("left-pad"), '  version "1.3.0"')
        assert state == YarnLockState()
        assert record == InstalledPackage("left-pad", "1.3.0", DeclarationKind.YARN_LOCK)

    def test_new_declaration_replaces_pending(self) -> None:
        state, record = advance(YarnLockState("old"), '"new@^2":')
        assert state.current_name == "new"
        assert record is None

    @pytest.mark.parametrize("line", [
        '  resolved "https://registry.yarnpkg.com/@scope/pkg/-/pkg-1.0.0.tgz"',
        '    "@scope/dep" "^1.0.0"',
        "  dependencies:",
        "# yarn lockfile v1",
        "",
    ])
    def test_other_lines_keep_state(self, line: str) -> None:
        state = YarnLockState("pending")
        assert advance(state, line) == (state, None)

    def test_idle_ignores_version_line(self) -> None:
        assert advance(YarnLockState(), '  version "1.0.0"') == (YarnLockState(), None)
