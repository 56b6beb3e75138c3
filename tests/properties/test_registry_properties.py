"""Property-based tests for the registry format, matcher and cache.

Properties verified:
    1. Parsing is insensitive to comments, blank lines and surrounding
       whitespace.
    2. Repeating a list's lines does not change the parsed registry.
    3. A finding is reported exactly when the name is listed and either the
       name has no versions or the literal version is listed.
    4. A cache entry is served exactly when its age is within the timeout.
"""

from __future__ import annotations

import tempfile
from pathlib import Path

from hypothesis import given, settings
from hypothesis import strategies as st

from node_pkg_scanner.core.matcher import match_packages
from node_pkg_scanner.core.models import DeclarationKind, InstalledPackage
from node_pkg_scanner.registry.cache import RegistryCache
from node_pkg_scanner.registry.snapshot import parse_registry_text

# npm-like names and versions: no colons, no whitespace, no leading '#'
names = st.from_regex(r"(@[a-z0-9-]{1,8}/)?[a-z0-9][a-z0-9._-]{0,12}", fullmatch=True)
versions = st.from_regex(r"[0-9]{1,2}\.[0-9]{1,2}\.[0-9]{1,2}(-[a-z0-9]{1,5})?", fullmatch=True)

entries = st.tuples(names, st.one_of(st.none(), versions))


def _render(lines: list[tuple[str, str | None]]) -> list[str]:
    return [name if version is None else f"{name}:{version}" for name, version in lines]


@given(st.lists(entries, max_size=20), st.data())
def test_comments_and_whitespace_ignored(lines, data) -> None:
    """Noise lines and padding never change the parsed registry."""
    plain = "\n".join(_render(lines))
    noisy: list[str] = []
    for line in _render(lines):
        if data.draw(st.booleans()):
            noisy.append("# " + line)
        if data.draw(st.booleans()):
            noisy.append("")
        noisy.append("  " + line + "\t")
    assert parse_registry_text("\n".join(noisy)) == parse_registry_text(plain)


@given(st.lists(entries, max_size=20))
def test_repetition_is_idempotent(lines) -> None:
    """Each listed (name, version) pair is recorded once."""
    text = "\n".join(_render(lines))
    assert parse_registry_text(text + "\n" + text) == parse_registry_text(text)


@given(st.lists(entries, max_size=20))
def test_every_listed_name_present(lines) -> None:
    """Every name in the list appears; versioned lines add their version."""
    parsed = parse_registry_text("\n".join(_render(lines)))
    for name, version in lines:
        assert name in parsed
        if version is not None:
            assert version in parsed[name]


@given(
    registry=st.dictionaries(names, st.lists(versions, max_size=3), max_size=10),
    installed=st.lists(st.tuples(names, versions), max_size=20),
)
def test_exact_match_law(registry, installed) -> None:
    """Findings are exactly the records satisfying the match rule."""
    records = [
        InstalledPackage(name, version, DeclarationKind.NPM_LOCK)
        for name, version in installed
    ]
    findings = match_packages(records, registry)
    expected = [
        r for r in records
        if r.name in registry
        and (not registry[r.name] or r.version in registry[r.name])
    ]
    assert [(f.name, f.declared_version) for f in findings] == [
        (r.name, r.version) for r in expected
    ]
    for finding in findings:
        listed = registry[finding.name]
        assert finding.version == (finding.declared_version if listed else None)


@settings(max_examples=50)
@given(
    timeout_minutes=st.integers(min_value=0, max_value=10_000),
    age_ms=st.integers(min_value=0, max_value=10_000 * 60_000 + 1),
)
def test_cache_freshness_boundary(timeout_minutes, age_ms) -> None:
    """The cache is served iff its age does not exceed the timeout."""
    written_at = 1_700_000_000_000
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "cache.json"
        RegistryCache(path, clock=lambda: written_at / 1000).write("a\n")
        reader = RegistryCache(path, clock=lambda: (written_at + age_ms) / 1000)
        served = reader.read(timeout_minutes)
    assert (served is not None) == (age_ms <= timeout_minutes * 60_000)
