"""Shared fixtures for CLI tests.

The registry fetch is replaced with an in-memory mock and the cache is
isolated per test, so no command touches the network or the system temp
directory.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from click.testing import CliRunner

from node_pkg_scanner.exceptions import RegistryFetchError
from node_pkg_scanner.registry.cache import RegistryCache
from node_pkg_scanner.registry.resolver import RegistryResolver

_GITHUB_ENV = (
    "GITHUB_ACTIONS",
    "GITHUB_OUTPUT",
    "GITHUB_STEP_SUMMARY",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_TOKEN",
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a Click CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _outside_actions(monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every CLI test as if outside a GitHub Actions workflow."""
    for name in _GITHUB_ENV:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def remote_registry(
    monkeypatch: pytest.MonkeyPatch, cache: RegistryCache, registry_text: str,
) -> AsyncMock:
    """Serve ``registry_text`` as the remote list."""
    fetch = AsyncMock(return_value=registry_text)
    monkeypatch.setattr(
        "node_pkg_scanner.cli.scan.RegistryResolver",
        lambda _cache: RegistryResolver(cache, fetch=fetch),
    )
    return fetch


@pytest.fixture
def offline_registry(monkeypatch: pytest.MonkeyPatch, cache: RegistryCache) -> AsyncMock:
    """Make the remote list unreachable with an empty cache."""
    fetch = AsyncMock(side_effect=RegistryFetchError("Timeout fetching list"))
    monkeypatch.setattr(
        "node_pkg_scanner.cli.scan.RegistryResolver",
        lambda _cache: RegistryResolver(cache, fetch=fetch),
    )
    return fetch


@pytest.fixture
def no_config(tmp_path: Path) -> str:
    """Path of a config file that does not exist."""
    return str(tmp_path / "missing.yml")


@pytest.fixture
def clean_project(tmp_path: Path) -> Path:
    """A project with only uncompromised dependencies."""
    root = tmp_path / "clean"
    root.mkdir()
    (root / "package.json").write_text(
        '{"dependencies": {"express": "^4.18.2", "lodash": "4.17.21"}}'
    )
    return root
