"""Shared fixtures for node-pkg-scanner tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from node_pkg_scanner.core.models import RegistrySource
from node_pkg_scanner.registry.cache import RegistryCache
from node_pkg_scanner.registry.snapshot import RegistrySnapshot, parse_registry_text

REGISTRY_TEXT = "# compromised list\nevil-pkg:1.0.0\nbadlib\n"


@pytest.fixture
def registry_text() -> str:
    """Registry text with one versioned and one name-only entry."""
    return REGISTRY_TEXT


@pytest.fixture
def snapshot(registry_text: str) -> RegistrySnapshot:
    """A remote snapshot built from ``registry_text``."""
    return RegistrySnapshot.build(
        parse_registry_text(registry_text), RegistrySource.REMOTE
    )


@pytest.fixture
def cache(tmp_path: Path) -> RegistryCache:
    """A cache isolated under the test's temp directory."""
    return RegistryCache(tmp_path / "cache" / "compromised-packages.json")


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project declaring evil-pkg@1.0.0 and badlib@2.0.0 in package.json.

    Also contains a clean package-lock.json, yarn.lock and pnpm-lock.yaml,
    plus a compromised package hidden under node_modules/.
    """
    root = tmp_path / "project"
    root.mkdir()
    (root / "package.json").write_text(json.dumps({
        "name": "my-app",
        "dependencies": {"evil-pkg": "1.0.0", "express": "^4.18.2"},
        "devDependencies": {"badlib": "2.0.0"},
    }))
    (root / "package-lock.json").write_text(json.dumps({
        "lockfileVersion": 3,
        "packages": {
            "": {"name": "my-app"},
            "node_modules/express": {"version": "4.18.2"},
        },
    }))
    (root / "yarn.lock").write_text(
        "# yarn lockfile v1\n\n"
        "express@^4.18.2:\n"
        '  version "4.18.2"\n'
    )
    (root / "pnpm-lock.yaml").write_text(
        "lockfileVersion: 5.4\n\n"
        "dependencies:\n"
        "  express: 4.18.2\n"
    )
    hidden = root / "node_modules" / "sneaky"
    hidden.mkdir(parents=True)
    (hidden / "package.json").write_text(json.dumps({
        "name": "sneaky",
        "dependencies": {"badlib": "9.9.9"},
    }))
    return root
