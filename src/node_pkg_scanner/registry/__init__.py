"""Compromised-packages registry: list format, cache, and three-tier resolver.

Public API::

    from node_pkg_scanner.registry import RegistryResolver, RegistrySnapshot
    from node_pkg_scanner.registry import RegistryCache, parse_registry_text
"""

from __future__ import annotations

from node_pkg_scanner.registry.cache import RegistryCache, default_cache_path
from node_pkg_scanner.registry.embedded import EMBEDDED_PACKAGES
from node_pkg_scanner.registry.resolver import RegistryResolver
from node_pkg_scanner.registry.snapshot import RegistrySnapshot, parse_registry_text

__all__ = [
    "EMBEDDED_PACKAGES",
    "RegistryCache",
    "RegistryResolver",
    "RegistrySnapshot",
    "default_cache_path",
    "parse_registry_text",
]
