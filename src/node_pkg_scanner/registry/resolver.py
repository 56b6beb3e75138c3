"""Three-tier resolver for the compromised-packages registry.

Tiers are tried in strict priority order, each only if the previous one is
unavailable:

1. **Remote** -- a single HTTP GET of the configured URL. On success the
   body is parsed and written to the cache.
2. **Cache** -- the last successful fetch, if younger than the timeout.
3. **Embedded** -- a small built-in list of names, so resolution always
   succeeds.

Operator-supplied ``additionalPackages`` are merged in afterwards as
name-only entries. No acquisition failure is ever surfaced to the caller.

Usage::

    resolver = RegistryResolver(RegistryCache(default_cache_path()))
    snapshot = await resolver.resolve(url, cache_timeout_minutes=60)
    if snapshot.used_fallback:
        ...
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable

from node_pkg_scanner.core.models import RegistrySource
from node_pkg_scanner.exceptions import RegistryFetchError
from node_pkg_scanner.registry.cache import RegistryCache
from node_pkg_scanner.registry.embedded import embedded_packages
from node_pkg_scanner.registry.http_client import fetch_text
from node_pkg_scanner.registry.snapshot import RegistrySnapshot, parse_registry_text

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], Awaitable[str]]


class RegistryResolver:
    """Resolves the compromised-packages registry once per scan.

    Args:
        cache: Cache used for the second tier and written after a
            successful remote fetch.
        fetch: Coroutine function returning the body of a URL and raising
            ``RegistryFetchError`` on failure. Defaults to ``fetch_text``.
    """

    def __init__(
        self,
        cache: RegistryCache | None = None,
        *,
        fetch: Fetcher = fetch_text,
    ) -> None:
        self.cache = cache if cache is not None else RegistryCache()
        self._fetch = fetch

    async def resolve(
        self,
        url: str,
        cache_timeout_minutes: float,
        additional_names: Iterable[str] = (),
    ) -> RegistrySnapshot:
        """Resolve the registry snapshot through the three tiers.

        Args:
            url: Location of the remote list.
            cache_timeout_minutes: Maximum accepted age of the cache.
            additional_names: Extra name-only entries from configuration.

        Returns:
            The resolved snapshot. ``snapshot.used_fallback`` is False only
            when the remote fetch succeeded.
        """
        additional = list(additional_names)
        packages, source = await self._resolve_base(url, cache_timeout_minutes)
        snapshot = RegistrySnapshot.build(packages, source, additional)
        if snapshot.additional:
            logger.info(
                "Added %d additional packages from config", len(snapshot.additional)
            )
        return snapshot

    async def _resolve_base(
        self, url: str, cache_timeout_minutes: float
    ) -> tuple[dict[str, list[str]], RegistrySource]:
        logger.info("Fetching compromised packages from: %s", url)
        try:
            content = await self._fetch(url)
        except RegistryFetchError as exc:
            logger.warning("Failed to fetch from remote: %s", exc)
        else:
            packages = parse_registry_text(content)
            self.cache.write(content)
            logger.info(
                "Fetched %d compromised packages from remote", len(packages)
            )
            return packages, RegistrySource.REMOTE

        cached = self.cache.read(cache_timeout_minutes)
        if cached is not None:
            packages = parse_registry_text(cached)
            logger.info("Using cached list with %d compromised packages", len(packages))
            return packages, RegistrySource.CACHE

        packages = embedded_packages()
        logger.warning(
            "No valid cache available; using embedded fallback list with %d packages",
            len(packages),
        )
        return packages, RegistrySource.EMBEDDED
