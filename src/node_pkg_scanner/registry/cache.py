"""Timestamped on-disk cache of the last successfully fetched list.

The cache is a single JSON object::

    {"timestamp": 1726000000000, "content": "<raw list text>"}

``timestamp`` is the capture time in epoch milliseconds. The cache is
written at most once per scan (after a successful remote fetch) and read at
most once (after a failed one). Every failure here is non-fatal: a write
error is logged and ignored, a read error is reported as "no valid cache".
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from pathlib import Path

logger = logging.getLogger(__name__)

CACHE_DIR_NAME: str = "node-pkg-scanner"
CACHE_FILE_NAME: str = "compromised-packages.json"

_MS_PER_MINUTE = 60_000


def default_cache_path() -> Path:
    """Fixed cache location under the system temp directory."""
    return Path(tempfile.gettempdir()) / CACHE_DIR_NAME / CACHE_FILE_NAME


class RegistryCache:
    """Reads and writes the cached compromised-packages list.

    Args:
        path: Cache file location. Injected so tests can isolate it.
        clock: Returns the current time in seconds since the epoch.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.path = path if path is not None else default_cache_path()
        self._clock = clock

    def _now_ms(self) -> int:
        return round(self._clock() * 1000)

    def write(self, content: str) -> None:
        """Persist ``content`` with the current timestamp."""
        payload = json.dumps({"timestamp": self._now_ms(), "content": content})
        try:
            self.path.parent.mkdir(mode=0o700, parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
            os.chmod(self.path, 0o600)
        except OSError as exc:
            logger.warning("Could not write cache %s: %s", self.path, exc)

    def read(self, timeout_minutes: float) -> str | None:
        """Return the cached list text if present and not stale.

        The cache is stale when its age exceeds ``timeout_minutes``; a cache
        exactly ``timeout_minutes`` old is still valid.

        Args:
            timeout_minutes: Maximum accepted cache age.

        Returns:
            The cached raw list text, or None if there is no valid cache.
        """
        if not self.path.is_file():
            logger.info("No cache file at %s", self.path)
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as exc:
            logger.warning("Could not read cache %s: %s", self.path, exc)
            return None

        if not isinstance(data, dict):
            logger.warning("Ignoring malformed cache %s", self.path)
            return None
        timestamp = data.get("timestamp")
        content = data.get("content")
        if (
            isinstance(timestamp, bool)
            or not isinstance(timestamp, (int, float))
            or not isinstance(content, str)
        ):
            logger.warning("Ignoring malformed cache %s", self.path)
            return None

        age_ms = self._now_ms() - timestamp
        if age_ms > timeout_minutes * _MS_PER_MINUTE:
            logger.info(
                "Cache is %d minutes old (timeout: %s)",
                round(age_ms / _MS_PER_MINUTE), timeout_minutes,
            )
            return None
        return content
