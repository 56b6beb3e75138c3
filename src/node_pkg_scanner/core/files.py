"""Directory enumeration for manifest and lockfiles.

Walks the scan root with ``os.walk`` so excluded directories (typically
``node_modules``) are pruned before they are descended into. Exclusion is a
path-segment filter: any directory whose name is listed is skipped at any
depth. Symlinked directories are not followed.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from node_pkg_scanner.exceptions import EnumerationError

logger = logging.getLogger(__name__)


def _raise(exc: OSError) -> None:
    raise EnumerationError(f"Cannot read directory {exc.filename}: {exc.strerror}") from exc


def find_manifest_files(
    root: Path,
    filename: str,
    exclude_dirs: Iterable[str] = (),
) -> list[Path]:
    """Find every file named ``filename`` under ``root``.

    Args:
        root: Directory to search.
        filename: Exact filename to match (e.g. ``"package.json"``).
        exclude_dirs: Directory names pruned at any depth.

    Returns:
        Sorted list of matching file paths.

    Raises:
        EnumerationError: If ``root`` is missing, not a directory, or a
            directory under it cannot be listed.
    """
    if not root.exists():
        raise EnumerationError(f"Scan root does not exist: {root}")
    if not root.is_dir():
        raise EnumerationError(f"Scan root is not a directory: {root}")

    excluded = set(exclude_dirs)
    matches: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise, followlinks=False):
        dirnames[:] = sorted(d for d in dirnames if d not in excluded)
        if filename in filenames:
            matches.append(Path(dirpath) / filename)
    logger.debug("Found %d %s file(s) under %s", len(matches), filename, root)
    return sorted(matches)
