"""Base interface for manifest and lockfile parsers.

Every parser implements the ``ManifestParser`` abstract base class: it
knows the filename it handles and turns that file's raw text into a flat
list of ``InstalledPackage`` records. The four supported formats are
structurally unrelated (two JSON layouts, the yarn lockfile text format and
pnpm's YAML lockfile), so the record is the only shape the matcher sees.

Parsers are stateless and tolerant: malformed input yields an empty list
rather than an exception, so one broken file never aborts a scan.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from node_pkg_scanner.core.models import FormatKind, InstalledPackage


class ManifestParser(ABC):
    """Abstract base class for dependency-file parsers."""

    @property
    @abstractmethod
    def format_kind(self) -> FormatKind:
        """The file format this parser handles."""

    @property
    def filename(self) -> str:
        """Exact filename matched during directory enumeration."""
        return self.format_kind.value

    @abstractmethod
    def parse(self, content: str) -> list[InstalledPackage]:
        """Extract package references from raw file text.

        Must not raise on malformed content -- return an empty list or skip
        individual malformed entries while keeping the rest.

        Args:
            content: Full text of the file.

        Returns:
            List of ``InstalledPackage`` records in file order.
        """
