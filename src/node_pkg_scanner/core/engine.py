"""Scan engine: resolve the registry, walk the project, parse, match, aggregate.

One ``scan`` call is a single linear pass with no state kept between calls:

1. Resolve the compromised-packages registry (once).
2. For each supported format, in fixed order, enumerate matching files
   under the root (excluded directories pruned).
3. Read, parse and match each file, one at a time.
4. Aggregate per-file results into a ``ScanSummary``.

File I/O and directory walks run in worker threads so the event loop only
suspends at I/O boundaries. Failing to enumerate the root is fatal; failing
to read one file skips that file.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Iterable
from pathlib import Path

from node_pkg_scanner.config import ScannerConfig
from node_pkg_scanner.core.files import find_manifest_files
from node_pkg_scanner.core.matcher import match_packages
from node_pkg_scanner.core.models import CompromisedFinding, ScanResult, ScanSummary
from node_pkg_scanner.parsers.base import ManifestParser
from node_pkg_scanner.parsers.registry import MANIFEST_PARSERS
from node_pkg_scanner.registry.resolver import RegistryResolver
from node_pkg_scanner.registry.snapshot import RegistrySnapshot

logger = logging.getLogger(__name__)


def dedupe_findings(results: Iterable[ScanResult]) -> list[CompromisedFinding]:
    """Collect findings across files, first occurrence per (name, version)."""
    seen: set[tuple[str, str | None]] = set()
    unique: list[CompromisedFinding] = []
    for result in results:
        for finding in result.findings:
            if finding.key not in seen:
                seen.add(finding.key)
                unique.append(finding)
    return unique


class ScanEngine:
    """Orchestrates a compromised-package scan of one project tree.

    Args:
        config: Validated scanner configuration.
        resolver: Registry resolver; a default one (system temp cache) is
            created when omitted.
        relative_to: Base for reported file paths. Defaults to the current
            working directory at scan time.
        parsers: Parsers to run, in order. Defaults to all four formats.
    """

    def __init__(
        self,
        config: ScannerConfig | None = None,
        *,
        resolver: RegistryResolver | None = None,
        relative_to: Path | None = None,
        parsers: tuple[ManifestParser, ...] = MANIFEST_PARSERS,
    ) -> None:
        self.config = config if config is not None else ScannerConfig()
        self.resolver = resolver if resolver is not None else RegistryResolver()
        self.relative_to = relative_to
        self.parsers = parsers

    async def scan(
        self,
        root_dir: str | Path | None = None,
        exclude_dirs: Iterable[str] | None = None,
    ) -> ScanSummary:
        """Resolve the registry and scan ``root_dir``.

        Args:
            root_dir: Project root. Defaults to ``config.root_directory``,
                then the current working directory.
            exclude_dirs: Directory names to skip. Defaults to
                ``config.exclude_directories``.

        Returns:
            The project-wide scan summary.

        Raises:
            EnumerationError: If the root cannot be walked.
        """
        root = Path(root_dir or self.config.root_directory or Path.cwd())
        excluded = list(
            exclude_dirs if exclude_dirs is not None else self.config.exclude_directories
        )
        logger.info("Starting compromised package scan in: %s", root)

        snapshot = await self.resolver.resolve(
            self.config.compromised_packages_url,
            self.config.cache_timeout,
            self.config.additional_packages,
        )
        return await self.scan_directory(root, snapshot, excluded)

    async def scan_directory(
        self,
        root: Path,
        snapshot: RegistrySnapshot,
        exclude_dirs: Iterable[str] = (),
    ) -> ScanSummary:
        """Scan ``root`` against an already-resolved registry snapshot."""
        excluded = list(exclude_dirs)
        base = self.relative_to if self.relative_to is not None else Path.cwd()

        results: list[ScanResult] = []
        total_files = 0
        for parser in self.parsers:
            files = await asyncio.to_thread(
                find_manifest_files, root, parser.filename, excluded
            )
            total_files += len(files)
            for path in files:
                result = await self._scan_file(path, parser, snapshot, base)
                if result is not None:
                    results.append(result)

        with_findings = [r for r in results if r.has_findings]
        summary = ScanSummary(
            total_files_scanned=total_files,
            files_with_findings=len(with_findings),
            unique_findings=dedupe_findings(with_findings),
            used_cached_or_fallback_registry=snapshot.used_fallback,
            per_file_results=results,
        )
        logger.info(
            "Scanned %d file(s); %d with compromised packages; %d unique finding(s)",
            summary.total_files_scanned,
            summary.files_with_findings,
            len(summary.unique_findings),
        )
        return summary

    async def _scan_file(
        self,
        path: Path,
        parser: ManifestParser,
        snapshot: RegistrySnapshot,
        base: Path,
    ) -> ScanResult | None:
        """Parse and match one file; None if unreadable or empty."""
        try:
            content = await asyncio.to_thread(path.read_text, encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

        try:
            installed = parser.parse(content)
        except Exception as exc:
            logger.warning("Could not parse %s: %s", path, exc)
            return None
        findings = match_packages(installed, snapshot.entries, snapshot.provenance_of)
        logger.debug(
            "%s: %d package(s), %d compromised", path, len(installed), len(findings)
        )
        if not installed and not findings:
            return None
        return ScanResult(
            file_path=os.path.relpath(path, base),
            format_kind=parser.format_kind,
            findings=findings,
            installed=installed,
        )
