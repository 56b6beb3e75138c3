"""Scan data models: declarations, findings, per-file results and summaries.

These are pure data holders (dataclasses and enums) with no business logic,
so the parsers, the matcher, the engine and the reporters can all import
them without circular-dependency concerns.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class DeclarationKind(str, Enum):
    """Where a package reference was declared.

    The four direct kinds are the dependency groups of ``package.json``.
    The lockfile kinds mark versions resolved by a package manager.
    """

    DEPENDENCIES = "dependencies"
    DEV_DEPENDENCIES = "devDependencies"
    PEER_DEPENDENCIES = "peerDependencies"
    OPTIONAL_DEPENDENCIES = "optionalDependencies"
    NPM_LOCK = "package-lock.json"
    YARN_LOCK = "yarn.lock"
    PNPM_LOCK = "pnpm-lock.yaml"

    @property
    def is_lockfile(self) -> bool:
        return self in (
            DeclarationKind.NPM_LOCK,
            DeclarationKind.YARN_LOCK,
            DeclarationKind.PNPM_LOCK,
        )


class FormatKind(str, Enum):
    """Supported manifest and lockfile formats, keyed by filename."""

    PACKAGE_JSON = "package.json"
    PACKAGE_LOCK = "package-lock.json"
    YARN_LOCK = "yarn.lock"
    PNPM_LOCK = "pnpm-lock.yaml"

    @property
    def package_manager(self) -> str:
        """The package manager that owns this file ("npm", "yarn", "pnpm")."""
        if self is FormatKind.YARN_LOCK:
            return "yarn"
        if self is FormatKind.PNPM_LOCK:
            return "pnpm"
        return "npm"


class Provenance(str, Enum):
    """How the registry entry behind a finding was obtained."""

    REMOTE = "remote"
    CACHED = "cached"
    ADDITIONAL = "additional"


class RegistrySource(str, Enum):
    """Which resolver tier produced the base compromised-packages list."""

    REMOTE = "remote"
    CACHE = "cache"
    EMBEDDED = "embedded"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InstalledPackage:
    """A single package reference extracted from a manifest or lockfile.

    Attributes:
        name: Package name exactly as written in the file.
        version: Literal version string from the file. For ``package.json``
            this is usually a range (``^1.2.3``), not a resolved version.
        kind: Declaration group or lockfile the record came from.
    """

    name: str
    version: str
    kind: DeclarationKind


@dataclass(frozen=True)
class CompromisedFinding:
    """An installed package confirmed to match the registry snapshot.

    Attributes:
        name: Compromised package name.
        version: The matched compromised version, or None when the registry
            lists the name without versions (any version is compromised).
        provenance: How the matching registry entry was obtained.
        declared_version: The version string found in the scanned file.
        kind: Where the package was declared.
    """

    name: str
    version: str | None
    provenance: Provenance
    declared_version: str = ""
    kind: DeclarationKind | None = None

    @property
    def key(self) -> tuple[str, str | None]:
        """Deduplication key across files."""
        return (self.name, self.version)

    @property
    def label(self) -> str:
        return f"{self.name}@{self.version}" if self.version else self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "version": self.version,
            "source": self.provenance.value,
            "declared_version": self.declared_version,
            "declared_as": self.kind.value if self.kind else None,
        }


@dataclass
class ScanResult:
    """Result of scanning one manifest or lockfile.

    Attributes:
        file_path: Path of the file relative to the invocation root.
        format_kind: Which of the four supported formats the file is.
        findings: Compromised packages found in the file.
        installed: Every package reference parsed from the file.
    """

    file_path: str
    format_kind: FormatKind
    findings: list[CompromisedFinding] = field(default_factory=list)
    installed: list[InstalledPackage] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return len(self.findings) > 0

    @property
    def package_manager(self) -> str:
        return self.format_kind.package_manager

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file_path,
            "format": self.format_kind.value,
            "package_manager": self.package_manager,
            "installed_count": len(self.installed),
            "findings": [f.to_dict() for f in self.findings],
        }


@dataclass
class ScanSummary:
    """Project-wide aggregate handed to reporting and CI integration.

    Attributes:
        total_files_scanned: Every file matched by the four filename
            patterns, whether or not it yielded records.
        files_with_findings: Number of files with at least one finding.
        unique_findings: Findings deduplicated by ``(name, version)``;
            the first occurrence's provenance wins.
        used_cached_or_fallback_registry: True when the registry came from
            the cache or the embedded list instead of the network.
        per_file_results: Results for files that produced records or findings.
    """

    total_files_scanned: int = 0
    files_with_findings: int = 0
    unique_findings: list[CompromisedFinding] = field(default_factory=list)
    used_cached_or_fallback_registry: bool = False
    per_file_results: list[ScanResult] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return len(self.unique_findings) > 0

    @property
    def results_with_findings(self) -> list[ScanResult]:
        return [r for r in self.per_file_results if r.has_findings]

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_files": self.total_files_scanned,
            "compromised_files": self.files_with_findings,
            "compromised_packages": [f.to_dict() for f in self.unique_findings],
            "using_cached_list": self.used_cached_or_fallback_registry,
            "scan_results": [r.to_dict() for r in self.per_file_results],
        }
