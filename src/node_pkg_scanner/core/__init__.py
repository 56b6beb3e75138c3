"""Core scanning pipeline: data models, matcher, file enumeration and engine."""

from node_pkg_scanner.core.models import (
    CompromisedFinding,
    DeclarationKind,
    FormatKind,
    InstalledPackage,
    Provenance,
    RegistrySource,
    ScanResult,
    ScanSummary,
)

__all__ = [
    "CompromisedFinding",
    "DeclarationKind",
    "FormatKind",
    "InstalledPackage",
    "Provenance",
    "RegistrySource",
    "ScanResult",
    "ScanSummary",
]
