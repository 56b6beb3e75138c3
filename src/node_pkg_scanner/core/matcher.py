"""Match installed package records against the compromised registry.

Matching is exact and name-first:

- a name absent from the registry never matches;
- a name listed without versions matches any installed version, and the
  finding carries no version;
- a name listed with versions matches only when the record's literal
  version string is one of them.

There is no semver range evaluation. A manifest range such as ``^1.2.3``
does not match a compromised ``1.2.3``; lockfiles carry resolved versions
and are where versioned entries are expected to hit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping, Sequence

from node_pkg_scanner.core.models import CompromisedFinding, InstalledPackage, Provenance


def _remote(_name: str) -> Provenance:
    return Provenance.REMOTE


def match_packages(
    installed: Iterable[InstalledPackage],
    registry: Mapping[str, Sequence[str]],
    provenance_of: Callable[[str], Provenance] | None = None,
) -> list[CompromisedFinding]:
    """Return the installed records that are compromised, in input order.

    Args:
        installed: Records parsed from one file.
        registry: Package name -> compromised versions (empty = any).
        provenance_of: Assigns provenance per package name. The engine
            passes ``RegistrySnapshot.provenance_of``; defaults to remote.

    Returns:
        One finding per matching record.
    """
    provenance_of = provenance_of or _remote
    findings: list[CompromisedFinding] = []
    for pkg in installed:
        versions = registry.get(pkg.name)
        if versions is None:
            continue
        if len(versions) == 0:
            matched: str | None = None
        elif pkg.version in versions:
            matched = pkg.version
        else:
            continue
        findings.append(CompromisedFinding(
            name=pkg.name,
            version=matched,
            provenance=provenance_of(pkg.name),
            declared_version=pkg.version,
            kind=pkg.kind,
        ))
    return findings
