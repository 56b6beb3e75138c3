"""Compromised-packages list format and the resolved registry snapshot.

The list is line-oriented text, identical whether it comes from the network,
the local cache or the embedded fallback::

    # comment lines and blank lines are ignored
    @ctrl/tinycolor:4.1.1
    @ctrl/tinycolor:4.1.2
    crowdstrike-fix

``name:version`` adds one compromised version to that name (split at the
first colon). A bare ``name`` marks every version of the package as
compromised. Repeated lines for the same name accumulate.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from node_pkg_scanner.core.models import Provenance, RegistrySource


def parse_registry_text(content: str) -> dict[str, list[str]]:
    """Parse compromised-packages list text into name -> versions.

    An empty version list means any version of that name is compromised.
    Versions keep their first-seen order and are not repeated.

    Args:
        content: Raw list text.

    Returns:
        Mapping of package name to its ordered compromised versions.
    """
    packages: dict[str, list[str]] = {}
    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        colon = line.find(":")
        if colon > 0:
            name, version = line[:colon], line[colon + 1:]
            versions = packages.setdefault(name, [])
            if version not in versions:
                versions.append(version)
        else:
            packages.setdefault(line, [])
    return packages


@dataclass(frozen=True)
class RegistrySnapshot:
    """The resolved compromised-packages registry for one scan.

    Immutable after construction: ``entries`` is a read-only mapping of
    package name to a tuple of compromised versions.

    Attributes:
        entries: Package name -> compromised versions (empty = any version).
        source: Resolver tier that produced the base list.
        additional: Names introduced by the operator's ``additionalPackages``
            configuration rather than by the base list.
    """

    entries: Mapping[str, tuple[str, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )
    source: RegistrySource = RegistrySource.REMOTE
    additional: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        packages: Mapping[str, Iterable[str]],
        source: RegistrySource,
        additional_names: Iterable[str] = (),
    ) -> RegistrySnapshot:
        """Freeze a parsed mapping and merge operator-supplied names.

        Additional names are stripped; blanks are ignored. A name already in
        the base list keeps its versions and its tier provenance.
        """
        entries = {name: tuple(versions) for name, versions in packages.items()}
        added: set[str] = set()
        for raw_name in additional_names:
            name = raw_name.strip()
            if name and name not in entries:
                entries[name] = ()
                added.add(name)
        return cls(
            entries=MappingProxyType(entries),
            source=source,
            additional=frozenset(added),
        )

    @property
    def used_fallback(self) -> bool:
        """True when the base list did not come from the network."""
        return self.source is not RegistrySource.REMOTE

    def provenance_of(self, name: str) -> Provenance:
        """Provenance reported for findings on ``name``."""
        if name in self.additional:
            return Provenance.ADDITIONAL
        return Provenance.CACHED if self.used_fallback else Provenance.REMOTE

    def get(self, name: str) -> tuple[str, ...] | None:
        return self.entries.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)
