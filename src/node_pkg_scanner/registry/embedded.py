"""Built-in last-resort compromised-packages list.

Used only when the remote list is unreachable and no fresh cache exists.
Names come from the typosquatted CrowdStrike packages published during the
Shai-Hulud npm campaign. No versions are listed, so any installed version
of these names is reported.
"""

from __future__ import annotations

EMBEDDED_PACKAGES: tuple[str, ...] = (
    "cr0wdstrike-fix",
    "crowdstrike-update",
    "crowdstrike-emergency-fix",
    "crowdstrike-fix-update",
    "crowdstrik-update",
    "croudstrike-fix",
    "crowdstrike-falcon-fix",
    "crowdstrikefix",
)


def embedded_packages() -> dict[str, list[str]]:
    """Return the embedded list as a name -> versions mapping."""
    return {name: [] for name in EMBEDDED_PACKAGES}
