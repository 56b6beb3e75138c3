"""Rich output formatting helpers for the node-pkg-scanner CLI.

Renders a ``ScanSummary`` as a summary panel plus a per-file table of
compromised packages, with the source of the registry entry colored:

    remote = red, cached = yellow, additional = magenta
"""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from node_pkg_scanner.core.models import Provenance, ScanSummary
from node_pkg_scanner.integrations.github import REFERENCE_URL

_PROVENANCE_STYLES: dict[Provenance, str] = {
    Provenance.REMOTE: "bold red",
    Provenance.CACHED: "yellow",
    Provenance.ADDITIONAL: "magenta",
}

console = Console()


def provenance_style(provenance: Provenance) -> str:
    """Return the Rich style string for a finding's provenance."""
    return _PROVENANCE_STYLES.get(provenance, "white")


def print_banner() -> None:
    console.print("[bold]Node Package Scanner[/bold]")
    console.print("[dim]Scanning for compromised packages from supply chain attacks[/dim]\n")


def print_scan_summary(summary: ScanSummary) -> None:
    """Print the summary panel, the findings table and a verdict line.

    Args:
        summary: Finished scan summary.
    """
    stats = Text.assemble(
        ("Total package files scanned: ", "bold"), (str(summary.total_files_scanned), ""),
        ("\nFiles with compromised packages: ", "bold"),
        (str(summary.files_with_findings), ""),
        ("\nUnique compromised packages found: ", "bold"),
        (str(len(summary.unique_findings)), ""),
    )
    console.print(Panel(stats, title="Scan Results"))

    if summary.used_cached_or_fallback_registry:
        console.print("[yellow]Warning: Used cached/fallback compromised packages list[/yellow]")

    if not summary.has_findings:
        console.print("[bold green]No compromised packages detected[/bold green]")
        return

    table = Table(title="Compromised Packages Detected", show_header=True, header_style="bold")
    table.add_column("File", style="bold")
    table.add_column("Manager", style="dim")
    table.add_column("Package")
    table.add_column("Declared as", style="dim")
    table.add_column("Source", justify="center")

    for result in summary.results_with_findings:
        for finding in result.findings:
            table.add_row(
                result.file_path,
                result.package_manager,
                finding.label,
                finding.kind.value if finding.kind else "-",
                Text(finding.provenance.value, style=provenance_style(finding.provenance)),
            )

    console.print(table)
    console.print(
        "[bold red]These packages are known to be compromised.[/bold red] "
        "Remove them immediately and review your dependency security."
    )
    console.print(f"[dim]Reference: {REFERENCE_URL}[/dim]")
