"""``node-pkg-scanner scan`` -- Scan a project for compromised npm packages.

Loads the configuration, resolves the compromised-packages list (remote,
then cache, then embedded fallback), scans every ``package.json``,
``package-lock.json``, ``yarn.lock`` and ``pnpm-lock.yaml`` under the root
and reports the findings.

Exit Codes:
    0 -- No compromised packages found (or ``--no-fail``).
    1 -- Compromised packages found, or the configuration / scan root is
         invalid.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from pathlib import Path

import click

from node_pkg_scanner.config import DEFAULT_CONFIG_PATH, ScannerConfig, load_config
from node_pkg_scanner.core.engine import ScanEngine
from node_pkg_scanner.core.models import ScanSummary
from node_pkg_scanner.exceptions import ConfigError, EnumerationError
from node_pkg_scanner.integrations.github import GitHubIntegration
from node_pkg_scanner.registry.cache import RegistryCache
from node_pkg_scanner.registry.resolver import RegistryResolver

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route library logging to stderr at the requested level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run_scan(
    config: ScannerConfig,
    directory: str | None,
    cache_file: str | None = None,
) -> ScanSummary:
    """Build the engine and run one scan synchronously.

    Raises:
        EnumerationError: If the scan root cannot be walked.
    """
    cache = RegistryCache(Path(cache_file) if cache_file else None)
    engine = ScanEngine(config, resolver=RegistryResolver(cache))
    return asyncio.run(engine.scan(directory))


def report(
    summary: ScanSummary,
    config: ScannerConfig,
    *,
    output_format: str = "text",
    github_token: str | None = None,
) -> None:
    """Render the summary and publish it to GitHub Actions when running there."""
    if output_format == "json":
        click.echo(json.dumps(summary.to_dict(), indent=2))
    else:
        from node_pkg_scanner.cli.output import print_scan_summary
        print_scan_summary(summary)

    github = GitHubIntegration(github_token)
    if github.in_actions:
        asyncio.run(github.publish(summary, config.severity_level))


@click.command("scan")
@click.option(
    "-c", "--config", "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Path to config file.",
)
@click.option(
    "-d", "--directory",
    type=click.Path(file_okay=False),
    default=None,
    help="Root directory to scan (default: rootDirectory from config, else cwd).",
)
@click.option(
    "--fail/--no-fail",
    default=True,
    help="Exit with code 1 when compromised packages are found (default: fail).",
)
@click.option("--quiet", is_flag=True, default=False, help="Suppress non-essential output.")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose logging.")
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    help="Output format: text (default) or json.",
)
@click.option(
    "--cache-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Location of the cached compromised-packages list.",
)
def scan_command(
    config_path: str,
    directory: str | None,
    fail: bool,
    quiet: bool,
    verbose: bool,
    output_format: str,
    cache_file: str | None,
) -> None:
    """Scan for compromised packages.

    Checks package.json, package-lock.json, yarn.lock and pnpm-lock.yaml
    files against the compromised-packages list.

    Exit code 0 if clean, 1 if compromised packages are found.
    """
    configure_logging(verbose, quiet)
    if not quiet and output_format == "text":
        from node_pkg_scanner.cli.output import print_banner
        print_banner()

    try:
        config = load_config(config_path)
        summary = run_scan(config, directory, cache_file)
    except (ConfigError, EnumerationError) as exc:
        click.echo(f"Scan failed: {exc}", err=True)
        sys.exit(1)

    report(summary, config, output_format=output_format)

    if fail and summary.has_findings:
        sys.exit(1)
