"""node-pkg-scanner CLI -- Detect compromised npm packages.

Entry point for the ``node-pkg-scanner`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    scan   -- Scan a project for compromised packages.
    init   -- Write a default .config.yml.
    action -- Run as a GitHub Action step.

Usage::

    node-pkg-scanner scan
    node-pkg-scanner scan -d ./my-app --format json
    node-pkg-scanner scan --no-fail --quiet
    node-pkg-scanner init --force
"""

from __future__ import annotations

import click

from node_pkg_scanner import __version__
from node_pkg_scanner.cli.action_cmd import action_command
from node_pkg_scanner.cli.init_cmd import init_command
from node_pkg_scanner.cli.scan import scan_command


@click.group()
@click.version_option(version=__version__)
def cli() -> None:
    """node-pkg-scanner: Detect compromised packages from npm supply chain attacks.

    Scans package.json, package-lock.json, yarn.lock and pnpm-lock.yaml
    files against a list of known-compromised package names and versions.
    """


cli.add_command(scan_command)
cli.add_command(init_command)
cli.add_command(action_command)
