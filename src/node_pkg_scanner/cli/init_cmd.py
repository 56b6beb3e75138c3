"""``node-pkg-scanner init`` -- Write a default configuration file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from node_pkg_scanner.config import DEFAULT_CONFIG_PATH, DEFAULT_CONFIG_TEMPLATE


@click.command("init")
@click.option(
    "-p", "--path", "config_path",
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="Where to write the config file.",
)
@click.option("-f", "--force", is_flag=True, default=False, help="Overwrite existing config file.")
def init_command(config_path: str, force: bool) -> None:
    """Initialize a configuration file with the default settings."""
    target = Path(config_path)
    if target.exists() and not force:
        click.echo(f"Config file already exists at {target}", err=True)
        click.echo("Use --force to overwrite", err=True)
        sys.exit(1)

    try:
        target.write_text(DEFAULT_CONFIG_TEMPLATE, encoding="utf-8")
    except OSError as exc:
        click.echo(f"Failed to create config file: {exc}", err=True)
        sys.exit(1)
    click.echo(f"Created config file: {target}")
