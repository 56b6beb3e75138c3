"""``node-pkg-scanner action`` -- GitHub Action entry point.

Reads the action inputs from the environment, as the Actions runner
exposes them:

    INPUT_CONFIG-PATH     Config file (default: .config.yml)
    INPUT_GITHUB-TOKEN    Token used to comment on pull requests
    INPUT_FAIL-ON-ERROR   "false" to never fail the step on findings
"""

from __future__ import annotations

import os
import sys

import click

from node_pkg_scanner.cli.scan import configure_logging, report, run_scan
from node_pkg_scanner.config import DEFAULT_CONFIG_PATH, load_config
from node_pkg_scanner.exceptions import ConfigError, EnumerationError


def _input(name: str) -> str:
    return os.environ.get(f"INPUT_{name.upper()}", "").strip()


@click.command("action")
def action_command() -> None:
    """Run the scan as a GitHub Action step."""
    configure_logging()
    config_path = _input("config-path") or DEFAULT_CONFIG_PATH
    github_token = _input("github-token") or None
    fail_on_error = _input("fail-on-error") != "false"

    try:
        config = load_config(config_path)
        summary = run_scan(config, None)
    except (ConfigError, EnumerationError) as exc:
        click.echo(f"::error::Scan failed: {exc}")
        sys.exit(1)

    report(summary, config, github_token=github_token)

    if fail_on_error and summary.has_findings:
        sys.exit(1)
