"""Tests for ``node-pkg-scanner action`` (GitHub Action entry point)."""

from __future__ import annotations

from pathlib import Path

import pytest
from click.testing import CliRunner

from node_pkg_scanner.cli.main import cli


@pytest.fixture
def action_env(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path, project_dir: Path,
) -> Path:
    """Run from the project root as an Actions step; returns the output file."""
    output = tmp_path / "github_output"
    monkeypatch.chdir(project_dir)
    monkeypatch.setenv("INPUT_CONFIG-PATH", str(tmp_path / "missing.yml"))
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.setenv("GITHUB_OUTPUT", str(output))
    return output


@pytest.mark.usefixtures("remote_registry")
class TestAction:
    def test_fails_on_findings(self, runner: CliRunner, action_env: Path) -> None:
        result = runner.invoke(cli, ["action"])
        assert result.exit_code == 1

    def test_fail_on_error_false(
        self, runner: CliRunner, action_env: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("INPUT_FAIL-ON-ERROR", "false")
        result = runner.invoke(cli, ["action"])
        assert result.exit_code == 0

    def test_writes_step_outputs(self, runner: CliRunner, action_env: Path) -> None:
        runner.invoke(cli, ["action"])
        lines = action_env.read_text().splitlines()
        assert "compromised-found=true" in lines
        assert "compromised-count=2" in lines
        assert "total-files=4" in lines
        assert "using-cache=false" in lines

    def test_prints_annotations(self, runner: CliRunner, action_env: Path) -> None:
        result = runner.invoke(cli, ["action"])
        assert "::error file=package.json,title=Compromised package::" in result.output

    def test_invalid_config_reported_as_workflow_error(
        self, runner: CliRunner, action_env: Path, tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        config = tmp_path / "bad.yml"
        config.write_text("cacheTimeout: -5\n")
        monkeypatch.setenv("INPUT_CONFIG-PATH", str(config))
        result = runner.invoke(cli, ["action"])
        assert result.exit_code == 1
        assert "::error::Scan failed" in result.output
