"""GitHub Actions integration: step outputs, annotations, summaries, PR comments.

Everything here consumes a finished ``ScanSummary``; nothing feeds back into
the scan. Environment variables follow the Actions runner contract:

- ``GITHUB_ACTIONS`` -- ``"true"`` inside a workflow run.
- ``GITHUB_OUTPUT`` / ``GITHUB_STEP_SUMMARY`` -- files appended to for step
  outputs and the job summary.
- ``GITHUB_EVENT_PATH`` -- JSON payload of the triggering event.
- ``GITHUB_REPOSITORY`` / ``GITHUB_API_URL`` -- target of the PR comment.
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from pathlib import Path

import httpx

from node_pkg_scanner.core.models import ScanSummary
from node_pkg_scanner.exceptions import IntegrationError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"

REFERENCE_URL = (
    "https://socket.dev/blog/ongoing-supply-chain-attack-targets-crowdstrike-npm-packages"
)

# Config severity -> workflow command
_ANNOTATION_COMMANDS: dict[str, str] = {
    "error": "error",
    "warning": "warning",
    "info": "notice",
}

COMMENT_MARKER = "<!-- node-pkg-scanner -->"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


class GitHubIntegration:
    """Publishes scan results to a GitHub Actions run.

    Args:
        token: GitHub token for the PR comment. Without one, commenting is
            skipped.
        env: Environment mapping; defaults to ``os.environ``.
        transport: Optional httpx transport (used by tests).
    """

    def __init__(
        self,
        token: str | None = None,
        env: Mapping[str, str] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.env = env if env is not None else os.environ
        self.token = token or self.env.get("GITHUB_TOKEN") or None
        self._transport = transport

    @property
    def in_actions(self) -> bool:
        return self.env.get("GITHUB_ACTIONS") == "true"

    # -- step outputs and annotations ------------------------------------

    def outputs(self, summary: ScanSummary) -> dict[str, str]:
        return {
            "compromised-found": "true" if summary.has_findings else "false",
            "compromised-count": str(len(summary.unique_findings)),
            "total-files": str(summary.total_files_scanned),
            "using-cache": "true" if summary.used_cached_or_fallback_registry else "false",
        }

    def set_outputs(self, summary: ScanSummary) -> None:
        """Append step outputs to the ``GITHUB_OUTPUT`` file."""
        output_file = self.env.get("GITHUB_OUTPUT")
        if not output_file:
            logger.debug("GITHUB_OUTPUT not set; skipping step outputs")
            return
        lines = "".join(f"{k}={v}\n" for k, v in self.outputs(summary).items())
        try:
            with open(output_file, "a", encoding="utf-8") as fh:
                fh.write(lines)
        except OSError as exc:
            logger.warning("Could not write step outputs to %s: %s", output_file, exc)

    def annotations(self, summary: ScanSummary, severity_level: str = "error") -> list[str]:
        """Workflow commands annotating each compromised package in its file."""
        command = _ANNOTATION_COMMANDS.get(severity_level, "error")
        lines: list[str] = []
        for result in summary.results_with_findings:
            for finding in result.findings:
                message = (
                    f"Compromised package {finding.label} "
                    f"[{finding.provenance.value}] in {result.file_path}"
                )
                lines.append(
                    f"::{command} file={_escape_property(result.file_path)},"
                    f"title=Compromised package::{_escape_data(message)}"
                )
        return lines

    # -- markdown report -------------------------------------------------

    def build_comment(self, summary: ScanSummary) -> str:
        """Render the markdown report used for PR comments and job summaries."""
        lines = [COMMENT_MARKER, "## Compromised Package Scan", ""]
        lines.append(f"- Total package files scanned: **{summary.total_files_scanned}**")
        lines.append(f"- Files with compromised packages: **{summary.files_with_findings}**")
        lines.append(
            f"- Unique compromised packages found: **{len(summary.unique_findings)}**"
        )
        if summary.used_cached_or_fallback_registry:
            lines += ["", "> :warning: Used cached/fallback compromised packages list."]

        if not summary.has_findings:
            lines += ["", ":white_check_mark: No compromised packages detected."]
            return "\n".join(lines) + "\n"

        lines += ["", "| File | Package | Declared as | Source |", "|---|---|---|---|"]
        for result in summary.results_with_findings:
            for finding in result.findings:
                declared = finding.kind.value if finding.kind else "-"
                lines.append(
                    f"| `{result.file_path}` | `{finding.label}` | {declared} "
                    f"| {finding.provenance.value} |"
                )
        lines += [
            "",
            "These packages are known to be compromised. Remove them and review "
            "your dependency security.",
            f"Reference: {REFERENCE_URL}",
        ]
        return "\n".join(lines) + "\n"

    def write_job_summary(self, summary: ScanSummary) -> None:
        """Append the markdown report to ``GITHUB_STEP_SUMMARY``."""
        summary_file = self.env.get("GITHUB_STEP_SUMMARY")
        if not summary_file:
            return
        try:
            with open(summary_file, "a", encoding="utf-8") as fh:
                fh.write(self.build_comment(summary))
        except OSError as exc:
            logger.warning("Could not write job summary to %s: %s", summary_file, exc)

    # -- pull request comment --------------------------------------------

    def pull_request_number(self) -> int | None:
        """PR number from the event payload, or None outside PR events."""
        event_path = self.env.get("GITHUB_EVENT_PATH")
        if not event_path:
            return None
        try:
            event = json.loads(Path(event_path).read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read event payload %s: %s", event_path, exc)
            return None
        pr = event.get("pull_request") if isinstance(event, dict) else None
        number = pr.get("number") if isinstance(pr, dict) else None
        return number if isinstance(number, int) else None

    async def post_pr_comment(self, summary: ScanSummary) -> bool:
        """Post the report as a pull request comment.

        Returns:
            True if a comment was posted, False if skipped (no token, no
            repository, or not a pull request event).

        Raises:
            IntegrationError: If the GitHub API call fails.
        """
        repository = self.env.get("GITHUB_REPOSITORY")
        number = self.pull_request_number()
        if not self.token or not repository or number is None:
            logger.debug("Not a pull request run with a token; skipping PR comment")
            return False

        api_url = self.env.get("GITHUB_API_URL", DEFAULT_API_URL).rstrip("/")
        url = f"{api_url}/repos/{repository}/issues/{number}/comments"
        headers = {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
        }
        try:
            async with httpx.AsyncClient(
                timeout=30.0, headers=headers, transport=self._transport,
            ) as client:
                resp = await client.post(url, json={"body": self.build_comment(summary)})
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise IntegrationError(
                f"GitHub API returned HTTP {exc.response.status_code} for {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise IntegrationError(f"GitHub API request failed: {exc}") from exc
        logger.info("Posted scan results to pull request #%d", number)
        return True

    async def publish(self, summary: ScanSummary, severity_level: str = "error") -> None:
        """Run every Actions integration step for a finished scan.

        Annotations go to stdout as workflow commands. A failed PR comment
        is logged, not raised.
        """
        for line in self.annotations(summary, severity_level):
            print(line)
        self.set_outputs(summary)
        self.write_job_summary(summary)
        try:
            await self.post_pr_comment(summary)
        except IntegrationError as exc:
            logger.warning("Could not post PR comment: %s", exc)
