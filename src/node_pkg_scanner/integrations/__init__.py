"""CI integrations that publish a finished scan summary."""

from node_pkg_scanner.integrations.github import GitHubIntegration

__all__ = ["GitHubIntegration"]
