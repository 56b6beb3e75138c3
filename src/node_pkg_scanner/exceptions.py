"""node-pkg-scanner exception hierarchy.

All public exceptions inherit from NodePkgScannerError, giving callers a
single base class to catch when they want to handle any scanner-specific
failure without swallowing unrelated errors.
"""


class NodePkgScannerError(Exception):
    """Base exception for all node-pkg-scanner errors."""


class ConfigError(NodePkgScannerError):
    """Raised when the scanner configuration is invalid.

    Covers unreadable or malformed YAML, wrong field types, unknown
    severity levels, invalid registry URLs and negative cache timeouts.
    Always fatal: raised before any scanning begins.
    """


class EnumerationError(NodePkgScannerError):
    """Raised when the scan root cannot be walked.

    Covers a missing root directory, a root that is not a directory, and
    permission errors during traversal. Without file discovery no
    meaningful result is possible, so the whole scan aborts.
    """


class RegistryFetchError(NodePkgScannerError):
    """Raised when the remote compromised-packages list cannot be fetched.

    Covers transport errors, timeouts and non-2xx responses. The resolver
    catches it and falls back to the cache or the embedded list.
    """


class IntegrationError(NodePkgScannerError):
    """Raised when a CI integration call fails.

    Covers GitHub API errors while posting pull request comments.
    """
