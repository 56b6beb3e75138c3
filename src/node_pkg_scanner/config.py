"""Scanner configuration: defaults, YAML loading and validation.

Configuration lives in a YAML file (``.config.yml`` by default) using the
camelCase keys below. Every key is optional; a missing file means "use the
defaults". Invalid configuration is fatal and raises ``ConfigError`` before
any scanning begins.

.. code-block:: yaml

    severityLevel: error            # error | warning | info
    compromisedPackagesUrl: https://...
    rootDirectory: ./src            # optional
    additionalPackages: [suspicious-package]
    excludeDirectories: [node_modules, .git, dist, build]
    cacheTimeout: 60                # minutes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import yaml

from node_pkg_scanner.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = ".config.yml"

DEFAULT_PACKAGES_URL = (
    "https://raw.githubusercontent.com/Cobenian/shai-hulud-detect/main/"
    "compromised-packages.txt"
)

SEVERITY_LEVELS: tuple[str, ...] = ("error", "warning", "info")

DEFAULT_EXCLUDE_DIRECTORIES: tuple[str, ...] = ("node_modules", ".git", "dist", "build")

DEFAULT_CONFIG_TEMPLATE = f"""\
# node-pkg-scanner configuration
# Severity level for compromised packages (error, warning, info)
severityLevel: error

# URL to fetch the compromised packages list from
compromisedPackagesUrl: {DEFAULT_PACKAGES_URL}

# Root directory to scan (optional - defaults to current directory)
# rootDirectory: ./src

# Additional packages to check for (beyond the remote list)
additionalPackages: []
  # - suspicious-package-name

# Directories to exclude from scanning
excludeDirectories:
  - node_modules
  - .git
  - dist
  - build

# Cache timeout in minutes
cacheTimeout: 60
"""

# YAML key -> ScannerConfig attribute
_KEYS: dict[str, str] = {
    "severityLevel": "severity_level",
    "compromisedPackagesUrl": "compromised_packages_url",
    "rootDirectory": "root_directory",
    "additionalPackages": "additional_packages",
    "excludeDirectories": "exclude_directories",
    "cacheTimeout": "cache_timeout",
}


@dataclass
class ScannerConfig:
    """Validated scanner configuration.

    Attributes:
        severity_level: Annotation level used by reporting ("error",
            "warning" or "info"). Not used for matching.
        compromised_packages_url: Remote compromised-packages list.
        root_directory: Directory to scan; None means the working directory.
        additional_packages: Extra package names treated as compromised in
            every version.
        exclude_directories: Directory names skipped at any depth.
        cache_timeout: Maximum age of the cached list, in minutes.
    """

    severity_level: str = "error"
    compromised_packages_url: str = DEFAULT_PACKAGES_URL
    root_directory: str | None = None
    additional_packages: list[str] = field(default_factory=list)
    exclude_directories: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_DIRECTORIES)
    )
    cache_timeout: float = 60

    def validate(self) -> None:
        """Check value constraints.

        Raises:
            ConfigError: On an unknown severity, a non-http(s) URL or a
                negative cache timeout.
        """
        if self.severity_level not in SEVERITY_LEVELS:
            raise ConfigError(f"Invalid severity level: {self.severity_level}")
        parsed = urlparse(self.compromised_packages_url)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigError(
                "Invalid URL for compromised packages: "
                f"{self.compromised_packages_url}"
            )
        if self.cache_timeout < 0:
            raise ConfigError("Cache timeout must be non-negative")


def _coerce(key: str, value: Any) -> Any:
    """Type-check one YAML value against its ScannerConfig field."""
    attr = _KEYS[key]
    if attr in ("additional_packages", "exclude_directories"):
        if value is None:
            return []
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"{key} must be a list of strings")
        return list(value)
    if attr == "cache_timeout":
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{key} must be a number of minutes")
        return value
    if attr == "root_directory" and value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{key} must be a string")
    return value


def config_from_mapping(data: dict[str, Any]) -> ScannerConfig:
    """Build and validate a config from a parsed YAML mapping.

    Unknown keys are ignored with a warning.
    """
    values: dict[str, Any] = {}
    for key, value in data.items():
        if key not in _KEYS:
            logger.warning("Ignoring unknown config key: %s", key)
            continue
        values[_KEYS[key]] = _coerce(key, value)
    config = ScannerConfig(**values)
    config.validate()
    return config


def load_config(path: str | Path = DEFAULT_CONFIG_PATH) -> ScannerConfig:
    """Load configuration from a YAML file, falling back to defaults.

    Args:
        path: Config file location.

    Returns:
        Validated configuration. Defaults when the file does not exist or
        is empty.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, is not
            a mapping, or fails validation.
    """
    config_path = Path(path)
    if not config_path.exists():
        logger.info("No config file found at %s, using defaults", config_path)
        return ScannerConfig()

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config {config_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        return ScannerConfig()
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must be a YAML mapping")
    return config_from_mapping(data)
