"""node-pkg-scanner: Detect known-compromised npm packages in manifests and lockfiles."""

from __future__ import annotations

__version__ = "1.0.0"
__license__ = "MIT"
