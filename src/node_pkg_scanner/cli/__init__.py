"""Command-line interface for node-pkg-scanner."""
