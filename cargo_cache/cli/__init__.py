"""Command-line interface for cargo-cache."""
