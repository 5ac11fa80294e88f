"""Inspect and prune the Cargo build tool's download cache."""

__version__ = '0.1.0'
