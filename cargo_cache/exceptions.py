"""
Shared exceptions for cargo-cache.

Domain-specific exceptions used across services.

Exception Hierarchy:
    CargoCacheError (base)
    ├── CacheRootNotFoundError (cargo home is not a directory)
    ├── DirectoryAccountingError (metadata read failed during a size walk)
    ├── MalformedPackageNameError (source entry has no '<name>-<version>' shape)
    └── RemovalRequestError (bad --remove-dir input)
        ├── InvalidDeletableDirError (unknown category tokens)
        └── RemoveDirNoArgError (no categories given)
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class CargoCacheError(Exception):
    """Base exception for all cargo-cache errors."""


class CacheRootNotFoundError(CargoCacheError):
    """Raised when the cargo home directory does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No cargo home directory found at '{path}'")


class DirectoryAccountingError(CargoCacheError):
    """Raised when an entry's metadata cannot be read while measuring a directory."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to get metadata of '{path}': {reason}")


class MalformedPackageNameError(CargoCacheError):
    """Raised when a registry source directory cannot be split into name and version."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Malformed package name: '{path}' is not of the form '<name>-<version>'")


class RemovalRequestError(CargoCacheError):
    """Base exception for invalid directory removal requests."""


class InvalidDeletableDirError(RemovalRequestError):
    """Raised when --remove-dir names categories that do not exist."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self.tokens = list(tokens)
        super().__init__(f'Invalid deletable dir(s): {" ".join(self.tokens)}')


class RemoveDirNoArgError(RemovalRequestError):
    """Raised when --remove-dir is given without any category."""

    def __init__(self) -> None:
        super().__init__("No argument assigned to --remove-dir, example: 'git-repos,registry-sources'")
