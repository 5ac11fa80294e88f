"""
Removal operation schemas.

Results of single-path removals, category-based batch removals and crate
source pruning. Every result carries whether the filesystem was mutated so
callers aggregate outcomes instead of sharing a "size changed" flag.
"""

from __future__ import annotations

import enum
from typing import Literal

import pydantic

from cargo_cache.schemas.base import StrictModel
from cargo_cache.schemas.cache import CachePath
from cargo_cache.schemas.types import AbsolutePath


RemovalKind = Literal[
    'file',  # regular file or symlink, unlinked
    'directory',  # directory tree, removed recursively
    'missing',  # neither file nor directory - nothing to do
]


class CacheTarget(enum.Enum):
    """Removable cache directories, declared in the order they are removed."""

    GIT_CHECKOUTS = 'git-checkouts'
    GIT_DB = 'git-db'
    REGISTRY_SOURCES = 'registry-sources'
    REGISTRY_CRATE_CACHE = 'registry-crate-cache'
    REGISTRY_INDEX = 'registry-index'


class RemovalOutcome(StrictModel):
    """Result of removing (or simulating removal of) one path."""

    path: AbsolutePath
    kind: RemovalKind
    dry_run: bool
    bytes_freed: int  # Would-be-freed under dry run
    mutated: bool  # True only when something was actually deleted
    error: str | None  # Warning text when the deletion failed


class RemovalSelection(StrictModel):
    """Deduplicated set of cache directories chosen for one removal."""

    targets: tuple[CacheTarget, ...]
    paths: tuple[CachePath, ...]


class RemovalResult(StrictModel):
    """Execution result of a category-based removal."""

    dry_run: bool
    total_bytes: int
    outcomes: tuple[RemovalOutcome, ...]
    failures: tuple[RemovalOutcome, ...]

    @pydantic.computed_field  # type: ignore[prop-decorator]
    @property
    def size_changed(self) -> bool:
        return any(outcome.mutated for outcome in self.outcomes)

    @pydantic.computed_field  # type: ignore[prop-decorator]
    @property
    def partial(self) -> bool:
        return bool(self.failures)


class PruneResult(StrictModel):
    """Execution result of crate source pruning."""

    dry_run: bool
    keep_count: int
    removed_bytes: int  # Measured before deletion, summed over removed entries
    removed_entries: tuple[AbsolutePath, ...]
    outcomes: tuple[RemovalOutcome, ...]
    failures: tuple[RemovalOutcome, ...]

    @pydantic.computed_field  # type: ignore[prop-decorator]
    @property
    def size_changed(self) -> bool:
        return any(outcome.mutated for outcome in self.outcomes)
