"""
Cache layout and accounting schemas.

Models describing where Cargo keeps its cache and how large each part is.
"""

from __future__ import annotations

from pathlib import Path

from cargo_cache.schemas.base import StrictModel
from cargo_cache.schemas.types import AbsolutePath

__all__ = [
    'CacheLayout',
    'CachePath',
    'CacheReport',
    'DirectoryStats',
]


class DirectoryStats(StrictModel):
    """Size and regular-file count of one directory tree.

    Bytes and file counts are separate named fields so one can never be read
    where the other is expected.
    """

    total_bytes: int
    file_count: int


class CachePath(StrictModel):
    """One cache subdirectory: the path used for filesystem operations and a label for messages."""

    absolute_path: AbsolutePath
    display_label: str

    def __str__(self) -> str:
        return str(self.absolute_path)


class CacheLayout(StrictModel):
    """Canonical subdirectories under the cargo home directory.

    Built once per run from the cache root; read-only thereafter.
    """

    cargo_home: CachePath
    bin: CachePath  # ~/.cargo/bin - installed binaries
    registry: CachePath  # ~/.cargo/registry
    registry_sources: CachePath  # registry/src/<index>/<name>-<version>
    registry_crate_cache: CachePath  # registry/cache/<index>/<name>-<version>.crate
    registry_index: CachePath  # registry/index/<index>
    git_db: CachePath  # git/db - bare repositories
    git_checkouts: CachePath  # git/checkouts - working trees

    @classmethod
    def from_root(cls, root: Path) -> CacheLayout:
        """Build the layout for a cache root, resolving it to an absolute path first."""
        root = root.expanduser().resolve()

        def sub(label: str, *parts: str) -> CachePath:
            return CachePath(absolute_path=root.joinpath(*parts), display_label=label)

        return cls(
            cargo_home=CachePath(absolute_path=root, display_label='cargo home'),
            bin=sub('bin dir', 'bin'),
            registry=sub('registry dir', 'registry'),
            registry_sources=sub('registry source dir', 'registry', 'src'),
            registry_crate_cache=sub('registry crate cache', 'registry', 'cache'),
            registry_index=sub('registry index', 'registry', 'index'),
            git_db=sub('git db dir', 'git', 'db'),
            git_checkouts=sub('checkouts dir', 'git', 'checkouts'),
        )


class CacheReport(StrictModel):
    """Accounting summary of the five canonical cache directories."""

    total: DirectoryStats
    binaries: DirectoryStats
    registry: DirectoryStats
    git_db: DirectoryStats
    git_checkouts: DirectoryStats
