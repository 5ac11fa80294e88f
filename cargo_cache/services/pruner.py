"""
Crate source pruning - keep the newest N extracted versions of every crate.

Layout consumed:

    registry/src/
        index.crates.io-6f17d22bba15001f/   (one folder per registry index)
            serde-1.0.190/
            serde-1.0.188/
            libc-0.2.150/

Extracted sources can always be rebuilt from the compressed .crate archives,
so removing them never breaks a build.

Ordering:
- 'lexicographic' (default) sorts by the raw directory name, newest first.
  This is NOT semver aware: 'foo-0.9.0' sorts above 'foo-0.10.0', so the
  older 0.9.0 is the one kept.
- 'semver' compares parsed versions, so 0.10.0 > 0.9.0. Versions that do not
  parse rank below all that do.

All entries are parsed before anything is removed: a malformed name aborts
the run with the cache untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

import packaging.version

from cargo_cache.config.base import VersionOrder
from cargo_cache.exceptions import MalformedPackageNameError
from cargo_cache.protocols import LoggerProtocol, NullLogger
from cargo_cache.schemas.operations.remove import PruneResult, RemovalOutcome
from cargo_cache.services.dirstat import measure
from cargo_cache.services.remover import remove
from cargo_cache.sizes import format_size

__all__ = [
    'CrateSourceEntry',
    'PackageVersionGroup',
    'group_by_package',
    'parse_source_entry',
    'prune',
    'select_for_removal',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CrateSourceEntry:
    """One extracted `<package>-<version>` source directory."""

    path: Path
    package_name: str
    version: str


@dataclass(frozen=True)
class PackageVersionGroup:
    """All source directories of one package within one registry, newest first."""

    package_name: str
    entries: tuple[CrateSourceEntry, ...]


def parse_source_entry(path: Path) -> CrateSourceEntry:
    """
    Split a source directory name on its last '-' into package name and version.

    Examples:
        serde-1.0.0         -> ('serde', '1.0.0')
        serde_derive-1.0.0  -> ('serde_derive', '1.0.0')
        tokio-macros-2.1.0  -> ('tokio-macros', '2.1.0')

    Raises:
        MalformedPackageNameError: If the name has no '-' separator
    """
    package_name, sep, version = path.name.rpartition('-')
    if not sep or not package_name or not version:
        raise MalformedPackageNameError(path)
    return CrateSourceEntry(path=path, package_name=package_name, version=version)


def _semver_key(entry: CrateSourceEntry) -> tuple[str, int, packaging.version.Version | str]:
    # Unparsable versions rank below every parsable one, ordered by raw text
    try:
        return entry.package_name, 1, packaging.version.Version(entry.version)
    except packaging.version.InvalidVersion:
        return entry.package_name, 0, entry.version


def _sort_entries(entries: Iterable[CrateSourceEntry], version_order: VersionOrder) -> list[CrateSourceEntry]:
    if version_order == 'semver':
        return sorted(entries, key=_semver_key, reverse=True)
    return sorted(entries, key=lambda entry: entry.path.name, reverse=True)


def group_by_package(
    entries: Iterable[CrateSourceEntry],
    version_order: VersionOrder = 'lexicographic',
) -> list[PackageVersionGroup]:
    """Sort entries newest first and group them by package name, preserving that order."""
    grouped: dict[str, list[CrateSourceEntry]] = {}
    for entry in _sort_entries(entries, version_order):
        grouped.setdefault(entry.package_name, []).append(entry)
    return [PackageVersionGroup(package_name=name, entries=tuple(group)) for name, group in grouped.items()]


def select_for_removal(groups: Sequence[PackageVersionGroup], keep_count: int) -> list[CrateSourceEntry]:
    """
    Pick the entries that exceed the retention count.

    keep_count == 0 selects everything; otherwise the first keep_count entries
    of each group survive.
    """
    if keep_count < 0:
        raise ValueError(f'keep_count must be >= 0, got {keep_count}')
    return [entry for group in groups for entry in group.entries[keep_count:]]


def _scan_registry(registry_dir: Path) -> list[CrateSourceEntry]:
    return [parse_source_entry(child) for child in registry_dir.iterdir()]


def prune(
    keep_count: int,
    dry_run: bool,
    registry_sources_root: Path,
    output: LoggerProtocol | None = None,
    version_order: VersionOrder = 'lexicographic',
) -> PruneResult:
    """
    Remove all but the newest keep_count extracted versions of each crate.

    Args:
        keep_count: Versions to keep per package; 0 removes every source
        dry_run: Report what would be removed without touching the filesystem
        registry_sources_root: The registry/src directory
        output: Where progress messages go
        version_order: 'lexicographic' (raw directory names) or 'semver'

    Returns:
        PruneResult with the bytes removed (or that would be removed)

    Raises:
        MalformedPackageNameError: If any source directory name has no version
    """
    output = output or NullLogger()
    output.echo('')

    # Parse every registry up front so a malformed entry aborts before any deletion
    plan: list[CrateSourceEntry] = []
    if registry_sources_root.is_dir():
        for registry_dir in sorted(registry_sources_root.iterdir()):
            if not registry_dir.is_dir():
                logger.debug('Skipping non-directory %s in registry sources', registry_dir)
                continue
            groups = group_by_package(_scan_registry(registry_dir), version_order)
            plan.extend(select_for_removal(groups, keep_count))
    else:
        output.info(f'No registry sources at {registry_sources_root}')

    removed_bytes = 0
    removed_entries: list[Path] = []
    outcomes: list[RemovalOutcome] = []

    for entry in plan:
        size = measure(entry.path).total_bytes
        outcome = remove(
            entry.path,
            dry_run,
            report_message=f'removing {entry.package_name} {entry.version} at {entry.path}',
            dry_run_message=(
                f'dry run: not actually deleting {entry.package_name} {entry.version} at {entry.path}'
            ),
            size=size,
            output=output,
        )
        outcomes.append(outcome)
        if outcome.error is None:
            removed_bytes += size
            removed_entries.append(entry.path)

    failures = tuple(outcome for outcome in outcomes if outcome.error is not None)
    if dry_run:
        output.echo(f'dry-run: would remove {format_size(removed_bytes)} of crate sources.')
    else:
        output.echo(f'Removed {format_size(removed_bytes)} of compressed crate sources.')
    if failures:
        output.warning(f'Failed to remove {len(failures)} crate source(s).')

    return PruneResult(
        dry_run=dry_run,
        keep_count=keep_count,
        removed_bytes=removed_bytes,
        removed_entries=tuple(removed_entries),
        outcomes=tuple(outcomes),
        failures=failures,
    )
