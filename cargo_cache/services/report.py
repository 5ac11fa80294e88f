"""
Accounting summary of the cargo cache.

Pure aggregation over DirStat; missing directories simply measure as zero.
"""

from __future__ import annotations

from cargo_cache.schemas.cache import CacheLayout, CacheReport
from cargo_cache.services.dirstat import measure
from cargo_cache.sizes import format_size

__all__ = ['format_dirs', 'format_report', 'size_difference', 'summarize']


def summarize(layout: CacheLayout) -> CacheReport:
    """Measure the whole cache, installed binaries, registry, git db and git checkouts."""
    return CacheReport(
        total=measure(layout.cargo_home.absolute_path),
        binaries=measure(layout.bin.absolute_path),
        registry=measure(layout.registry.absolute_path),
        git_db=measure(layout.git_db.absolute_path),
        git_checkouts=measure(layout.git_checkouts.absolute_path),
    )


def format_report(report: CacheReport) -> list[str]:
    """Render the summary printed after the cache has been measured."""
    return [
        '',
        'Cargo cache:',
        '',
        f'Total size: {format_size(report.total.total_bytes)}',
        f'Size of {report.binaries.file_count} installed binaries: {format_size(report.binaries.total_bytes)}',
        f'Size of registry: {format_size(report.registry.total_bytes)}',
        f'Size of git db: {format_size(report.git_db.total_bytes)}',
        f'Size of git repo checkouts: {format_size(report.git_checkouts.total_bytes)}',
    ]


def format_dirs(layout: CacheLayout) -> list[str]:
    """Render the discovered directory paths (--dirs)."""
    shown = (
        layout.cargo_home,
        layout.bin,
        layout.registry,
        layout.registry_index,
        layout.registry_crate_cache,
        layout.registry_sources,
        layout.git_db,
        layout.git_checkouts,
    )
    return [f'{cache_path.display_label}: {cache_path.absolute_path}' for cache_path in shown]


def size_difference(before: CacheReport, after: CacheReport) -> str:
    """Describe how much the total cache size changed between two reports."""
    before_total = before.total.total_bytes
    after_total = after.total.total_bytes
    sign = '-' if after_total <= before_total else '+'
    delta = format_size(abs(before_total - after_total))
    return f'Size changed: {format_size(before_total)} => {format_size(after_total)} ({sign}{delta})'
