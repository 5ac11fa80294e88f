#!/usr/bin/env python3
"""
Command-line interface for cargo-cache.

Shows how much disk space the cargo cache uses and removes parts of it.
"""

from __future__ import annotations

import logging
import sys
import traceback
from pathlib import Path
from typing import TypeGuard

import typer

from cargo_cache.cli.logger import CLILogger
from cargo_cache.cli.prompt import RemovalPrompt, run_prompt
from cargo_cache.config.base import VersionOrder
from cargo_cache.config.cli import settings
from cargo_cache.exceptions import CargoCacheError
from cargo_cache.paths import load_layout
from cargo_cache.services.pruner import prune
from cargo_cache.services.report import format_dirs, format_report, size_difference, summarize
from cargo_cache.services.selector import CacheDirectorySelector

app = typer.Typer(
    name='cargo-cache',
    help='Manage the cargo cache',
    add_completion=False,
)


def _is_version_order(value: str) -> TypeGuard[VersionOrder]:
    """Type guard for valid version orderings."""
    return value in ('lexicographic', 'semver')


def _validate_version_order(value: str | None) -> VersionOrder | None:
    """Validate and narrow version order for typer callback."""
    if value is None:
        return None
    if _is_version_order(value):
        return value
    raise typer.BadParameter("Must be 'lexicographic' or 'semver'")


def _show_version(value: bool) -> None:
    if value:
        typer.echo(f'cargo-cache {settings.VERSION}')
        raise typer.Exit()


def _read_stdin_line() -> str | None:
    line = sys.stdin.readline()
    return line if line else None


@app.command()
def cargo_cache(
    dirs: bool = typer.Option(False, '--dirs', '-d', help='Show found directory paths'),
    remove: bool = typer.Option(False, '--remove', '-r', help='Interactively remove directories in the cache'),
    remove_dir: str | None = typer.Option(
        None,
        '--remove-dir',
        help='Remove directories, comma-separated: git-db, git-repos, registry-sources, '
        'registry-crate-cache, registry-index, registry, all',
    ),
    keep_duplicate_crates: int | None = typer.Option(
        None,
        '--keep-duplicate-crates',
        '-k',
        min=0,
        help='Keep the N newest versions of each crate source, 0 removes all',
    ),
    dry_run: bool = typer.Option(False, '--dry-run', '-n', help="Don't remove anything, just pretend"),
    version_order: str | None = typer.Option(
        None,
        '--version-order',
        help='How crate versions are ordered for -k: lexicographic or semver',
        callback=_validate_version_order,
    ),
    cargo_home: Path | None = typer.Option(
        None, '--cargo-home', help='Cargo home directory (default: $CARGO_HOME or ~/.cargo)'
    ),
    verbose: bool = typer.Option(False, '--verbose', '-v', help='Verbose output'),
    version: bool = typer.Option(
        False, '--version', '-V', help='Show the version and exit', callback=_show_version, is_eager=True
    ),
) -> None:
    """Show the size of the cargo cache and optionally prune it.

    Examples:
        cargo-cache
        cargo-cache --dirs
        cargo-cache --keep-duplicate-crates 1 --dry-run
        cargo-cache --remove-dir git-db,registry-index
    """
    logger = CLILogger(verbose=verbose)
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s %(name)s: %(message)s')

    try:
        effective = settings.model_copy(update={'CARGO_HOME': cargo_home}) if cargo_home is not None else settings
        layout = load_layout(effective)
        order: VersionOrder = version_order if version_order is not None else settings.CARGO_CACHE_VERSION_ORDER

        # Validate --remove-dir before anything is pruned
        selector = CacheDirectorySelector(layout)
        selection = selector.resolve(remove_dir) if remove_dir is not None else None

        before = summarize(layout)
        if dirs:
            for line in format_dirs(layout):
                typer.echo(line)
        for line in format_report(before):
            typer.echo(line)

        size_changed = False
        failures = 0

        if keep_duplicate_crates is not None:
            prune_result = prune(
                keep_duplicate_crates,
                dry_run,
                layout.registry_sources.absolute_path,
                output=logger,
                version_order=order,
            )
            size_changed |= prune_result.size_changed
            failures += len(prune_result.failures)

        if selection is not None:
            removal = selector.apply(selection, dry_run, output=logger)
            size_changed |= removal.size_changed
            failures += len(removal.failures)

        if remove:
            prompt = RemovalPrompt()
            run_prompt(prompt, _read_stdin_line, typer.echo)
            if prompt.confirmed:
                removal = selector.apply(selector.resolve(prompt.category_csv), dry_run, output=logger)
                size_changed |= removal.size_changed
                failures += len(removal.failures)

        if size_changed:
            after = summarize(layout)
            typer.echo()
            typer.echo(size_difference(before, after))

    except CargoCacheError as e:
        logger.error(str(e))
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)

    if failures:
        logger.error(f'{failures} removal(s) failed, see warnings above')
        raise typer.Exit(1)


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == '__main__':
    main()
