"""
Single-path removal with dry-run simulation.

Deletion is best effort: a failure becomes a warning and is recorded on the
returned RemovalOutcome instead of aborting the caller's batch. Nothing is
rolled back, so a multi-path removal can leave the cache partially pruned
(each individual unlink/rmtree is still well formed).

Every outcome states whether the filesystem was mutated; callers aggregate
those values to decide whether the cache size changed.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from cargo_cache.exceptions import DirectoryAccountingError
from cargo_cache.protocols import LoggerProtocol, NullLogger
from cargo_cache.schemas.operations.remove import RemovalKind, RemovalOutcome
from cargo_cache.services.dirstat import measure
from cargo_cache.sizes import format_size

__all__ = ['remove']

logger = logging.getLogger(__name__)


def remove(
    path: Path,
    dry_run: bool,
    report_message: str | None = None,
    dry_run_message: str | None = None,
    size: int | None = None,
    output: LoggerProtocol | None = None,
) -> RemovalOutcome:
    """
    Remove a file or directory tree, or simulate doing so.

    Dry run:
    - With dry_run_message: print it verbatim and report 0 bytes (the caller
      already accounted for the size and put it in the message)
    - Without: report `size` (measured if not supplied) and print a generated
      "would remove" line

    Real run: print report_message if given, then unlink a regular file or
    rmtree a directory. The freed size is `size` if supplied, otherwise the
    tree is measured before deleting.

    Args:
        path: Absolute path to remove
        dry_run: Simulate only, never touch the filesystem
        report_message: Printed before a real deletion
        dry_run_message: Printed instead of the generated dry-run line
        size: Size already known to the caller, skips a second walk
        output: Where progress and warnings go

    Returns:
        RemovalOutcome describing what happened

    Raises:
        ValueError: If path is not absolute
    """
    if not path.is_absolute():
        raise ValueError(f'Refusing to remove relative path: {path}')

    output = output or NullLogger()
    kind = _classify(path)

    if dry_run:
        if dry_run_message is not None:
            output.echo(dry_run_message)
            freed = 0
        else:
            freed = size if size is not None else measure(path).total_bytes
            output.echo(f"dry-run: would remove: '{path}' ({format_size(freed)})")
        return RemovalOutcome(path=path, kind=kind, dry_run=True, bytes_freed=freed, mutated=False, error=None)

    if report_message is not None:
        output.echo(report_message)

    if kind == 'missing':
        logger.debug('Nothing to remove at %s', path)
        return RemovalOutcome(path=path, kind=kind, dry_run=False, bytes_freed=0, mutated=False, error=None)

    if size is None:
        try:
            size = path.lstat().st_size if kind == 'file' else measure(path).total_bytes
        except (OSError, DirectoryAccountingError) as e:
            output.warning(f'Warning: could not measure "{path}" before removal: {e}')
            size = 0

    try:
        if kind == 'file':
            path.unlink()
        else:
            shutil.rmtree(path)
    except OSError as e:
        noun = 'file' if kind == 'file' else 'directory'
        verb = 'remove' if kind == 'file' else 'recursively remove'
        warning = f'Warning: failed to {verb} {noun} "{path}": {e.strerror or e}'
        output.warning(warning)
        # rmtree may have deleted part of the tree before failing
        mutated = kind == 'directory' and _partially_removed(path, size)
        return RemovalOutcome(path=path, kind=kind, dry_run=False, bytes_freed=0, mutated=mutated, error=warning)

    logger.debug('Removed %s %s (%d bytes)', kind, path, size)
    return RemovalOutcome(path=path, kind=kind, dry_run=False, bytes_freed=size, mutated=True, error=None)


def _classify(path: Path) -> RemovalKind:
    # Symlinks are unlinked, never followed into
    if path.is_symlink() or path.is_file():
        return 'file'
    if path.is_dir():
        return 'directory'
    return 'missing'


def _partially_removed(path: Path, size_before: int) -> bool:
    try:
        return measure(path).total_bytes < size_before
    except DirectoryAccountingError:
        return True
