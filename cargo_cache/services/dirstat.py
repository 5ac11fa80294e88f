"""
Directory accounting - recursive size and file count of a cache directory.

Only regular files are counted. Directories, symlinks and special files are
walked through (directories) or skipped (everything else) but never counted
themselves. Symlinks are never followed below the measured root, so a link
into another part of the cache is not counted twice.

A missing directory is normal (a not-yet-populated cache subdirectory) and
measures as zero. An unreadable entry aborts the whole measurement.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from cargo_cache.exceptions import DirectoryAccountingError
from cargo_cache.schemas.cache import DirectoryStats

__all__ = ['measure']

logger = logging.getLogger(__name__)


def measure(path: Path) -> DirectoryStats:
    """
    Measure a directory tree.

    Args:
        path: Directory to walk

    Returns:
        DirectoryStats with the summed size and count of regular files,
        {0, 0} if path is not an existing directory

    Raises:
        DirectoryAccountingError: If any entry's metadata cannot be read
    """
    if not path.is_dir():
        return DirectoryStats(total_bytes=0, file_count=0)

    total_bytes = 0
    file_count = 0
    pending = [os.fspath(path)]

    while pending:
        current = pending.pop()
        try:
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        pending.append(entry.path)
                    elif entry.is_file(follow_symlinks=False):
                        total_bytes += entry.stat(follow_symlinks=False).st_size
                        file_count += 1
        except OSError as e:
            raise DirectoryAccountingError(Path(e.filename or current), e.strerror or str(e)) from e

    logger.debug('Measured %s: %d bytes in %d files', path, total_bytes, file_count)
    return DirectoryStats(total_bytes=total_bytes, file_count=file_count)
