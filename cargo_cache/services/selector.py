"""
Category-based cache removal (--remove-dir).

Maps user-facing category names to cache directories:

    git-db                -> git/db + git/checkouts (checkouts are useless without the db)
    git-repos             -> git/checkouts
    registry-sources      -> registry/src
    registry-crate-cache  -> registry/src + registry/cache
    registry              -> registry/src + registry/cache
    registry-index        -> registry/index
    all                   -> everything above

Resolution is all-or-nothing: any unknown token fails the request before a
single directory is touched.
"""

from __future__ import annotations

import logging

from cargo_cache.exceptions import InvalidDeletableDirError, RemoveDirNoArgError
from cargo_cache.protocols import LoggerProtocol, NullLogger
from cargo_cache.schemas.cache import CacheLayout, CachePath
from cargo_cache.schemas.operations.remove import CacheTarget, RemovalOutcome, RemovalResult, RemovalSelection
from cargo_cache.services.remover import remove
from cargo_cache.sizes import format_size

__all__ = ['CATEGORIES', 'CacheDirectorySelector']

logger = logging.getLogger(__name__)

CATEGORIES: dict[str, frozenset[CacheTarget]] = {
    'git-db': frozenset({CacheTarget.GIT_DB, CacheTarget.GIT_CHECKOUTS}),
    'git-repos': frozenset({CacheTarget.GIT_CHECKOUTS}),
    'registry-sources': frozenset({CacheTarget.REGISTRY_SOURCES}),
    'registry-crate-cache': frozenset({CacheTarget.REGISTRY_SOURCES, CacheTarget.REGISTRY_CRATE_CACHE}),
    'registry-index': frozenset({CacheTarget.REGISTRY_INDEX}),
    'registry': frozenset({CacheTarget.REGISTRY_SOURCES, CacheTarget.REGISTRY_CRATE_CACHE}),
    'all': frozenset(CacheTarget),
}


class CacheDirectorySelector:
    """Resolves --remove-dir categories against a cache layout and removes them."""

    def __init__(self, layout: CacheLayout) -> None:
        self.layout = layout

    def path_for(self, target: CacheTarget) -> CachePath:
        """Map a removal target to its directory in the layout."""
        match target:
            case CacheTarget.GIT_CHECKOUTS:
                return self.layout.git_checkouts
            case CacheTarget.GIT_DB:
                return self.layout.git_db
            case CacheTarget.REGISTRY_SOURCES:
                return self.layout.registry_sources
            case CacheTarget.REGISTRY_CRATE_CACHE:
                return self.layout.registry_crate_cache
            case CacheTarget.REGISTRY_INDEX:
                return self.layout.registry_index

    def resolve(self, category_csv: str | None) -> RemovalSelection:
        """
        Resolve a comma-separated category list to a deduplicated selection.

        'all' selects everything and ends parsing; tokens after it are not
        looked at. Whitespace around tokens and empty tokens are ignored.

        Args:
            category_csv: e.g. 'git-repos,registry-sources'

        Returns:
            RemovalSelection in removal order

        Raises:
            RemoveDirNoArgError: If no category was given
            InvalidDeletableDirError: Naming every unrecognized token
        """
        tokens = [token.strip() for token in (category_csv or '').split(',')]
        tokens = [token for token in tokens if token]
        if not tokens:
            raise RemoveDirNoArgError()

        selected: set[CacheTarget] = set()
        invalid: list[str] = []
        for token in tokens:
            targets = CATEGORIES.get(token)
            if targets is None:
                invalid.append(token)
                continue
            selected |= targets
            if token == 'all':
                break

        if invalid:
            raise InvalidDeletableDirError(invalid)

        ordered = tuple(target for target in CacheTarget if target in selected)
        logger.debug('Resolved %r to %s', category_csv, [target.value for target in ordered])
        return RemovalSelection(targets=ordered, paths=tuple(self.path_for(target) for target in ordered))

    def apply(
        self,
        selection: RemovalSelection,
        dry_run: bool,
        output: LoggerProtocol | None = None,
    ) -> RemovalResult:
        """
        Remove every directory in a selection.

        Failures are reported as warnings and collected; the remaining
        directories are still removed.

        Args:
            selection: Result of resolve()
            dry_run: Simulate only
            output: Where progress messages go

        Returns:
            RemovalResult with the summed size and per-path outcomes
        """
        output = output or NullLogger()
        if dry_run:
            output.echo('')

        outcomes: list[RemovalOutcome] = []
        for cache_path in selection.paths:
            outcomes.append(
                remove(
                    cache_path.absolute_path,
                    dry_run,
                    report_message=f"removing: '{cache_path.absolute_path}'",
                    output=output,
                )
            )

        total = sum(outcome.bytes_freed for outcome in outcomes)
        if dry_run:
            output.echo(f'dry-run: would remove in total: {format_size(total)}')

        return RemovalResult(
            dry_run=dry_run,
            total_bytes=total,
            outcomes=tuple(outcomes),
            failures=tuple(outcome for outcome in outcomes if outcome.error is not None),
        )
