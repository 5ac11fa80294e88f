"""Service layer for cache accounting and removal."""

from cargo_cache.services.dirstat import measure
from cargo_cache.services.pruner import prune
from cargo_cache.services.remover import remove
from cargo_cache.services.report import summarize
from cargo_cache.services.selector import CacheDirectorySelector

__all__ = [
    'CacheDirectorySelector',
    'measure',
    'prune',
    'remove',
    'summarize',
]
