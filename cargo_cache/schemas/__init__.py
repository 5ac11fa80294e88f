"""Pydantic schemas for cache layout, accounting and removal results."""

from cargo_cache.schemas.base import StrictModel
from cargo_cache.schemas.cache import CacheLayout, CachePath, CacheReport, DirectoryStats

__all__ = [
    'CacheLayout',
    'CachePath',
    'CacheReport',
    'DirectoryStats',
    'StrictModel',
]
