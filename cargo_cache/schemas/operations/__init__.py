"""
Operation schemas for service results.

This package contains Pydantic models for results returned by the removal
services.
"""

from __future__ import annotations

from cargo_cache.schemas.operations.remove import (
    CacheTarget,
    PruneResult,
    RemovalOutcome,
    RemovalResult,
    RemovalSelection,
)

__all__ = [
    'CacheTarget',
    'PruneResult',
    'RemovalOutcome',
    'RemovalResult',
    'RemovalSelection',
]
