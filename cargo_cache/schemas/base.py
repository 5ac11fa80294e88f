"""
Shared Pydantic base model for strict validation.

All schema models in the application inherit from StrictModel.
"""

from __future__ import annotations

from cargo_cache.schemas.types import BaseStrictModel


class StrictModel(BaseStrictModel):
    """Application strict model (extra='forbid', strict=True, frozen=True)."""

    pass
