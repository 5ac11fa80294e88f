"""
Shared type definitions for schemas.

Centralizes the base model configuration and path annotations used by the
cache and operation schemas.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import pydantic

__all__ = ['AbsolutePath', 'BaseStrictModel']


class BaseStrictModel(pydantic.BaseModel):
    """
    Foundation strict model - every schema inherits from this.

    Uses extra='forbid' to reject unknown fields, strict=True so a byte count
    can never be passed where a path or label is expected, and frozen=True
    because every record is a value produced fresh by a service call.
    """

    model_config = pydantic.ConfigDict(
        extra='forbid',  # Reject unknown fields (fail-fast)
        strict=True,  # Strict type coercion
        frozen=True,  # Immutable after creation
    )


def _require_absolute(path: Path) -> Path:
    if not path.is_absolute():
        raise ValueError(f'Path must be absolute: {path}')
    return path


# Filesystem operations only ever see absolute paths
AbsolutePath = Annotated[Path, pydantic.AfterValidator(_require_absolute)]
