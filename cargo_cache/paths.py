"""
Cache root resolution for cargo-cache.

Cargo keeps everything it downloads under a single home directory:
- `$CARGO_HOME` when set
- `~/.cargo` otherwise

The rest of the package only ever sees the resolved absolute root and the
CacheLayout built from it.
"""

from __future__ import annotations

from pathlib import Path

from cargo_cache.config.base import BaseCargoCacheSettings
from cargo_cache.exceptions import CacheRootNotFoundError
from cargo_cache.schemas.cache import CacheLayout

__all__ = ['DEFAULT_CARGO_HOME', 'load_layout', 'resolve_cargo_home']

DEFAULT_CARGO_HOME = Path('~') / '.cargo'


def resolve_cargo_home(settings: BaseCargoCacheSettings) -> Path:
    """
    Resolve the cargo home directory from settings.

    Args:
        settings: Loaded settings (CARGO_HOME may be unset)

    Returns:
        Absolute, resolved path of the cargo home directory

    Raises:
        CacheRootNotFoundError: If the resolved path is not a directory
    """
    raw = settings.CARGO_HOME if settings.CARGO_HOME is not None else DEFAULT_CARGO_HOME
    cargo_home = raw.expanduser().resolve()
    if not cargo_home.is_dir():
        raise CacheRootNotFoundError(cargo_home)
    return cargo_home


def load_layout(settings: BaseCargoCacheSettings) -> CacheLayout:
    """Resolve the cargo home and build its CacheLayout."""
    return CacheLayout.from_root(resolve_cargo_home(settings))
