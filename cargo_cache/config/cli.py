"""
CLI configuration.

Extends base configuration with command-line specific settings.
"""

from __future__ import annotations

from cargo_cache.config.base import BaseCargoCacheSettings, VersionOrder, lazy_settings


class CliSettings(BaseCargoCacheSettings):
    """Command-line configuration."""

    # How crate source versions are ordered for --keep-duplicate-crates; --version-order overrides it
    CARGO_CACHE_VERSION_ORDER: VersionOrder = 'lexicographic'


# Module-level singleton (lazy-loaded)
settings = lazy_settings(CliSettings)
