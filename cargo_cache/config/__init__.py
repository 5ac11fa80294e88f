"""Settings for cargo-cache, loaded from the environment via pydantic-settings."""

from cargo_cache.config.base import BaseCargoCacheSettings, VersionOrder, get_settings, lazy_settings

__all__ = ['BaseCargoCacheSettings', 'VersionOrder', 'get_settings', 'lazy_settings']
