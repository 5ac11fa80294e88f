"""
Base configuration for cargo-cache.

Shared settings and helper functions for loading them.
"""

from __future__ import annotations

import os
import pathlib
from typing import Literal, TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

T = TypeVar('T', bound='BaseCargoCacheSettings')

VersionOrder = Literal['lexicographic', 'semver']


class BaseCargoCacheSettings(pydantic_settings.BaseSettings):
    """Shared configuration for cargo-cache entry points."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='ignore',  # .env files are shared with cargo and other tools
    )

    # Reported by --version
    VERSION: str = '0.1.0'

    # Same variable cargo itself honours; unset means ~/.cargo
    CARGO_HOME: pathlib.Path | None = None

    @pydantic.field_validator('CARGO_HOME', mode='before')
    @classmethod
    def validate_cargo_home(cls, v: object) -> object:
        """Treat an empty CARGO_HOME as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


def get_settings(settings_class: type[T], env_file: str | None = None) -> T:
    """
    Factory for creating settings with dynamic .env file loading.

    LOAD_ENV_FILE environment variable specifies custom .env file path.
    When unset, loads from environment variables only.

    Args:
        settings_class: Settings class to instantiate
        env_file: Optional path to .env file (overrides LOAD_ENV_FILE)

    Returns:
        Settings instance

    Raises:
        FileNotFoundError: If specified .env file doesn't exist
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')

    if not env_file_path:
        return settings_class(_env_file=None)  # No .env file, load from environment only

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'Environment file not found: {resolved_path}')

    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Lazy settings - defers instantiation until first access.

    Args:
        settings_class: Settings class to instantiate

    Returns:
        Proxy that instantiates settings on first access
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))
