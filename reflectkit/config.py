"""
reflectkit configuration.

Settings are read from REFLECTKIT_* environment variables, or from the .env
file named by LOAD_ENV_FILE.
"""

from __future__ import annotations

import logging
import os
import pathlib
from typing import TypeVar

import lazy_object_proxy
import pydantic
import pydantic_settings

__all__ = [
    'ReflectKitSettings',
    'get_settings',
    'lazy_settings',
    'settings',
]

T = TypeVar('T', bound='ReflectKitSettings')


class ReflectKitSettings(pydantic_settings.BaseSettings):
    """Library-wide behaviour switches."""

    model_config = pydantic_settings.SettingsConfigDict(
        env_prefix='REFLECTKIT_',
        env_file_encoding='utf-8',
        case_sensitive=True,  # Fail fast on misconfiguration
        extra='ignore',  # Host .env files carry unrelated variables
    )

    # Strictly check values against declared field types before set_value writes
    VALIDATE_WRITES: bool = True

    # Level used when set_value reports a failed write
    WRITE_FAILURE_LOG_LEVEL: str = 'WARNING'

    @pydantic.field_validator('WRITE_FAILURE_LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate the level is a standard logging level name."""
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f'WRITE_FAILURE_LOG_LEVEL must be a logging level name, got {v!r}')
        return level

    @property
    def write_failure_log_level(self) -> int:
        return logging.getLevelNamesMapping()[self.WRITE_FAILURE_LOG_LEVEL]


def get_settings(settings_class: type[T] = ReflectKitSettings, env_file: str | None = None) -> T:
    """
    Build reflectkit settings, optionally layered over a .env file.

    reflectkit is imported into host applications, so it never reads a .env
    from the working directory on its own. A file is only loaded when named
    explicitly, by ``env_file`` or by the host's LOAD_ENV_FILE variable;
    REFLECTKIT_* variables in the process environment always take precedence.

    Args:
        settings_class: ReflectKitSettings or a host subclass adding its own switches
        env_file: .env path; takes priority over LOAD_ENV_FILE

    Returns:
        Settings controlling set_value validation and failure logging

    Raises:
        FileNotFoundError: If a .env path was given but no such file exists
    """
    env_file_path = env_file or os.getenv('LOAD_ENV_FILE')
    if not env_file_path:
        return settings_class()

    resolved_path = pathlib.Path(env_file_path).resolve()
    if not resolved_path.exists():
        raise FileNotFoundError(f'reflectkit env file not found: {resolved_path}')
    return settings_class(_env_file=resolved_path)


def lazy_settings(settings_class: type[T]) -> T:
    """
    Proxy that builds the settings on first attribute access.

    Importing reflectkit must not read the environment; set_value is the
    first caller that needs VALIDATE_WRITES and WRITE_FAILURE_LOG_LEVEL, so
    hosts can still adjust REFLECTKIT_* variables after import.
    """
    return lazy_object_proxy.Proxy(lambda: get_settings(settings_class))


# Module-level singleton (lazy-loaded)
settings = lazy_settings(ReflectKitSettings)
