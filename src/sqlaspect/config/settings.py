"""
Configuration management for sqlaspect.

Settings are read from environment variables (``SQLASPECT_`` prefix) and an
optional ``.env`` file using Pydantic BaseSettings. The statement builder
itself never needs configuration; these values only provide process-wide
defaults such as the dialect used by ``str(statement)`` and logging output.
"""

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_OVERRIDE = os.getenv("SQLASPECT_ENV_FILE")
SETTINGS_ENV_FILE = (
    Path(ENV_FILE_OVERRIDE).expanduser() if ENV_FILE_OVERRIDE else Path(".env")
)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """
    Process-wide defaults with environment variable support.

    Environment variables are loaded with the SQLASPECT_ prefix. For example,
    SQLASPECT_DEFAULT_DIALECT=sqlite changes the dialect used when a statement
    is rendered with ``str()`` or executed without an explicit dialect.
    """

    default_dialect: str = Field(
        default="postgres",
        description="Dialect name used when none is passed explicitly",
    )
    log_level: str = Field(default="INFO", description="Logging level")
    log_to_file: bool = Field(
        default=False, description="Also write logs to a daily rotating file"
    )
    log_file_dir: str = Field(default="logs", description="Directory for log files")

    @field_validator("default_dialect")
    @classmethod
    def _normalize_dialect(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("default_dialect must be a non-empty dialect name")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return value

    model_config = SettingsConfigDict(
        env_prefix="SQLASPECT_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded once and reused; call ``get_settings.cache_clear()``
    after changing the environment (tests do this through monkeypatch).

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
