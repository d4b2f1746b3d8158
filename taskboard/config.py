"""Configuration settings management for the taskboard service.

Hierarchical configuration built on pydantic-settings with nested models,
environment variable support and a cached global settings instance.

Features:
- Nested BaseSettings classes for database, pagination and security
- Environment variables with TASKBOARD_ prefix (``__`` as nested delimiter)
- Support for .env files and secrets directories
"""

import os
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class DatabaseSettings(BaseSettings):
    """Database configuration for task persistence."""

    model_config = SettingsConfigDict(env_prefix="DATABASE_")

    url: str = Field("sqlite:///taskboard.db", description="Database connection URL")
    echo_sql: bool = Field(False, description="Enable SQL query logging for debugging")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Reject empty or scheme-less connection URLs."""
        if "://" not in v:
            raise ValueError(f"Invalid database URL: {v!r}")
        return v

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class PaginationSettings(BaseSettings):
    """Pagination defaults for task listings."""

    model_config = SettingsConfigDict(env_prefix="PAGINATION_")

    per_page: int = Field(10, ge=1, le=100, description="Tasks returned per page")


class SecuritySettings(BaseSettings):
    """Access control switches."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    enforce_read_ownership: bool = Field(
        False,
        description="Restrict reading a single task by id to its owner",
    )


class TaskboardSettings(BaseSettings):
    """Root configuration combining all subsystem settings."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        env_prefix="TASKBOARD_",
        extra="ignore",
        validate_default=True,
        case_sensitive=False,
        secrets_dir=os.getenv("TASKBOARD_SECRETS_DIR"),
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug_mode else self.log_level

    def get_database_config(self) -> dict[str, Any]:
        """Return keyword arguments for building the SQLAlchemy engine."""
        config: dict[str, Any] = {"echo": self.database.echo_sql}
        if self.database.is_sqlite:
            # Sessions may be used from a threadpool worker under FastAPI
            config["connect_args"] = {"check_same_thread": False}
        return config


@lru_cache(maxsize=1)
def get_settings() -> TaskboardSettings:
    """Get cached global settings instance.

    Returns:
        Global TaskboardSettings instance

    """
    return TaskboardSettings()


def validate_configuration() -> bool:
    """Validate current configuration and raise descriptive errors if invalid.

    Returns:
        True if configuration is valid

    Raises:
        ValueError: If configuration is invalid with detailed error message

    """
    try:
        TaskboardSettings()
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e!s}") from e
    return True


__all__ = [
    "DatabaseSettings",
    "PaginationSettings",
    "SecuritySettings",
    "TaskboardSettings",
    "get_settings",
    "validate_configuration",
]
