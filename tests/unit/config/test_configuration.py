"""Tests for configuration management.

Covers defaults, environment variable overrides, validation bounds and
the cached settings accessor.
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from taskboard.config import (
    DatabaseSettings,
    PaginationSettings,
    SecuritySettings,
    TaskboardSettings,
    get_settings,
    validate_configuration,
)


class TestDatabaseSettings:
    """Test database configuration."""

    def test_default_values(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = DatabaseSettings()

        assert settings.url == "sqlite:///taskboard.db"
        assert settings.echo_sql is False
        assert settings.is_sqlite is True

    def test_env_override(self):
        env = {"DATABASE_URL": "postgresql://db/tasks", "DATABASE_ECHO_SQL": "true"}
        with patch.dict(os.environ, env, clear=True):
            settings = DatabaseSettings()

        assert settings.url == "postgresql://db/tasks"
        assert settings.echo_sql is True
        assert settings.is_sqlite is False

    def test_invalid_url(self):
        with pytest.raises(ValidationError, match="Invalid database URL"):
            DatabaseSettings(url="not-a-url")


class TestPaginationSettings:
    """Test pagination configuration."""

    def test_default_per_page(self):
        with patch.dict(os.environ, {}, clear=True):
            assert PaginationSettings().per_page == 10

    def test_validation_bounds(self):
        with pytest.raises(ValidationError, match="greater than or equal to 1"):
            PaginationSettings(per_page=0)

        with pytest.raises(ValidationError, match="less than or equal to 100"):
            PaginationSettings(per_page=101)


class TestTaskboardSettings:
    """Test the root settings object."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            settings = TaskboardSettings(_env_file=None)

        assert settings.log_level == "INFO"
        assert settings.pagination.per_page == 10
        assert settings.security.enforce_read_ownership is False

    def test_nested_env_override(self):
        env = {
            "TASKBOARD_PAGINATION__PER_PAGE": "25",
            "TASKBOARD_SECURITY__ENFORCE_READ_OWNERSHIP": "true",
            "TASKBOARD_LOG_LEVEL": "warning",
        }
        with patch.dict(os.environ, env, clear=True):
            settings = TaskboardSettings(_env_file=None)

        assert settings.pagination.per_page == 25
        assert settings.security.enforce_read_ownership is True
        assert settings.log_level == "WARNING"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError, match="log_level must be one of"):
            TaskboardSettings(log_level="chatty")

    def test_debug_mode_forces_debug_level(self):
        settings = TaskboardSettings(debug_mode=True, log_level="ERROR")

        assert settings.effective_log_level == "DEBUG"

    def test_sqlite_engine_config(self):
        settings = TaskboardSettings(database=DatabaseSettings(url="sqlite://"))

        config = settings.get_database_config()

        assert config["connect_args"] == {"check_same_thread": False}
        assert config["echo"] is False

    def test_non_sqlite_engine_config(self):
        settings = TaskboardSettings(
            database=DatabaseSettings(url="postgresql://db/tasks"),
            security=SecuritySettings(),
        )

        assert "connect_args" not in settings.get_database_config()


class TestSettingsAccess:
    """Test cached access and validation helpers."""

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()

    def test_validate_configuration_success(self):
        with patch.dict(os.environ, {}, clear=True):
            assert validate_configuration() is True

    def test_validate_configuration_failure(self):
        with patch.dict(os.environ, {"TASKBOARD_LOG_LEVEL": "chatty"}, clear=True):
            with pytest.raises(ValueError, match="Configuration validation failed"):
                validate_configuration()
