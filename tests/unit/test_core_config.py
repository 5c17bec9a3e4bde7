"""
Unit tests for configuration management (flat Settings).

Tests cover:
- Default values
- Environment variable loading (including JSON guard providers)
- Validation (log level, blank identifiers, wildcard delimiters)
- JSON log selection
- Cached singleton behavior
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from warden.core.config import Settings, get_settings
from warden.core.enums import Environment


def _settings(**env: str) -> Settings:
    with patch.dict(os.environ, env, clear=True):
        return Settings(_env_file=None)


class TestEnvironmentEnum:
    """Test Environment enum."""

    def test_environment_values(self):
        """Test that all expected environments are defined."""
        assert Environment.DEVELOPMENT == "development"
        assert Environment.TESTING == "testing"
        assert Environment.CI == "ci"
        assert Environment.PRODUCTION == "production"


class TestSettingsDefaults:
    """Test default configuration."""

    def test_defaults(self):
        """Test defaults without any environment."""
        settings = _settings()

        assert settings.environment == Environment.DEVELOPMENT
        assert settings.default_guard == "web"
        assert settings.guard_providers == {}
        assert settings.teams_enabled is False
        assert settings.teams_key == "team_id"
        assert settings.enable_wildcard_permission is False
        assert settings.wildcard_delimiters == "./"
        assert settings.database_url is None
        assert settings.redis_url is None


class TestSettingsLoading:
    """Test loading from environment variables."""

    def test_guard_providers_json(self):
        """Test GUARD_PROVIDERS is parsed as JSON."""
        settings = _settings(GUARD_PROVIDERS='{"Client": ["api", "web"]}')

        assert settings.guard_providers == {"Client": ["api", "web"]}

    def test_feature_flags(self):
        """Test boolean flags are parsed."""
        settings = _settings(TEAMS_ENABLED="true", ENABLE_WILDCARD_PERMISSION="1")

        assert settings.teams_enabled is True
        assert settings.enable_wildcard_permission is True


class TestSettingsValidation:
    """Test Settings field validation."""

    def test_log_level_is_normalized(self):
        """Test level names are upper-cased."""
        assert _settings(LOG_LEVEL="debug").log_level == "DEBUG"

    def test_log_level_unknown(self):
        """Test unknown levels are rejected."""
        with pytest.raises(ValidationError):
            _settings(LOG_LEVEL="chatty")

    def test_blank_default_guard(self):
        """Test blank guard names are rejected."""
        with pytest.raises(ValidationError):
            _settings(DEFAULT_GUARD="  ")

    @pytest.mark.parametrize("delimiters", ["", "*."])
    def test_invalid_wildcard_delimiters(self, delimiters):
        """Test empty delimiters and "*" as a delimiter are rejected."""
        with pytest.raises(ValidationError):
            _settings(WILDCARD_DELIMITERS=delimiters)


class TestJsonLogs:
    """Test use_json_logs."""

    def test_development_is_human_readable(self):
        """Test console output in development."""
        assert _settings(ENVIRONMENT="development").use_json_logs is False

    def test_production_is_json(self):
        """Test JSON output outside development."""
        assert _settings(ENVIRONMENT="production").use_json_logs is True

    def test_override(self):
        """Test LOG_JSON wins over the environment."""
        assert _settings(ENVIRONMENT="production", LOG_JSON="false").use_json_logs is False


class TestGetSettings:
    """Test the cached accessor."""

    def test_cached(self):
        """Test get_settings() returns one instance until cleared."""
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
