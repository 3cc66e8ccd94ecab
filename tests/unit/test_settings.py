# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for application settings."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from studycompanion.core.config.settings import (
    CompanionSettings,
    EngagementSettings,
    GoalSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)


class TestCompanionSettings:
    """Tests for CompanionSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = CompanionSettings()

        assert settings.fetch_timeout_seconds == 5.0
        assert settings.cache_enabled is True

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {
            "COMPANION_FETCH_TIMEOUT_SECONDS": "1.5",
            "COMPANION_CACHE_ENABLED": "false",
        }

        with patch.dict(os.environ, env, clear=False):
            settings = CompanionSettings()

        assert settings.fetch_timeout_seconds == 1.5
        assert settings.cache_enabled is False

    def test_timeout_must_be_positive(self) -> None:
        """Test that a zero timeout is rejected."""
        with pytest.raises(ValidationError):
            CompanionSettings(fetch_timeout_seconds=0)


class TestEngagementSettings:
    """Tests for EngagementSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = EngagementSettings()

        assert settings.nudge_config_path == Path("config/nudges.yaml")

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {"ENGAGEMENT_NUDGE_CONFIG_PATH": "/etc/studycompanion/nudges.yaml"}

        with patch.dict(os.environ, env, clear=False):
            settings = EngagementSettings()

        assert settings.nudge_config_path == Path("/etc/studycompanion/nudges.yaml")


class TestGoalSettings:
    """Tests for GoalSettings."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        assert GoalSettings().goals_config_path == Path("config/goals.yaml")

    def test_loads_from_environment(self) -> None:
        """Test that settings load from environment variables."""
        env = {"GOALS_GOALS_CONFIG_PATH": "/etc/studycompanion/goals.yaml"}

        with patch.dict(os.environ, env, clear=False):
            settings = GoalSettings()

        assert settings.goals_config_path == Path("/etc/studycompanion/goals.yaml")


class TestSettings:
    """Tests for main Settings class."""

    def test_default_values(self) -> None:
        """Test default configuration values."""
        settings = Settings()

        assert settings.environment == "development"
        assert settings.debug is False
        assert settings.log_level == "INFO"

    def test_subsettings_loaded(self) -> None:
        """Test that all subsettings are loaded."""
        settings = Settings()

        assert isinstance(settings.companion, CompanionSettings)
        assert isinstance(settings.engagement, EngagementSettings)
        assert isinstance(settings.goals, GoalSettings)

    def test_invalid_environment_rejected(self) -> None:
        """Test that unknown environments fail validation."""
        with pytest.raises(ValidationError):
            Settings(environment="qa")  # type: ignore[arg-type]

    def test_is_development_property(self) -> None:
        """Test is_development property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_development is True
        assert prod_settings.is_development is False

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        dev_settings = Settings(environment="development")
        prod_settings = Settings(environment="production")

        assert dev_settings.is_production is False
        assert prod_settings.is_production is True


class TestGetSettings:
    """Tests for get_settings function."""

    def test_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        settings = get_settings()

        assert isinstance(settings, Settings)

    def test_returns_cached_instance(self) -> None:
        """Test that get_settings returns cached instance."""
        settings1 = get_settings()
        settings2 = get_settings()

        assert settings1 is settings2

    def test_clear_cache_allows_reload(self) -> None:
        """Test that clearing cache picks up environment changes."""
        settings1 = get_settings()

        with patch.dict(os.environ, {"LOG_LEVEL": "DEBUG"}, clear=False):
            clear_settings_cache()
            settings2 = get_settings()

        assert settings1 is not settings2
        assert settings2.log_level == "DEBUG"
