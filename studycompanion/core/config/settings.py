# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Runtime settings for StudyCompanion, read from the environment.

Each sub-settings class owns an environment prefix; a `.env` file in the
working directory is read as well.

Only operational knobs live here (logging, upstream fetch timeout,
config file locations). The scoring tables, the 10 minute card-order
TTL and the mastery smoothing weights are module constants of the
engine, not settings.

Example:
    >>> from studycompanion.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> settings.companion.fetch_timeout_seconds
    5.0
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class CompanionSettings(BaseSettings):
    """Card-order service configuration.

    Attributes:
        fetch_timeout_seconds: Upper bound on the activity-facts fetch before
            the service falls back to the default card order.
        cache_enabled: Whether computed card orders are reused until they
            expire.
    """

    model_config = SettingsConfigDict(
        env_prefix="COMPANION_",
        extra="ignore",
    )

    fetch_timeout_seconds: float = Field(default=5.0, gt=0.0)
    cache_enabled: bool = True


class EngagementSettings(BaseSettings):
    """Engagement tracking configuration.

    Attributes:
        nudge_config_path: YAML file with retention-nudge criteria.
    """

    model_config = SettingsConfigDict(
        env_prefix="ENGAGEMENT_",
        extra="ignore",
    )

    nudge_config_path: Path = Path("config/nudges.yaml")


class GoalSettings(BaseSettings):
    """Learning goal configuration.

    Attributes:
        goals_config_path: YAML file with the learning goal catalogue.
    """

    model_config = SettingsConfigDict(
        env_prefix="GOALS_",
        extra="ignore",
    )

    goals_config_path: Path = Path("config/goals.yaml")


class Settings(BaseSettings):
    """Top-level settings; obtain the shared instance with get_settings().

    Attributes:
        environment: Deployment tier, selects the log renderer.
        debug: Forces console logging outside development.
        log_level: Level for the root and package loggers.
        companion: Card-order service settings.
        engagement: Engagement tracking settings.
        goals: Learning goal settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    companion: CompanionSettings = Field(default_factory=CompanionSettings)
    engagement: EngagementSettings = Field(default_factory=EngagementSettings)
    goals: GoalSettings = Field(default_factory=GoalSettings)

    @property
    def is_development(self) -> bool:
        """True for the development tier."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """True for the production tier."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Settings built once per process and then reused."""
    return Settings()


def clear_settings_cache() -> None:
    """Forget the shared instance so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
