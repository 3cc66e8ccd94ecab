# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for StudyCompanion.

- Settings: Pydantic-based settings loaded from environment variables
- YAML loader: loading of rule-threshold files

Example:
    >>> from studycompanion.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from studycompanion.core.config.settings import (
    CompanionSettings,
    EngagementSettings,
    GoalSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from studycompanion.core.config.yaml_loader import (
    YAMLLoadError,
    load_yaml,
    load_yaml_section,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "CompanionSettings",
    "EngagementSettings",
    "GoalSettings",
    # YAML utilities
    "load_yaml",
    "load_yaml_section",
    "YAMLLoadError",
]
