# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

Every temporal test pins ``now`` so results never depend on the wall
clock. Relative timestamps are built with the ``ago`` fixture.
"""

from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from studycompanion.core.config.settings import clear_settings_cache
from studycompanion.models.activity import (
    Achievement,
    AchievementType,
    ActivityFacts,
    SessionRecord,
    SubjectStats,
)

FIXED_NOW = datetime(2025, 3, 14, 12, 0, tzinfo=timezone.utc)


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "slow: mark test as slow running"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def _fresh_settings() -> Generator[None, None, None]:
    """Drop cached settings around every test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Time Fixtures
# =============================================================================


@pytest.fixture
def now() -> datetime:
    """Provide the fixed reference time used by all temporal tests."""
    return FIXED_NOW


@pytest.fixture
def ago(now: datetime) -> Callable[..., datetime]:
    """Build a timestamp relative to ``now``.

    Example:
        ago(minutes=30), ago(days=4), ago(hours=-1) for the future
    """

    def _ago(**delta: float) -> datetime:
        return now - timedelta(**delta)

    return _ago


# =============================================================================
# Activity Fact Builders
# =============================================================================


@pytest.fixture
def make_facts() -> Callable[..., ActivityFacts]:
    """Factory for ActivityFacts of a returning student.

    ``has_completed_any_session`` defaults to True; pass overrides as
    keyword arguments.
    """

    def _make(**overrides: Any) -> ActivityFacts:
        data: dict[str, Any] = {"has_completed_any_session": True}
        data.update(overrides)
        return ActivityFacts(**data)

    return _make


@pytest.fixture
def make_session() -> Callable[..., SessionRecord]:
    """Factory for SessionRecord."""

    def _make(timestamp: datetime, topics: list[str] | None = None) -> SessionRecord:
        return SessionRecord(timestamp=timestamp, topics=topics or [])

    return _make


@pytest.fixture
def make_achievement() -> Callable[..., Achievement]:
    """Factory for Achievement."""

    def _make(
        timestamp: datetime,
        achievement_type: AchievementType = AchievementType.OTHER,
        description: str = "",
    ) -> Achievement:
        return Achievement(
            type=achievement_type,
            timestamp=timestamp,
            description=description,
        )

    return _make


@pytest.fixture
def struggling_stats() -> dict[str, SubjectStats]:
    """Practice stats with one subject below the struggle threshold."""
    return {
        "math": SubjectStats(total_sessions=4, average_score=0.55, current_streak=1),
        "science": SubjectStats(total_sessions=6, average_score=0.9),
    }


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"
