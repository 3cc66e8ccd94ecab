# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Activity facts consumed by the card-ordering engine.

These models are immutable snapshots of what the upstream activity
service knows about a student at the moment the engine runs. Numeric
fields are unconstrained: stale or racy upstream values are clamped by
the scoring primitives, not rejected here.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from studycompanion.utils.datetime import ensure_utc


class AchievementType(str, Enum):
    """Kinds of achievements recorded against a student."""

    MILESTONE = "milestone"
    GOAL_COMPLETION = "goal_completion"
    MASTERY_LEVEL = "mastery_level"
    OTHER = "other"


class _Snapshot(BaseModel):
    """Base for frozen input snapshots."""

    model_config = ConfigDict(frozen=True)


class Achievement(_Snapshot):
    """An achievement recorded against a student."""

    type: AchievementType = AchievementType.OTHER
    description: str = ""
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)  # type: ignore[return-value]


class SessionRecord(_Snapshot):
    """A completed chat or practice session."""

    topics: list[str] = Field(default_factory=list)
    timestamp: datetime
    achievements: list[Achievement] = Field(default_factory=list)

    @field_validator("timestamp")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)  # type: ignore[return-value]


class SubjectStats(_Snapshot):
    """Aggregated practice statistics for one subject.

    Attributes:
        total_sessions: Number of completed practice sessions.
        average_score: Mean accuracy, nominally 0-1.
        current_streak: Consecutive practice days for this subject.
        longest_streak: Best run of consecutive practice days.
    """

    total_sessions: int = 0
    average_score: float = 0.0
    current_streak: int = 0
    longest_streak: int = 0


class ActivityFacts(_Snapshot):
    """Everything the engine needs to classify and score a student.

    All optional fields mean "no signal" when absent and contribute
    nothing to any score.

    Attributes:
        last_app_access: When the student last opened the app.
        last_session_time: When the last practice/chat session ended.
        recent_sessions: Recently completed sessions.
        has_completed_any_session: Whether any session was ever completed.
        achievement_today: Upstream flag for a milestone reached today.
        recent_achievements: Achievements from the recent past.
        practice_stats: Practice statistics keyed by subject.
        current_streak: Consecutive-day learning streak.
    """

    last_app_access: datetime | None = None
    last_session_time: datetime | None = None
    recent_sessions: list[SessionRecord] = Field(default_factory=list)
    has_completed_any_session: bool = False
    achievement_today: bool | None = None
    recent_achievements: list[Achievement] | None = None
    practice_stats: dict[str, SubjectStats] | None = None
    current_streak: int | None = None

    @field_validator("last_app_access", "last_session_time")
    @classmethod
    def _to_utc(cls, value: datetime | None) -> datetime | None:
        return ensure_utc(value)

    @classmethod
    def empty(cls, has_completed_any_session: bool = False) -> "ActivityFacts":
        """Create a facts snapshot carrying no activity signals."""
        return cls(has_completed_any_session=has_completed_any_session)
