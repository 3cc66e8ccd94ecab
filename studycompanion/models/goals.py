# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learning goal models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator

from studycompanion.models.activity import Achievement, AchievementType
from studycompanion.utils.datetime import ensure_utc


class GoalStatus(str, Enum):
    """Whether a goal is still being worked on."""

    ACTIVE = "active"
    COMPLETED = "completed"


class GoalCriteria(BaseModel):
    """Thresholds a subject's practice stats must reach to complete a goal.

    Attributes:
        min_accuracy: Required average score, 0-1.
        min_sessions: Required number of practice sessions.
        min_consecutive_days: Required subject streak; 0 means no streak
            requirement.
    """

    min_accuracy: float = Field(default=0.8, ge=0.0, le=1.0)
    min_sessions: int = Field(default=5, ge=0)
    min_consecutive_days: int = Field(default=0, ge=0)


class LearningGoal(BaseModel):
    """A subject goal from the goal catalogue."""

    id: str
    name: str
    subject: str
    description: str = ""
    criteria: GoalCriteria = Field(default_factory=GoalCriteria)
    related_subjects: list[str] = Field(default_factory=list)


class GoalCompletion(BaseModel):
    """A goal newly reached by a student."""

    goal_id: str
    goal_name: str
    subject: str
    completion_time: datetime
    accuracy: float
    sessions_to_completion: int

    @field_validator("completion_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)  # type: ignore[return-value]

    def to_achievement(self) -> Achievement:
        """Record the completion as a goal_completion achievement."""
        return Achievement(
            type=AchievementType.GOAL_COMPLETION,
            description=self.goal_name,
            timestamp=self.completion_time,
        )


class GoalMetrics(BaseModel):
    """Subject stats a goal's progress is measured on."""

    accuracy: float = 0.0
    sessions_count: int = 0
    consecutive_days: int = 0


class GoalProgress(BaseModel):
    """Progress of one goal for a student.

    Attributes:
        progress_percent: 0-100, half from accuracy and half from sessions.
        completion_time: Set only for completed goals.
    """

    goal_id: str
    name: str
    subject: str
    status: GoalStatus = GoalStatus.ACTIVE
    progress_percent: int = Field(default=0, ge=0, le=100)
    completion_time: datetime | None = None
    metrics: GoalMetrics = Field(default_factory=GoalMetrics)
