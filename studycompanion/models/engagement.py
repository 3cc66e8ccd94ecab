# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement metrics and retention-nudge models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class NudgeVariant(str, Enum):
    """Retention nudge flavour, chosen by how much the student has done."""

    SUPER_LOW = "super_low"
    LOW = "low"
    MODERATE = "moderate"


class NudgeCriteria(BaseModel):
    """Thresholds deciding when a retention nudge may be sent.

    Attributes:
        min_days_since_access: Days of inactivity before a nudge.
        max_sessions_for_trigger: Students with this many sessions are
            considered engaged and never nudged.
        nudge_frequency_days: Minimum days between two nudges.
    """

    min_days_since_access: float = Field(default=7, ge=0)
    max_sessions_for_trigger: int = Field(default=3, ge=0)
    nudge_frequency_days: float = Field(default=7, ge=0)


class EngagementMetrics(BaseModel):
    """Engagement summary derived from activity facts."""

    total_sessions: int = 0
    sessions_in_last_7_days: int = 0
    last_app_access: datetime | None = None
    last_session_time: datetime | None = None
    current_streak: int = 0
    total_learning_minutes: int = 0
    topics_learned: list[str] = Field(default_factory=list)
