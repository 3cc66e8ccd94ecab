# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic models shared across the engine and the domain services."""

from studycompanion.models.activity import (
    Achievement,
    AchievementType,
    ActivityFacts,
    SessionRecord,
    SubjectStats,
)
from studycompanion.models.card_order import (
    CardOrder,
    CardOrderContext,
    CardPriority,
    CardType,
    StudentState,
)
from studycompanion.models.engagement import (
    EngagementMetrics,
    NudgeCriteria,
    NudgeVariant,
)
from studycompanion.models.goals import (
    GoalCompletion,
    GoalCriteria,
    GoalMetrics,
    GoalProgress,
    GoalStatus,
    LearningGoal,
)
from studycompanion.models.practice import (
    MAX_DIFFICULTY,
    MIN_DIFFICULTY,
    DifficultyChange,
    DifficultyDirection,
    MasteryState,
    PracticeSession,
    PracticeSessionStatus,
    PracticeSessionSummary,
    PracticeStreak,
)

__all__ = [
    # Activity facts
    "Achievement",
    "AchievementType",
    "ActivityFacts",
    "SessionRecord",
    "SubjectStats",
    # Card order
    "CardOrder",
    "CardOrderContext",
    "CardPriority",
    "CardType",
    "StudentState",
    # Engagement
    "EngagementMetrics",
    "NudgeCriteria",
    "NudgeVariant",
    # Goals
    "GoalCompletion",
    "GoalCriteria",
    "GoalMetrics",
    "GoalProgress",
    "GoalStatus",
    "LearningGoal",
    # Practice
    "MIN_DIFFICULTY",
    "MAX_DIFFICULTY",
    "DifficultyChange",
    "DifficultyDirection",
    "MasteryState",
    "PracticeSession",
    "PracticeSessionStatus",
    "PracticeSessionSummary",
    "PracticeStreak",
]
