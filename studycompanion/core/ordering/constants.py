# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Constants for the card-ordering engine.

Base scores, step tables and priority factor names shared by the
temporal scoring primitives, the state classifier and the card
priority scorer. The card, state and achievement enums live with the
models and are re-exported here.
"""

from enum import Enum

from studycompanion.models.activity import AchievementType
from studycompanion.models.card_order import CardType, StudentState

__all__ = [
    "AchievementType",
    "CardType",
    "StudentState",
    "PriorityFactor",
    "CARD_PRECEDENCE",
    "DEFAULT_CARD_ORDER",
    "BASE_SCORES",
    "CARD_ORDER_TTL_MINUTES",
    "SESSION_RECENCY_STEPS",
    "INACTIVITY_BONUS_STEPS",
    "INACTIVITY_PENALTY_STEPS",
    "STREAK_BONUS_STEPS",
    "ScoringThresholds",
]


class PriorityFactor(str, Enum):
    """Named contributions to a card's priority score."""

    BASE_SCORE = "base_score"
    SESSION_RECENCY = "session_recency"
    INACTIVITY_BONUS = "inactivity_bonus"
    INACTIVITY_PENALTY = "inactivity_penalty"
    MILESTONE_BONUS = "milestone_bonus"
    GOAL_COMPLETION = "goal_completion"
    KNOWLEDGE_MILESTONE = "knowledge_milestone"
    STREAK_BONUS = "streak_bonus"
    STREAK_CONTINUATION = "streak_continuation"
    STRUGGLE_FOCUS = "struggle_focus"
    REENGAGEMENT_NEED = "reengagement_need"
    FIRST_SESSION_BONUS = "first_session_bonus"


# Input order doubles as the tie-break order of the stable sort
CARD_PRECEDENCE: tuple[CardType, ...] = (
    CardType.PRACTICE,
    CardType.CHAT,
    CardType.PROGRESS,
)

DEFAULT_CARD_ORDER: tuple[CardType, ...] = CARD_PRECEDENCE

BASE_SCORES: dict[CardType, int] = {
    CardType.PRACTICE: 30,
    CardType.CHAT: 20,
    CardType.PROGRESS: 10,
}

# Card orders are reused by callers for this long
CARD_ORDER_TTL_MINUTES = 10


# =============================================================================
# Step tables
# =============================================================================

# (max minutes since last session, score); first row that fits wins
SESSION_RECENCY_STEPS: tuple[tuple[int, int], ...] = (
    (60, 30),
    (120, 20),
    (240, 10),
    (1440, 5),
)

# (min days since last app access, score); checked from the top
INACTIVITY_BONUS_STEPS: tuple[tuple[int, int], ...] = (
    (3, 40),
    (1, 20),
)

INACTIVITY_PENALTY_STEPS: tuple[tuple[int, int], ...] = (
    (3, 10),
    (1, 5),
)

# (min streak days, score)
STREAK_BONUS_STEPS: tuple[tuple[int, int], ...] = (
    (7, 10),
    (3, 5),
)


class ScoringThresholds:
    """Fixed bonuses and windows used by the scoring primitives."""

    ACHIEVEMENT_WINDOW_HOURS = 24
    MILESTONE_BONUS = 40
    GOAL_COMPLETION_BONUS = 20
    KNOWLEDGE_MILESTONE_BONUS = 15

    STREAK_CONTINUATION_MIN_STREAK = 2
    STREAK_CONTINUATION_RECENT_HOURS = 12
    STREAK_CONTINUATION_BONUS = 10

    STRUGGLE_MIN_SESSIONS = 2
    STRUGGLE_SCORE_THRESHOLD = 0.7
    STRUGGLE_FOCUS_BONUS = 20

    REENGAGEMENT_WINDOW_DAYS = 7
    REENGAGEMENT_MIN_SESSIONS = 2
    REENGAGEMENT_NEED_BONUS = 20

    FIRST_SESSION_CHAT_BONUS = 30

    # Classifier cut-offs expressed in the primitives' own score units
    CELEBRATION_MIN_RECENCY_SCORE = 20  # session within ~2 hours
    RE_ENGAGEMENT_MIN_INACTIVITY_BONUS = 40  # 3+ days away
