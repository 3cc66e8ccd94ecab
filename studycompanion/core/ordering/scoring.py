# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Card priority scoring.

Each card starts from its base score and accumulates named factors. The
factor breakdown is kept on the resulting CardPriority, and the score is
always the exact sum of the factors, with penalties recorded as negative
values.

Practice:  base + session_recency + struggle_focus + streak_continuation
           - inactivity_penalty
Chat:      base + inactivity_bonus + reengagement_need
           - floor(session_recency / 2) + first_session_bonus
Progress:  base + milestone_bonus + goal_completion + knowledge_milestone
           + streak_bonus
"""

from datetime import datetime

from studycompanion.core.ordering.constants import (
    BASE_SCORES,
    CARD_PRECEDENCE,
    CardType,
    PriorityFactor,
    ScoringThresholds,
)
from studycompanion.core.ordering.signals import (
    goal_completion_bonus,
    inactivity_bonus,
    inactivity_penalty,
    knowledge_milestone_bonus,
    milestone_bonus,
    reengagement_need_bonus,
    session_recency_score,
    streak_bonus,
    streak_continuation_bonus,
    struggle_focus_bonus,
)
from studycompanion.models.activity import ActivityFacts
from studycompanion.models.card_order import CardPriority
from studycompanion.utils.datetime import resolve_now


class PriorityBuilder:
    """Accumulates named score contributions for one card.

    Example:
        >>> builder = PriorityBuilder(CardType.PROGRESS)
        >>> builder.add(PriorityFactor.STREAK_BONUS, 5).build().score
        15
    """

    def __init__(self, card: CardType) -> None:
        self._card = card
        self._factors: dict[str, int] = {
            PriorityFactor.BASE_SCORE.value: BASE_SCORES[card],
        }

    def add(self, factor: PriorityFactor, value: int) -> "PriorityBuilder":
        """Record a bonus. Zero values are kept so the breakdown is complete."""
        self._factors[factor.value] = self._factors.get(factor.value, 0) + int(value)
        return self

    def subtract(self, factor: PriorityFactor, value: int) -> "PriorityBuilder":
        """Record a penalty as a negative factor."""
        return self.add(factor, -int(value))

    @property
    def score(self) -> int:
        return sum(self._factors.values())

    def build(self) -> CardPriority:
        """Create the immutable CardPriority."""
        return CardPriority(
            card=self._card,
            score=self.score,
            factors=dict(self._factors),
        )


def compute_practice_priority(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> CardPriority:
    """Score the practice card."""
    now = resolve_now(now)
    return (
        PriorityBuilder(CardType.PRACTICE)
        .add(PriorityFactor.SESSION_RECENCY, session_recency_score(facts.last_session_time, now))
        .add(PriorityFactor.STRUGGLE_FOCUS, struggle_focus_bonus(facts.practice_stats))
        .add(
            PriorityFactor.STREAK_CONTINUATION,
            streak_continuation_bonus(facts.current_streak, facts.last_session_time, now),
        )
        .subtract(PriorityFactor.INACTIVITY_PENALTY, inactivity_penalty(facts.last_app_access, now))
        .build()
    )


def compute_chat_priority(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> CardPriority:
    """Score the chat card.

    A recent session pulls chat down by half the recency score (floored),
    and brand-new students with no recorded sessions get a welcome bonus.
    """
    now = resolve_now(now)
    recency = session_recency_score(facts.last_session_time, now)
    first_session = (
        ScoringThresholds.FIRST_SESSION_CHAT_BONUS
        if not facts.has_completed_any_session and not facts.recent_sessions
        else 0
    )

    return (
        PriorityBuilder(CardType.CHAT)
        .add(PriorityFactor.INACTIVITY_BONUS, inactivity_bonus(facts.last_app_access, now))
        .add(PriorityFactor.REENGAGEMENT_NEED, reengagement_need_bonus(facts.recent_sessions, now))
        .subtract(PriorityFactor.SESSION_RECENCY, recency // 2)
        .add(PriorityFactor.FIRST_SESSION_BONUS, first_session)
        .build()
    )


def compute_progress_priority(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> CardPriority:
    """Score the progress card."""
    now = resolve_now(now)
    return (
        PriorityBuilder(CardType.PROGRESS)
        .add(
            PriorityFactor.MILESTONE_BONUS,
            milestone_bonus(facts.achievement_today, facts.recent_achievements, now),
        )
        .add(PriorityFactor.GOAL_COMPLETION, goal_completion_bonus(facts.recent_achievements, now))
        .add(
            PriorityFactor.KNOWLEDGE_MILESTONE,
            knowledge_milestone_bonus(facts.recent_achievements, now),
        )
        .add(PriorityFactor.STREAK_BONUS, streak_bonus(facts.current_streak))
        .build()
    )


_SCORERS = {
    CardType.PRACTICE: compute_practice_priority,
    CardType.CHAT: compute_chat_priority,
    CardType.PROGRESS: compute_progress_priority,
}


def compute_card_priorities(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> list[CardPriority]:
    """Score every card, returned in precedence order (practice, chat, progress)."""
    now = resolve_now(now)
    return [_SCORERS[card](facts, now) for card in CARD_PRECEDENCE]
