# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Card order resolution.

Main entry point of the ordering engine. Classifies the student, scores
the three cards, ranks them with a stable descending sort and attaches a
human-readable reason plus a fixed cache expiry.

Usage:
------
    from studycompanion.core.ordering import compute_card_order

    card_order = compute_card_order(facts)
    render(card_order.order)
"""

import logging
from datetime import datetime

from studycompanion.core.ordering.constants import (
    CARD_ORDER_TTL_MINUTES,
    DEFAULT_CARD_ORDER,
    CardType,
    PriorityFactor,
    StudentState,
)
from studycompanion.core.ordering.scoring import PriorityBuilder, compute_card_priorities
from studycompanion.core.ordering.state import detect_student_state
from studycompanion.models.activity import ActivityFacts
from studycompanion.models.card_order import CardOrder, CardOrderContext, CardPriority
from studycompanion.utils.datetime import minutes_from, resolve_now

logger = logging.getLogger(__name__)


STATE_REASONS: dict[StudentState, str] = {
    StudentState.CELEBRATION: (
        "Post-session celebration: Practice card promoted to encourage momentum"
    ),
    StudentState.RE_ENGAGEMENT: (
        "Re-engagement needed: Chat card promoted to reconnect with student"
    ),
    StudentState.ACHIEVEMENT: (
        "Achievement milestone: Progress card promoted to celebrate success"
    ),
    StudentState.FIRST_SESSION: "First session: Chat card promoted to welcome student",
}

# Checked in order against the top card; the first non-zero factor wins
REASON_RULES: tuple[tuple[CardType, PriorityFactor, str], ...] = (
    (
        CardType.PRACTICE,
        PriorityFactor.SESSION_RECENCY,
        "Recent session detected: Practice card promoted",
    ),
    (
        CardType.PRACTICE,
        PriorityFactor.STRUGGLE_FOCUS,
        "Struggling subject detected: Practice card promoted for focused help",
    ),
    (
        CardType.PRACTICE,
        PriorityFactor.STREAK_CONTINUATION,
        "Streak at risk: Practice card promoted to keep the streak going",
    ),
    (
        CardType.CHAT,
        PriorityFactor.INACTIVITY_BONUS,
        "Inactivity detected: Chat card promoted for re-engagement",
    ),
    (
        CardType.CHAT,
        PriorityFactor.REENGAGEMENT_NEED,
        "Fewer sessions this week: Chat card promoted to reconnect",
    ),
    (
        CardType.PROGRESS,
        PriorityFactor.MILESTONE_BONUS,
        "Milestone achieved: Progress card promoted to celebrate",
    ),
    (
        CardType.PROGRESS,
        PriorityFactor.STREAK_BONUS,
        "Learning streak: Progress card promoted to show consistency",
    ),
)

DEFAULT_REASON = "Default ordering: Practice prioritized for continued learning"


def generate_ordering_reason(
    state: StudentState,
    priorities: list[CardPriority],
) -> str:
    """Explain a card ordering.

    Non-default states have a fixed explanation. For the default state the
    top card's factors are checked against REASON_RULES in order.

    Args:
        state: Classified student state.
        priorities: Card priorities sorted descending by score.

    Returns:
        Reason text suitable for a tooltip.
    """
    if state in STATE_REASONS:
        return STATE_REASONS[state]

    if not priorities:
        return DEFAULT_REASON

    top = priorities[0]
    for card, factor, message in REASON_RULES:
        if top.card == card and top.factor(factor.value) != 0:
            return message

    return DEFAULT_REASON


def rank_priorities(priorities: list[CardPriority]) -> list[CardPriority]:
    """Sort descending by score; ties keep their input order."""
    return sorted(priorities, key=lambda priority: priority.score, reverse=True)


def compute_card_order(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> CardOrder:
    """Compute the card order for a student.

    Args:
        facts: Activity snapshot for the student.
        now: Reference time (defaults to current UTC time). The same
            instant is used for every signal, ``computed_at`` and the
            expiry.

    Returns:
        CardOrder with ranked cards, context and ``expires_at``.
    """
    now = resolve_now(now)

    state = detect_student_state(facts, now)
    priorities = rank_priorities(compute_card_priorities(facts, now))
    order = [priority.card for priority in priorities]

    logger.debug(
        "Computed card order: state=%s, order=%s, scores=%s",
        state.value,
        [card.value for card in order],
        [priority.score for priority in priorities],
    )

    return CardOrder(
        order=order,
        context=CardOrderContext(
            student_state=state,
            reason=generate_ordering_reason(state, priorities),
            priorities=priorities,
            computed_at=now,
        ),
        expires_at=minutes_from(now, CARD_ORDER_TTL_MINUTES),
    )


def default_card_order(now: datetime | None = None) -> CardOrder:
    """The fixed fallback order used when activity facts are unavailable.

    Cards appear in precedence order with base-score-only priorities and
    the default state.
    """
    now = resolve_now(now)
    priorities = [PriorityBuilder(card).build() for card in DEFAULT_CARD_ORDER]

    return CardOrder(
        order=list(DEFAULT_CARD_ORDER),
        context=CardOrderContext(
            student_state=StudentState.DEFAULT,
            reason=DEFAULT_REASON,
            priorities=priorities,
            computed_at=now,
        ),
        expires_at=minutes_from(now, CARD_ORDER_TTL_MINUTES),
    )
