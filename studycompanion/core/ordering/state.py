# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student state classification.

The classifier is an ordered list of (state, predicate) rules. The first
rule whose predicate holds decides the state, so the table order is the
priority order:

1. first_session  - no session ever completed
2. celebration    - a session ended within roughly two hours
3. re_engagement  - three or more days since the app was opened
4. achievement    - a milestone today or any achievement in 24 hours
5. default        - nothing special

``last_session_time`` and ``last_app_access`` are tracked separately
upstream and are not assumed to agree. A fresh session with a stale app
access timestamp therefore classifies as celebration.
"""

import logging
from collections.abc import Callable
from datetime import datetime

from studycompanion.core.ordering.constants import ScoringThresholds, StudentState
from studycompanion.core.ordering.signals import (
    inactivity_bonus,
    milestone_bonus,
    session_recency_score,
)
from studycompanion.models.activity import ActivityFacts

logger = logging.getLogger(__name__)

StatePredicate = Callable[[ActivityFacts, datetime | None], bool]


def _is_first_session(facts: ActivityFacts, now: datetime | None) -> bool:
    return not facts.has_completed_any_session


def _just_finished_session(facts: ActivityFacts, now: datetime | None) -> bool:
    return (
        session_recency_score(facts.last_session_time, now)
        >= ScoringThresholds.CELEBRATION_MIN_RECENCY_SCORE
    )


def _returning_after_absence(facts: ActivityFacts, now: datetime | None) -> bool:
    return (
        inactivity_bonus(facts.last_app_access, now)
        >= ScoringThresholds.RE_ENGAGEMENT_MIN_INACTIVITY_BONUS
    )


def _reached_milestone(facts: ActivityFacts, now: datetime | None) -> bool:
    return milestone_bonus(facts.achievement_today, facts.recent_achievements, now) > 0


STATE_RULES: tuple[tuple[StudentState, StatePredicate], ...] = (
    (StudentState.FIRST_SESSION, _is_first_session),
    (StudentState.CELEBRATION, _just_finished_session),
    (StudentState.RE_ENGAGEMENT, _returning_after_absence),
    (StudentState.ACHIEVEMENT, _reached_milestone),
)


def detect_student_state(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> StudentState:
    """Classify a student's engagement context.

    Args:
        facts: Activity snapshot for the student.
        now: Reference time (defaults to current UTC time).

    Returns:
        The state of the first matching rule, or DEFAULT.
    """
    for state, predicate in STATE_RULES:
        if predicate(facts, now):
            logger.debug("Student state matched rule: %s", state.value)
            return state

    return StudentState.DEFAULT
