# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Temporal scoring primitives for the card-ordering engine.

Each primitive maps one activity signal to a small integer bonus. They
are pure and total: a missing signal always scores 0, and elapsed time
is clamped so that timestamps in the future count as "just now".

Every primitive accepts an optional ``now`` so callers (and tests) can
pin the reference time.
"""

from collections.abc import Iterable, Mapping, Sequence
from datetime import datetime

from studycompanion.core.ordering.constants import (
    INACTIVITY_BONUS_STEPS,
    INACTIVITY_PENALTY_STEPS,
    SESSION_RECENCY_STEPS,
    STREAK_BONUS_STEPS,
    AchievementType,
    ScoringThresholds,
)
from studycompanion.models.activity import Achievement, SessionRecord, SubjectStats
from studycompanion.utils.datetime import days_since, hours_since, minutes_since


def _score_at_most(value: float, steps: Sequence[tuple[int, int]]) -> int:
    for limit, score in steps:
        if value <= limit:
            return score
    return 0


def _score_at_least(value: float, steps: Sequence[tuple[int, int]]) -> int:
    for limit, score in steps:
        if value >= limit:
            return score
    return 0


def _recent(
    achievements: Iterable[Achievement] | None,
    now: datetime | None,
    achievement_type: AchievementType | None = None,
) -> bool:
    """Whether any achievement (optionally of one type) falls in the 24h window."""
    if not achievements:
        return False

    for achievement in achievements:
        if achievement_type is not None and achievement.type != achievement_type:
            continue
        if hours_since(achievement.timestamp, now) < ScoringThresholds.ACHIEVEMENT_WINDOW_HOURS:
            return True
    return False


def session_recency_score(
    last_session_time: datetime | None,
    now: datetime | None = None,
) -> int:
    """Score how recently the student finished a session.

    Returns 30 within an hour, 20 within two, 10 within four, 5 within
    a day and 0 after that or when no session is known.
    """
    if last_session_time is None:
        return 0
    return _score_at_most(minutes_since(last_session_time, now), SESSION_RECENCY_STEPS)


def inactivity_bonus(
    last_app_access: datetime | None,
    now: datetime | None = None,
) -> int:
    """Bonus for time away from the app: 40 at 3+ days, 20 at 1+ day."""
    if last_app_access is None:
        return 0
    return _score_at_least(days_since(last_app_access, now), INACTIVITY_BONUS_STEPS)


def inactivity_penalty(
    last_app_access: datetime | None,
    now: datetime | None = None,
) -> int:
    """Penalty magnitude for time away: 10 at 3+ days, 5 at 1+ day.

    Returned as a positive number; the scorer records it negated.
    """
    if last_app_access is None:
        return 0
    return _score_at_least(days_since(last_app_access, now), INACTIVITY_PENALTY_STEPS)


def milestone_bonus(
    achievement_today: bool | None,
    recent_achievements: Iterable[Achievement] | None,
    now: datetime | None = None,
) -> int:
    """Bonus when a milestone was reached today or any achievement in 24h."""
    if achievement_today:
        return ScoringThresholds.MILESTONE_BONUS
    if _recent(recent_achievements, now):
        return ScoringThresholds.MILESTONE_BONUS
    return 0


def goal_completion_bonus(
    recent_achievements: Iterable[Achievement] | None,
    now: datetime | None = None,
) -> int:
    """Bonus for a goal completed in the last 24 hours."""
    if _recent(recent_achievements, now, AchievementType.GOAL_COMPLETION):
        return ScoringThresholds.GOAL_COMPLETION_BONUS
    return 0


def knowledge_milestone_bonus(
    recent_achievements: Iterable[Achievement] | None,
    now: datetime | None = None,
) -> int:
    """Bonus for a mastery level reached in the last 24 hours."""
    if _recent(recent_achievements, now, AchievementType.MASTERY_LEVEL):
        return ScoringThresholds.KNOWLEDGE_MILESTONE_BONUS
    return 0


def streak_bonus(current_streak: int | None) -> int:
    """Bonus for an ongoing streak: 10 at 7+ days, 5 at 3+ days."""
    if not current_streak:
        return 0
    return _score_at_least(current_streak, STREAK_BONUS_STEPS)


def streak_continuation_bonus(
    current_streak: int | None,
    last_session_time: datetime | None,
    now: datetime | None = None,
) -> int:
    """Nudge toward practice when a streak is at risk of lapsing.

    Applies to streaks of at least two days when no session ended in the
    last 12 hours. A missing session time counts as "not recent".
    """
    if (current_streak or 0) < ScoringThresholds.STREAK_CONTINUATION_MIN_STREAK:
        return 0

    if (
        last_session_time is not None
        and hours_since(last_session_time, now)
        < ScoringThresholds.STREAK_CONTINUATION_RECENT_HOURS
    ):
        return 0

    return ScoringThresholds.STREAK_CONTINUATION_BONUS


def struggle_focus_bonus(practice_stats: Mapping[str, SubjectStats] | None) -> int:
    """Bonus when some subject has enough sessions and a low average score."""
    if not practice_stats:
        return 0

    for stats in practice_stats.values():
        if (
            stats.total_sessions >= ScoringThresholds.STRUGGLE_MIN_SESSIONS
            and stats.average_score < ScoringThresholds.STRUGGLE_SCORE_THRESHOLD
        ):
            return ScoringThresholds.STRUGGLE_FOCUS_BONUS
    return 0


def reengagement_need_bonus(
    recent_sessions: Sequence[SessionRecord] | None,
    now: datetime | None = None,
) -> int:
    """Bonus toward chat when recent practice has thinned out.

    An empty history carries no signal. Otherwise fewer than two
    sessions in the trailing seven days earns the bonus, including the
    case where every recorded session is older than that.
    """
    if not recent_sessions:
        return 0

    in_window = sum(
        1
        for session in recent_sessions
        if days_since(session.timestamp, now) < ScoringThresholds.REENGAGEMENT_WINDOW_DAYS
    )
    if in_window < ScoringThresholds.REENGAGEMENT_MIN_SESSIONS:
        return ScoringThresholds.REENGAGEMENT_NEED_BONUS
    return 0
