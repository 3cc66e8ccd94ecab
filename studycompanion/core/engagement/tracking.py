# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement tracking for retention nudges.

Derives engagement metrics from an activity snapshot and decides when a
student who has drifted away may be sent a retention nudge.

Nudge rules, checked in order:
1. Students with ``max_sessions_for_trigger`` sessions or more are engaged
   and never nudged.
2. The student must have been away at least ``min_days_since_access``
   days. A student with no recorded access counts as away forever.
3. At least ``nudge_frequency_days`` must have passed since the last nudge.
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

from studycompanion.core.config.settings import get_settings
from studycompanion.core.config.yaml_loader import load_yaml_section
from studycompanion.models.activity import ActivityFacts
from studycompanion.models.engagement import EngagementMetrics, NudgeCriteria, NudgeVariant
from studycompanion.utils.datetime import days_since, ensure_utc

logger = logging.getLogger(__name__)

# Rough per-session estimate used for the learning-time summary
MINUTES_PER_SESSION = 20
RECENT_WINDOW_DAYS = 7

NUDGE_CRITERIA_KEY = "nudge_criteria"


def calculate_engagement_metrics(
    facts: ActivityFacts,
    now: datetime | None = None,
) -> EngagementMetrics:
    """Summarise a student's engagement.

    Args:
        facts: Activity snapshot for the student.
        now: Reference time (defaults to current UTC time).

    Returns:
        EngagementMetrics with session counts, learning time estimate and
        topics in first-seen order.
    """
    sessions = facts.recent_sessions
    in_last_week = sum(
        1 for session in sessions if days_since(session.timestamp, now) < RECENT_WINDOW_DAYS
    )

    topics: list[str] = []
    for session in sessions:
        for topic in session.topics:
            if topic not in topics:
                topics.append(topic)

    return EngagementMetrics(
        total_sessions=len(sessions),
        sessions_in_last_7_days=in_last_week,
        last_app_access=facts.last_app_access,
        last_session_time=facts.last_session_time,
        current_streak=max(0, facts.current_streak or 0),
        total_learning_minutes=len(sessions) * MINUTES_PER_SESSION,
        topics_learned=topics,
    )


def should_trigger_nudge(
    metrics: EngagementMetrics,
    last_nudge_time: datetime | None = None,
    criteria: NudgeCriteria | None = None,
    now: datetime | None = None,
) -> bool:
    """Decide whether a retention nudge should be sent now."""
    criteria = criteria or NudgeCriteria()

    if metrics.total_sessions >= criteria.max_sessions_for_trigger:
        return False

    if (
        metrics.last_app_access is not None
        and days_since(metrics.last_app_access, now) < criteria.min_days_since_access
    ):
        return False

    if (
        last_nudge_time is not None
        and days_since(last_nudge_time, now) < criteria.nudge_frequency_days
    ):
        return False

    return True


def determine_nudge_variant(sessions_completed: int) -> NudgeVariant:
    """Pick the nudge flavour for how many sessions a student finished."""
    if sessions_completed <= 0:
        return NudgeVariant.SUPER_LOW
    if sessions_completed == 1:
        return NudgeVariant.LOW
    return NudgeVariant.MODERATE


def calculate_next_nudge_eligible_time(
    last_nudge_time: datetime,
    criteria: NudgeCriteria | None = None,
) -> datetime:
    """When the next nudge may be sent after ``last_nudge_time``."""
    criteria = criteria or NudgeCriteria()
    return ensure_utc(last_nudge_time) + timedelta(days=criteria.nudge_frequency_days)  # type: ignore[operator]


def load_nudge_criteria(path: Path | None = None) -> NudgeCriteria:
    """Load nudge criteria from YAML.

    The file may hold the fields at the top level or under a
    ``nudge_criteria`` key.

    Args:
        path: YAML file (defaults to ``engagement.nudge_config_path``).

    Returns:
        Parsed criteria, or the defaults when the file does not exist.

    Raises:
        YAMLLoadError: If the file exists but cannot be parsed.
        pydantic.ValidationError: If a threshold has an invalid value.
    """
    if path is None:
        path = get_settings().engagement.nudge_config_path

    if not path.exists():
        logger.info("Nudge config %s not found, using default criteria", path)
        return NudgeCriteria()

    criteria = NudgeCriteria.model_validate(load_yaml_section(path, NUDGE_CRITERIA_KEY))

    logger.debug("Loaded nudge criteria from %s: %s", path, criteria.model_dump())
    return criteria
