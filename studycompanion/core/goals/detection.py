# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learning goal completion and progress.

Each subject has at most one goal in the catalogue. A goal is completed
when the subject's practice stats meet all of its criteria:

- average score >= ``min_accuracy``
- total sessions >= ``min_sessions``
- subject streak >= ``min_consecutive_days`` (skipped when 0)

Progress is reported as a percentage: up to 50 points for accuracy
toward the target and up to 50 for sessions toward the target.

Completions become ``goal_completion`` achievements, which the Progress
card scores on.

Example:
    >>> goals = load_learning_goals()
    >>> completions = detect_goal_completion(facts.practice_stats or {}, goals, completed_ids)
    >>> achievements = [c.to_achievement() for c in completions]
"""

import logging
import math
from collections.abc import Collection, Mapping, Sequence
from datetime import datetime
from pathlib import Path

from studycompanion.core.config.settings import get_settings
from studycompanion.core.config.yaml_loader import YAMLLoadError, load_yaml_section
from studycompanion.models.activity import SubjectStats
from studycompanion.models.goals import (
    GoalCompletion,
    GoalMetrics,
    GoalProgress,
    GoalStatus,
    LearningGoal,
)
from studycompanion.utils.datetime import ensure_utc, resolve_now

logger = logging.getLogger(__name__)

LEARNING_GOALS_KEY = "learning_goals"

# Share of the progress percentage for each of accuracy and sessions
PROGRESS_SHARE = 50


def _subject_key(subject: str) -> str:
    return subject.strip().casefold()


def get_goal_by_id(goals: Sequence[LearningGoal], goal_id: str) -> LearningGoal | None:
    """Find a goal by its ID."""
    return next((goal for goal in goals if goal.id == goal_id), None)


def get_goal_by_subject(goals: Sequence[LearningGoal], subject: str) -> LearningGoal | None:
    """Find the goal for a subject, ignoring case."""
    key = _subject_key(subject)
    return next((goal for goal in goals if _subject_key(goal.subject) == key), None)


def get_goals_for_subjects(
    goals: Sequence[LearningGoal],
    subjects: Collection[str],
) -> list[LearningGoal]:
    """Goals for any of ``subjects``, in catalogue order."""
    keys = {_subject_key(subject) for subject in subjects}
    return [goal for goal in goals if _subject_key(goal.subject) in keys]


def get_related_subjects(goals: Sequence[LearningGoal], subject: str) -> list[str]:
    """Subjects suggested after completing the goal for ``subject``."""
    goal = get_goal_by_subject(goals, subject)
    return list(goal.related_subjects) if goal else []


def meets_goal_criteria(goal: LearningGoal, stats: SubjectStats) -> bool:
    """Whether ``stats`` satisfy every criterion of ``goal``."""
    criteria = goal.criteria

    if stats.average_score < criteria.min_accuracy:
        return False
    if stats.total_sessions < criteria.min_sessions:
        return False
    if criteria.min_consecutive_days and stats.current_streak < criteria.min_consecutive_days:
        return False
    return True


def detect_goal_completion(
    practice_stats: Mapping[str, SubjectStats],
    goals: Sequence[LearningGoal],
    completed_goal_ids: Collection[str] = (),
    now: datetime | None = None,
) -> list[GoalCompletion]:
    """Find goals newly completed by a student.

    Args:
        practice_stats: Practice statistics keyed by subject.
        goals: Goal catalogue.
        completed_goal_ids: Goals the student already completed; these are
            never reported again.
        now: Completion time to record (defaults to current UTC time).

    Returns:
        One GoalCompletion per newly met goal, in practice_stats order.
        Subjects without a goal are ignored.
    """
    now = resolve_now(now)
    completions: list[GoalCompletion] = []

    for subject, stats in practice_stats.items():
        goal = get_goal_by_subject(goals, subject)
        if goal is None or goal.id in completed_goal_ids:
            continue
        if not meets_goal_criteria(goal, stats):
            continue

        completions.append(
            GoalCompletion(
                goal_id=goal.id,
                goal_name=goal.name,
                subject=goal.subject,
                completion_time=now,
                accuracy=stats.average_score,
                sessions_to_completion=stats.total_sessions,
            )
        )
        logger.info(
            "Goal completed: goal=%s, accuracy=%.2f, sessions=%d",
            goal.id,
            stats.average_score,
            stats.total_sessions,
        )

    return completions


def _share(current: float, target: float) -> float:
    if target <= 0:
        return PROGRESS_SHARE
    return min(max(current, 0.0) / target * PROGRESS_SHARE, PROGRESS_SHARE)


def calculate_goal_progress(
    current_accuracy: float,
    current_sessions: int,
    target_accuracy: float,
    target_sessions: int,
) -> int:
    """Progress toward a goal as a whole percentage.

    Accuracy and sessions each contribute up to 50. A zero target counts
    as already met. Halves round up.
    """
    total = _share(current_accuracy, target_accuracy) + _share(current_sessions, target_sessions)
    return min(math.floor(total + 0.5), 100)


def build_goal_progress(
    goal: LearningGoal,
    stats: SubjectStats | None,
    completion_time: datetime | None = None,
) -> GoalProgress:
    """Progress of ``goal``; a completion time marks it completed."""
    stats = stats or SubjectStats()

    return GoalProgress(
        goal_id=goal.id,
        name=goal.name,
        subject=goal.subject,
        status=GoalStatus.COMPLETED if completion_time else GoalStatus.ACTIVE,
        progress_percent=calculate_goal_progress(
            stats.average_score,
            stats.total_sessions,
            goal.criteria.min_accuracy,
            goal.criteria.min_sessions,
        ),
        completion_time=ensure_utc(completion_time),
        metrics=GoalMetrics(
            accuracy=stats.average_score,
            sessions_count=stats.total_sessions,
            consecutive_days=stats.current_streak,
        ),
    )


def get_all_goals_progress(
    practice_stats: Mapping[str, SubjectStats],
    goals: Sequence[LearningGoal],
    completion_times: Mapping[str, datetime] | None = None,
) -> list[GoalProgress]:
    """Progress of every catalogue goal, in catalogue order.

    Args:
        practice_stats: Practice statistics keyed by subject.
        goals: Goal catalogue.
        completion_times: Completion time per completed goal ID.
    """
    completion_times = completion_times or {}
    stats_by_subject = {_subject_key(subject): stats for subject, stats in practice_stats.items()}

    return [
        build_goal_progress(
            goal,
            stats_by_subject.get(_subject_key(goal.subject)),
            completion_times.get(goal.id),
        )
        for goal in goals
    ]


def load_learning_goals(path: Path | None = None) -> list[LearningGoal]:
    """Load the goal catalogue from YAML.

    Goals are read from a mapping of goal ID to definition, at the top
    level or under a ``learning_goals`` key.

    Args:
        path: YAML file (defaults to ``goals.goals_config_path``).

    Returns:
        Goals in file order; empty when the file does not exist.

    Raises:
        YAMLLoadError: If the file cannot be parsed or a goal entry is not
            a mapping.
        pydantic.ValidationError: If a goal has an invalid field.
    """
    if path is None:
        path = get_settings().goals.goals_config_path

    if not path.exists():
        logger.warning("Goal config %s not found, no learning goals loaded", path)
        return []

    goals = []
    for goal_id, definition in load_yaml_section(path, LEARNING_GOALS_KEY).items():
        if not isinstance(definition, dict):
            raise YAMLLoadError(path, f"goal '{goal_id}' is not a mapping")
        goals.append(LearningGoal.model_validate({**definition, "id": str(goal_id)}))

    logger.debug("Loaded %d learning goals from %s", len(goals), path)
    return goals
