# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learning goal completion detection and progress tracking."""

from studycompanion.core.goals.detection import (
    build_goal_progress,
    calculate_goal_progress,
    detect_goal_completion,
    get_all_goals_progress,
    get_goal_by_id,
    get_goal_by_subject,
    get_goals_for_subjects,
    get_related_subjects,
    load_learning_goals,
    meets_goal_criteria,
)

__all__ = [
    "build_goal_progress",
    "calculate_goal_progress",
    "detect_goal_completion",
    "get_all_goals_progress",
    "get_goal_by_id",
    "get_goal_by_subject",
    "get_goals_for_subjects",
    "get_related_subjects",
    "load_learning_goals",
    "meets_goal_criteria",
]
