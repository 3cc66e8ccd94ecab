# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice adaptation: difficulty control, mastery smoothing and streaks."""

from studycompanion.core.practice.adaptation import (
    adjust_difficulty,
    apply_session_result,
    calculate_new_difficulty,
    calculate_new_mastery,
    initial_mastery_state,
    map_mastery_to_difficulty,
    update_mastery,
)
from studycompanion.core.practice.streaks import calculate_practice_streak

__all__ = [
    "adjust_difficulty",
    "apply_session_result",
    "calculate_new_difficulty",
    "calculate_new_mastery",
    "initial_mastery_state",
    "map_mastery_to_difficulty",
    "update_mastery",
    "calculate_practice_streak",
]
