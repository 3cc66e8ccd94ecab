# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Difficulty and mastery adaptation for practice sessions.

Two control loops run at different rates:

- Per answer: difficulty moves one step after two consecutive correct
  (up) or two consecutive incorrect (down) answers. Only the two most
  recent answers are considered, so stale runs never cause drift.
- Per session: mastery is smoothed as 70% of the old value plus 30% of
  the session accuracy, which limits how far one session can swing it.

Out-of-range inputs are clamped, never rejected.

Mastery bands used to pick a starting difficulty:
- [0.0, 0.2) -> 1
- [0.2, 0.4) -> 2
- [0.4, 0.6) -> 3
- [0.6, 0.8) -> 4
- [0.8, 1.0] -> 5
"""

from collections.abc import Sequence
from datetime import datetime

from studycompanion.models.practice import MAX_DIFFICULTY, MIN_DIFFICULTY, MasteryState
from studycompanion.utils.datetime import resolve_now

MASTERY_RETENTION_WEIGHT = 0.7
SESSION_ACCURACY_WEIGHT = 0.3

# Answers considered by the difficulty rule
CONSECUTIVE_ANSWERS = 2

# (exclusive upper mastery bound, difficulty); anything above maps to MAX
MASTERY_DIFFICULTY_BANDS: tuple[tuple[float, int], ...] = (
    (0.2, 1),
    (0.4, 2),
    (0.6, 3),
    (0.8, 4),
)


def _clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def clamp_difficulty(level: int) -> int:
    """Clamp a difficulty level to [1, 5]."""
    return int(_clamp(level, MIN_DIFFICULTY, MAX_DIFFICULTY))


def clamp_unit(value: float) -> float:
    """Clamp a mastery or accuracy value to [0, 1]."""
    return _clamp(value, 0.0, 1.0)


def calculate_new_difficulty(current_difficulty: int, recent_answers: Sequence[bool]) -> int:
    """Calculate the next difficulty level.

    Args:
        current_difficulty: Current level, clamped to [1, 5] first.
        recent_answers: Answers ordered most recent first (True = correct).

    Returns:
        New difficulty in [1, 5]. Unchanged with fewer than two answers
        or when the two most recent answers disagree.
    """
    current = clamp_difficulty(current_difficulty)
    if len(recent_answers) < CONSECUTIVE_ANSWERS:
        return current

    last_two = list(recent_answers[:CONSECUTIVE_ANSWERS])
    if all(last_two):
        return clamp_difficulty(current + 1)
    if not any(last_two):
        return clamp_difficulty(current - 1)
    return current


adjust_difficulty = calculate_new_difficulty


def map_mastery_to_difficulty(mastery_level: float) -> int:
    """Pick the starting difficulty for a mastery level."""
    mastery = clamp_unit(mastery_level)
    for upper, difficulty in MASTERY_DIFFICULTY_BANDS:
        if mastery < upper:
            return difficulty
    return MAX_DIFFICULTY


def calculate_new_mastery(current_mastery: float, session_accuracy: float) -> float:
    """Blend a session's accuracy into the running mastery estimate.

    Example:
        >>> calculate_new_mastery(0.5, 1.0)
        0.65
    """
    blended = (
        clamp_unit(current_mastery) * MASTERY_RETENTION_WEIGHT
        + clamp_unit(session_accuracy) * SESSION_ACCURACY_WEIGHT
    )
    # Drops float noise from the blend, e.g. 0.6499999999999999
    return round(clamp_unit(blended), 10)


update_mastery = calculate_new_mastery


def initial_mastery_state(now: datetime | None = None) -> MasteryState:
    """Mastery state for a subject the student has never practiced."""
    return MasteryState(
        mastery_level=0.0,
        difficulty_level=map_mastery_to_difficulty(0.0),
        updated_at=resolve_now(now),
    )


def apply_session_result(
    state: MasteryState,
    session_accuracy: float,
    final_difficulty: int,
    now: datetime | None = None,
) -> MasteryState:
    """Fold a completed session into a subject's mastery state.

    Args:
        state: State before the session.
        session_accuracy: Fraction of correct answers in the session.
        final_difficulty: Difficulty the session ended on.
        now: Update time (defaults to current UTC time).

    Returns:
        A new MasteryState; the input is not modified.
    """
    return MasteryState(
        mastery_level=calculate_new_mastery(state.mastery_level, session_accuracy),
        difficulty_level=clamp_difficulty(final_difficulty),
        updated_at=resolve_now(now),
    )
