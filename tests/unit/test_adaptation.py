# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for difficulty and mastery adaptation."""

import pytest

from studycompanion.core.practice.adaptation import (
    adjust_difficulty,
    apply_session_result,
    calculate_new_difficulty,
    calculate_new_mastery,
    initial_mastery_state,
    map_mastery_to_difficulty,
    update_mastery,
)
from studycompanion.models.practice import MasteryState


@pytest.mark.unit
class TestCalculateNewDifficulty:
    """Tests for the consecutive-answer difficulty rule."""

    def test_two_correct_steps_up(self) -> None:
        """Test that two correct answers raise difficulty."""
        assert calculate_new_difficulty(3, [True, True]) == 4

    def test_mixed_answers_hold(self) -> None:
        """Test that disagreeing answers leave difficulty alone."""
        assert calculate_new_difficulty(3, [True, False]) == 3
        assert calculate_new_difficulty(3, [False, True]) == 3

    def test_two_incorrect_steps_down(self) -> None:
        """Test that two incorrect answers lower difficulty."""
        assert calculate_new_difficulty(3, [False, False]) == 2

    def test_needs_two_answers(self) -> None:
        """Test that fewer than two answers never adjust."""
        assert calculate_new_difficulty(3, []) == 3
        assert calculate_new_difficulty(3, [True]) == 3

    def test_only_two_most_recent_answers_matter(self) -> None:
        """Test that older history is ignored."""
        assert calculate_new_difficulty(2, [True, True, False, False, False]) == 3
        assert calculate_new_difficulty(4, [False, False, True, True, True]) == 3

    def test_bounds(self) -> None:
        """Test that difficulty stays within 1 and 5."""
        assert calculate_new_difficulty(5, [True, True]) == 5
        assert calculate_new_difficulty(1, [False, False]) == 1

    def test_out_of_range_level_is_clamped(self) -> None:
        """Test that a bad incoming level is clamped before adjusting."""
        assert calculate_new_difficulty(9, [True]) == 5
        assert calculate_new_difficulty(0, [False, False]) == 1

    def test_alias(self) -> None:
        """Test that adjust_difficulty is the same rule."""
        assert adjust_difficulty is calculate_new_difficulty


@pytest.mark.unit
class TestMapMasteryToDifficulty:
    """Tests for the mastery band map."""

    @pytest.mark.parametrize(
        ("mastery", "expected"),
        [
            (0.0, 1),
            (0.19, 1),
            (0.2, 2),
            (0.39, 2),
            (0.4, 3),
            (0.6, 4),
            (0.79, 4),
            (0.8, 5),
            (1.0, 5),
            (-0.4, 1),
            (1.7, 5),
        ],
    )
    def test_bands(self, mastery, expected) -> None:
        """Test each band boundary and clamping."""
        assert map_mastery_to_difficulty(mastery) == expected


@pytest.mark.unit
class TestCalculateNewMastery:
    """Tests for the 70/30 mastery smoothing."""

    def test_perfect_session_from_half(self) -> None:
        """Test the canonical example."""
        assert calculate_new_mastery(0.5, 1.0) == pytest.approx(0.65)

    def test_failing_session_limits_drop(self) -> None:
        """Test that one bad session cannot wipe mastery."""
        assert calculate_new_mastery(0.8, 0.0) == pytest.approx(0.56)

    def test_perfect_session_limits_rise(self) -> None:
        """Test that one great session cannot max mastery."""
        assert calculate_new_mastery(0.2, 1.0) == pytest.approx(0.44)

    @pytest.mark.parametrize(
        ("old", "accuracy", "expected"),
        [(-0.5, 1.0, 0.3), (1.5, 0.0, 0.7), (0.5, 1.5, 0.65), (2.0, 2.0, 1.0)],
    )
    def test_inputs_are_clamped_before_blending(self, old, accuracy, expected) -> None:
        """Test clamping of out-of-range inputs."""
        result = calculate_new_mastery(old, accuracy)

        assert result == pytest.approx(expected)
        assert 0.0 <= result <= 1.0

    def test_alias(self) -> None:
        """Test that update_mastery is the same update."""
        assert update_mastery is calculate_new_mastery


@pytest.mark.unit
class TestMasteryLifecycle:
    """Tests for initial_mastery_state and apply_session_result."""

    def test_initial_state(self, now) -> None:
        """Test the state created on first practice."""
        state = initial_mastery_state(now)

        assert state.mastery_level == 0.0
        assert state.difficulty_level == 1
        assert state.updated_at == now

    def test_apply_session_result(self, now) -> None:
        """Test folding a session into mastery."""
        before = MasteryState(mastery_level=0.5, difficulty_level=3)

        after = apply_session_result(before, 1.0, 4, now)

        assert after.mastery_level == pytest.approx(0.65)
        assert after.difficulty_level == 4
        assert after.updated_at == now
        assert before.mastery_level == 0.5
