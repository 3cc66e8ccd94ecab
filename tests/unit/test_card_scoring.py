# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for card priority scoring."""

import pytest
from pydantic import ValidationError

from studycompanion.core.ordering.constants import AchievementType, CardType, PriorityFactor
from studycompanion.core.ordering.scoring import (
    PriorityBuilder,
    compute_card_priorities,
    compute_chat_priority,
    compute_practice_priority,
    compute_progress_priority,
)
from studycompanion.models.activity import ActivityFacts
from studycompanion.models.card_order import CardPriority


@pytest.mark.unit
class TestPriorityBuilder:
    """Tests for PriorityBuilder."""

    def test_starts_from_base_score(self) -> None:
        """Test that every card starts from its base score."""
        assert PriorityBuilder(CardType.PRACTICE).build().score == 30
        assert PriorityBuilder(CardType.CHAT).build().score == 20
        assert PriorityBuilder(CardType.PROGRESS).build().score == 10

    def test_penalties_are_negative_factors(self) -> None:
        """Test that subtract stores the penalty as a negative value."""
        priority = (
            PriorityBuilder(CardType.PRACTICE)
            .subtract(PriorityFactor.INACTIVITY_PENALTY, 10)
            .build()
        )

        assert priority.factor("inactivity_penalty") == -10
        assert priority.score == 20

    def test_zero_factors_are_recorded(self) -> None:
        """Test that zero contributions still appear in the breakdown."""
        priority = PriorityBuilder(CardType.CHAT).add(PriorityFactor.INACTIVITY_BONUS, 0).build()

        assert "inactivity_bonus" in priority.factors


@pytest.mark.unit
class TestCardPriorityModel:
    """Tests for the CardPriority score invariant."""

    def test_mismatched_score_is_rejected(self) -> None:
        """Test that a score not equal to the factor sum fails validation."""
        with pytest.raises(ValidationError):
            CardPriority(card=CardType.CHAT, score=99, factors={"base_score": 20})

    def test_empty_factors_require_zero_score(self) -> None:
        """Test that a priority without factors must score zero."""
        with pytest.raises(ValidationError):
            CardPriority(card=CardType.CHAT, score=99, factors={})

        assert CardPriority(card=CardType.CHAT, score=0).score == 0

    def test_missing_factor_reads_as_zero(self) -> None:
        """Test the factor accessor default."""
        priority = CardPriority(card=CardType.CHAT, score=20, factors={"base_score": 20})

        assert priority.factor("streak_bonus") == 0


@pytest.mark.unit
class TestPracticePriority:
    """Tests for compute_practice_priority."""

    def test_recent_session(self, ago, now, make_facts) -> None:
        """Test that a session 30 minutes ago adds the full recency score."""
        priority = compute_practice_priority(make_facts(last_session_time=ago(minutes=30)), now)

        assert priority.score == 60
        assert priority.factors == {
            "base_score": 30,
            "session_recency": 30,
            "struggle_focus": 0,
            "streak_continuation": 0,
            "inactivity_penalty": 0,
        }

    def test_all_factors(self, ago, now, make_facts, struggling_stats) -> None:
        """Test practice with struggle, streak risk and a penalty."""
        facts = make_facts(
            last_session_time=ago(hours=20),
            last_app_access=ago(days=1, hours=2),
            practice_stats=struggling_stats,
            current_streak=4,
        )

        priority = compute_practice_priority(facts, now)

        # 30 + 5 recency + 20 struggle + 10 continuation - 5 penalty
        assert priority.score == 60
        assert priority.factor("inactivity_penalty") == -5


@pytest.mark.unit
class TestChatPriority:
    """Tests for compute_chat_priority."""

    def test_recent_session_halves_into_penalty(self, ago, now, make_facts) -> None:
        """Test that chat loses floor(recency / 2) after a session."""
        priority = compute_chat_priority(make_facts(last_session_time=ago(minutes=30)), now)

        assert priority.score == 5
        assert priority.factor("session_recency") == -15

    def test_odd_recency_is_floored(self, ago, now, make_facts) -> None:
        """Test the floor when recency is 5."""
        priority = compute_chat_priority(make_facts(last_session_time=ago(hours=10)), now)

        assert priority.factor("session_recency") == -2
        assert priority.score == 18

    def test_first_session_bonus(self, now) -> None:
        """Test the welcome bonus for students with no sessions."""
        priority = compute_chat_priority(ActivityFacts(), now)

        assert priority.factor("first_session_bonus") == 30
        assert priority.score == 50

    def test_no_first_session_bonus_with_recorded_sessions(
        self, ago, now, make_session
    ) -> None:
        """Test that recorded sessions cancel the welcome bonus."""
        facts = ActivityFacts(
            has_completed_any_session=False,
            recent_sessions=[make_session(ago(days=10))],
        )

        priority = compute_chat_priority(facts, now)

        assert priority.factor("first_session_bonus") == 0
        assert priority.factor("reengagement_need") == 20

    def test_inactivity(self, ago, now, make_facts) -> None:
        """Test chat after four days away."""
        priority = compute_chat_priority(make_facts(last_app_access=ago(days=4)), now)

        assert priority.score == 60


@pytest.mark.unit
class TestProgressPriority:
    """Tests for compute_progress_priority."""

    def test_all_achievements(self, ago, now, make_facts, make_achievement) -> None:
        """Test progress with every achievement bonus and a long streak."""
        facts = make_facts(
            recent_achievements=[
                make_achievement(ago(hours=2), AchievementType.GOAL_COMPLETION),
                make_achievement(ago(hours=5), AchievementType.MASTERY_LEVEL),
            ],
            current_streak=8,
        )

        priority = compute_progress_priority(facts, now)

        assert priority.factors == {
            "base_score": 10,
            "milestone_bonus": 40,
            "goal_completion": 20,
            "knowledge_milestone": 15,
            "streak_bonus": 10,
        }
        assert priority.score == 95


@pytest.mark.unit
class TestComputeCardPriorities:
    """Tests for compute_card_priorities."""

    def test_precedence_order(self, now, make_facts) -> None:
        """Test that priorities come back as practice, chat, progress."""
        priorities = compute_card_priorities(make_facts(), now)

        assert [p.card for p in priorities] == [
            CardType.PRACTICE,
            CardType.CHAT,
            CardType.PROGRESS,
        ]

    def test_score_equals_factor_sum(
        self, ago, now, make_facts, make_session, make_achievement, struggling_stats
    ) -> None:
        """Test the score invariant on a busy fact set."""
        facts = make_facts(
            last_session_time=ago(hours=3),
            last_app_access=ago(days=2),
            recent_sessions=[make_session(ago(days=1))],
            achievement_today=True,
            recent_achievements=[make_achievement(ago(hours=1), AchievementType.GOAL_COMPLETION)],
            practice_stats=struggling_stats,
            current_streak=3,
        )

        for priority in compute_card_priorities(facts, now):
            assert priority.score == sum(priority.factors.values())
