# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for student state classification."""

import pytest

from studycompanion.core.ordering.constants import AchievementType, StudentState
from studycompanion.core.ordering.state import STATE_RULES, detect_student_state
from studycompanion.models.activity import ActivityFacts


@pytest.mark.unit
class TestStateRules:
    """Tests for the rule table itself."""

    def test_rule_priority_order(self) -> None:
        """Test that rules are evaluated in the documented priority order."""
        assert [state for state, _ in STATE_RULES] == [
            StudentState.FIRST_SESSION,
            StudentState.CELEBRATION,
            StudentState.RE_ENGAGEMENT,
            StudentState.ACHIEVEMENT,
        ]

    def test_default_is_not_a_rule(self) -> None:
        """Test that DEFAULT is the fallthrough, not a table entry."""
        assert StudentState.DEFAULT not in {state for state, _ in STATE_RULES}


@pytest.mark.unit
class TestDetectStudentState:
    """Tests for detect_student_state."""

    def test_empty_facts_is_first_session(self, now) -> None:
        """Test that a student with no history is in first_session."""
        assert detect_student_state(ActivityFacts(), now) == StudentState.FIRST_SESSION

    def test_first_session_beats_everything(self, ago, now) -> None:
        """Test that first_session wins even with other signals present."""
        facts = ActivityFacts(
            has_completed_any_session=False,
            last_session_time=ago(minutes=5),
            last_app_access=ago(days=10),
            achievement_today=True,
        )

        assert detect_student_state(facts, now) == StudentState.FIRST_SESSION

    @pytest.mark.parametrize(
        ("minutes", "expected"),
        [
            (30, StudentState.CELEBRATION),
            (120, StudentState.CELEBRATION),
            (121, StudentState.DEFAULT),
        ],
    )
    def test_celebration_window(self, ago, now, make_facts, minutes, expected) -> None:
        """Test that celebration covers sessions within two hours."""
        facts = make_facts(last_session_time=ago(minutes=minutes))

        assert detect_student_state(facts, now) == expected

    def test_re_engagement_after_three_days(self, ago, now, make_facts) -> None:
        """Test that three days away classifies as re_engagement."""
        facts = make_facts(last_app_access=ago(days=3))

        assert detect_student_state(facts, now) == StudentState.RE_ENGAGEMENT

    def test_one_day_away_is_default(self, ago, now, make_facts) -> None:
        """Test that shorter absences do not trigger re_engagement."""
        facts = make_facts(last_app_access=ago(days=2))

        assert detect_student_state(facts, now) == StudentState.DEFAULT

    def test_achievement_from_flag(self, now, make_facts) -> None:
        """Test that the achievement_today flag classifies as achievement."""
        facts = make_facts(achievement_today=True)

        assert detect_student_state(facts, now) == StudentState.ACHIEVEMENT

    def test_achievement_from_recent_list(self, ago, now, make_facts, make_achievement) -> None:
        """Test that a recent achievement classifies as achievement."""
        facts = make_facts(
            recent_achievements=[make_achievement(ago(hours=3), AchievementType.GOAL_COMPLETION)]
        )

        assert detect_student_state(facts, now) == StudentState.ACHIEVEMENT

    def test_celebration_beats_re_engagement(self, ago, now, make_facts) -> None:
        """Test the inconsistent case of a fresh session with stale app access."""
        facts = make_facts(
            last_session_time=ago(minutes=10),
            last_app_access=ago(days=5),
        )

        assert detect_student_state(facts, now) == StudentState.CELEBRATION

    def test_re_engagement_beats_achievement(self, ago, now, make_facts) -> None:
        """Test that a returning student is re-engaged before being congratulated."""
        facts = make_facts(last_app_access=ago(days=4), achievement_today=True)

        assert detect_student_state(facts, now) == StudentState.RE_ENGAGEMENT

    def test_nothing_special_is_default(self, ago, now, make_facts) -> None:
        """Test the fallthrough state."""
        facts = make_facts(last_session_time=ago(hours=8), last_app_access=ago(hours=8))

        assert detect_student_state(facts, now) == StudentState.DEFAULT
