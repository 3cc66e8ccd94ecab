# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice and mastery models.

MasteryState is the per-subject record persisted between practice
sessions. The remaining models describe a single session as driven by
the practice session controller.
"""

from datetime import datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from studycompanion.utils.datetime import utc_now

MIN_DIFFICULTY = 1
MAX_DIFFICULTY = 5


class MasteryState(BaseModel):
    """Mastery and difficulty for one student in one subject."""

    mastery_level: float = Field(default=0.0, ge=0.0, le=1.0)
    difficulty_level: int = Field(default=MIN_DIFFICULTY, ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY)
    updated_at: datetime = Field(default_factory=utc_now)


class PracticeSessionStatus(str, Enum):
    """Lifecycle of a practice session."""

    ACTIVE = "active"
    COMPLETED = "completed"


class DifficultyDirection(str, Enum):
    """Which way a difficulty adjustment went."""

    UP = "up"
    DOWN = "down"
    UNCHANGED = "unchanged"


class DifficultyChange(BaseModel):
    """Result of recording one answer."""

    previous_level: int
    new_level: int
    correct: bool

    @property
    def changed(self) -> bool:
        """Whether the difficulty moved."""
        return self.new_level != self.previous_level

    @property
    def direction(self) -> DifficultyDirection:
        """Direction of the adjustment."""
        if self.new_level > self.previous_level:
            return DifficultyDirection.UP
        if self.new_level < self.previous_level:
            return DifficultyDirection.DOWN
        return DifficultyDirection.UNCHANGED


class PracticeSession(BaseModel):
    """In-flight practice session state.

    ``answers`` is ordered most recent first, which is the order the
    difficulty rule consumes.
    """

    id: UUID = Field(default_factory=uuid4)
    student_id: str
    subject: str
    status: PracticeSessionStatus = PracticeSessionStatus.ACTIVE
    starting_difficulty: int = Field(ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY)
    current_difficulty: int = Field(ge=MIN_DIFFICULTY, le=MAX_DIFFICULTY)
    starting_mastery: float = Field(ge=0.0, le=1.0)
    answers: list[bool] = Field(default_factory=list)
    started_at: datetime = Field(default_factory=utc_now)
    completed_at: datetime | None = None

    @property
    def questions_answered(self) -> int:
        """Number of answers recorded."""
        return len(self.answers)

    @property
    def correct_answers(self) -> int:
        """Number of correct answers recorded."""
        return sum(1 for answer in self.answers if answer)

    @property
    def accuracy(self) -> float | None:
        """Session accuracy, None before the first answer."""
        if not self.answers:
            return None
        return self.correct_answers / len(self.answers)


class PracticeSessionSummary(BaseModel):
    """Outcome of a completed practice session."""

    session_id: UUID
    student_id: str
    subject: str
    questions_answered: int
    correct_answers: int
    accuracy: float | None
    mastery_before: float
    mastery_after: float
    starting_difficulty: int
    final_difficulty: int

    @property
    def mastery_delta(self) -> float:
        """Change in mastery produced by this session."""
        return self.mastery_after - self.mastery_before


class PracticeStreak(BaseModel):
    """Current and longest runs of consecutive practice days."""

    current_streak: int = 0
    longest_streak: int = 0
