# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Card-ordering output models."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, field_validator, model_validator


class CardType(str, Enum):
    """The three action cards whose on-screen order is computed."""

    CHAT = "chat"
    PRACTICE = "practice"
    PROGRESS = "progress"


class StudentState(str, Enum):
    """Coarse engagement context of a student.

    Drives both the card order and the tone of UI copy.
    """

    CELEBRATION = "celebration"  # Session finished within the last two hours
    RE_ENGAGEMENT = "re_engagement"  # Returning after 3+ days away
    ACHIEVEMENT = "achievement"  # Milestone reached in the last 24 hours
    FIRST_SESSION = "first_session"  # Never completed a session
    DEFAULT = "default"  # Routine check-in


class CardPriority(BaseModel):
    """Computed priority of a single card.

    ``score`` is always the exact sum of ``factors``; penalties are stored
    as negative factor values.
    """

    card: CardType
    score: int
    factors: dict[str, int] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _score_matches_factors(self) -> "CardPriority":
        if sum(self.factors.values()) != self.score:
            raise ValueError(
                f"score {self.score} does not equal factor sum "
                f"{sum(self.factors.values())} for card '{self.card.value}'"
            )
        return self

    def factor(self, name: str) -> int:
        """Get a factor value, 0 when the card does not use it."""
        return self.factors.get(name, 0)


class CardOrderContext(BaseModel):
    """Explanation attached to a computed card order."""

    student_state: StudentState
    reason: str
    priorities: list[CardPriority]
    computed_at: datetime


class CardOrder(BaseModel):
    """Ordered cards plus context and cache expiry."""

    order: list[CardType]
    context: CardOrderContext
    expires_at: datetime

    @field_validator("order")
    @classmethod
    def _is_permutation(cls, value: list[CardType]) -> list[CardType]:
        if len(value) != len(CardType) or set(value) != set(CardType):
            raise ValueError(
                "order must contain every card exactly once, got "
                f"{[card.value for card in value]}"
            )
        return value

    @property
    def top_card(self) -> CardType:
        """The card shown first."""
        return self.order[0]
