# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice session controller.

Drives the difficulty and mastery adaptation loop for practice sessions:

1. start_session: look up the stored mastery for the subject (creating a
   default state on first practice) and start at the mapped difficulty.
2. record_answer: apply the consecutive-answer difficulty rule.
3. complete_session: blend session accuracy into mastery and persist it.

Question selection and answer checking happen elsewhere; the controller
only receives correctness.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from studycompanion.core.practice.adaptation import (
    apply_session_result,
    calculate_new_difficulty,
    initial_mastery_state,
    map_mastery_to_difficulty,
)
from studycompanion.models.practice import (
    DifficultyChange,
    MasteryState,
    PracticeSession,
    PracticeSessionStatus,
    PracticeSessionSummary,
)
from studycompanion.utils.datetime import utc_now

logger = logging.getLogger(__name__)


class PracticeServiceError(Exception):
    """Base exception for practice service errors."""

    pass


class SessionNotFoundError(PracticeServiceError):
    """Raised when a session is not found."""

    pass


class SessionNotActiveError(PracticeServiceError):
    """Raised when session is not in active state."""

    pass


class MasteryStore(ABC):
    """Persistence for per-student, per-subject mastery state."""

    @abstractmethod
    async def get(self, student_id: str, subject: str) -> MasteryState | None:
        """Get the stored state, None if the subject was never practiced."""
        ...

    @abstractmethod
    async def save(self, student_id: str, subject: str, state: MasteryState) -> None:
        """Store a new state for the subject."""
        ...


class InMemoryMasteryStore(MasteryStore):
    """Mastery store backed by a dict, keeping every saved state."""

    def __init__(self) -> None:
        self._history: dict[tuple[str, str], list[MasteryState]] = {}

    async def get(self, student_id: str, subject: str) -> MasteryState | None:
        states = self._history.get((student_id, subject))
        return states[-1] if states else None

    async def save(self, student_id: str, subject: str, state: MasteryState) -> None:
        self._history.setdefault((student_id, subject), []).append(state)

    def history(self, student_id: str, subject: str) -> list[MasteryState]:
        """All saved states for a subject, oldest first."""
        return list(self._history.get((student_id, subject), []))


class PracticeSessionController:
    """Controller for adaptive practice sessions.

    Active sessions are held in memory and released once completion has
    been persisted; only mastery is stored.

    Example:
        >>> controller = PracticeSessionController(InMemoryMasteryStore())
        >>> session = await controller.start_session("student-1", "math")
        >>> change = controller.record_answer(session.id, correct=True)
        >>> summary = await controller.complete_session(session.id)
    """

    def __init__(
        self,
        store: MasteryStore,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize the controller.

        Args:
            store: Mastery persistence.
            clock: Time source, injectable for tests.
        """
        self._store = store
        self._clock = clock
        self._sessions: dict[UUID, PracticeSession] = {}

    async def start_session(self, student_id: str, subject: str) -> PracticeSession:
        """Start a practice session at the difficulty matching stored mastery.

        Args:
            student_id: The student's ID.
            subject: Subject being practiced.

        Returns:
            The new active session.
        """
        state = await self._store.get(student_id, subject)
        if state is None:
            state = initial_mastery_state(self._clock())
            await self._store.save(student_id, subject, state)
            logger.info(
                "Created mastery state: student=%s, subject=%s",
                student_id,
                subject,
            )

        difficulty = map_mastery_to_difficulty(state.mastery_level)
        session = PracticeSession(
            student_id=student_id,
            subject=subject,
            starting_difficulty=difficulty,
            current_difficulty=difficulty,
            starting_mastery=state.mastery_level,
            started_at=self._clock(),
        )
        self._sessions[session.id] = session

        logger.info(
            "Starting practice session: session=%s, student=%s, subject=%s, difficulty=%d",
            session.id,
            student_id,
            subject,
            difficulty,
        )
        return session

    def get_session(self, session_id: UUID) -> PracticeSession:
        """Get a session by ID.

        Raises:
            SessionNotFoundError: If the session does not exist.
        """
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session not found: {session_id}")
        return session

    def _get_active_session(self, session_id: UUID) -> PracticeSession:
        session = self.get_session(session_id)
        if session.status != PracticeSessionStatus.ACTIVE:
            raise SessionNotActiveError(f"Session is not active: {session_id}")
        return session

    def record_answer(self, session_id: UUID, correct: bool) -> DifficultyChange:
        """Record an answer and adjust difficulty.

        Args:
            session_id: The session ID.
            correct: Whether the answer was correct.

        Returns:
            DifficultyChange with the previous and new levels.

        Raises:
            SessionNotFoundError: If the session does not exist or was
                already completed.
            SessionNotActiveError: If the session is being completed.
        """
        session = self._get_active_session(session_id)

        previous = session.current_difficulty
        session.answers.insert(0, correct)
        session.current_difficulty = calculate_new_difficulty(previous, session.answers)

        change = DifficultyChange(
            previous_level=previous,
            new_level=session.current_difficulty,
            correct=correct,
        )
        if change.changed:
            logger.debug(
                "Difficulty %s: session=%s, %d -> %d",
                change.direction.value,
                session_id,
                previous,
                change.new_level,
            )
        return change

    async def complete_session(self, session_id: UUID) -> PracticeSessionSummary:
        """Complete a session and persist the updated mastery.

        A session without answers keeps mastery unchanged; only the
        difficulty it ended on is stored. If the store fails the session
        stays active so completion can be retried.

        Raises:
            SessionNotFoundError: If the session does not exist or was
                already completed.
            SessionNotActiveError: If another completion is in progress.
        """
        session = self._get_active_session(session_id)
        now = self._clock()

        # Closed to answers while the store is in use
        session.status = PracticeSessionStatus.COMPLETED
        session.completed_at = now

        try:
            before = await self._store.get(session.student_id, session.subject)
            if before is None:
                before = initial_mastery_state(now)

            accuracy = session.accuracy
            if accuracy is None:
                after = before.model_copy(
                    update={"difficulty_level": session.current_difficulty, "updated_at": now}
                )
            else:
                after = apply_session_result(before, accuracy, session.current_difficulty, now)

            await self._store.save(session.student_id, session.subject, after)
        except Exception:
            session.status = PracticeSessionStatus.ACTIVE
            session.completed_at = None
            logger.warning("Mastery update failed, session reopened: session=%s", session_id)
            raise

        self._sessions.pop(session_id, None)

        logger.info(
            "Practice session completed: session=%s, answered=%d, accuracy=%s, mastery=%.3f -> %.3f",
            session_id,
            session.questions_answered,
            f"{accuracy:.2f}" if accuracy is not None else "n/a",
            before.mastery_level,
            after.mastery_level,
        )

        return PracticeSessionSummary(
            session_id=session.id,
            student_id=session.student_id,
            subject=session.subject,
            questions_answered=session.questions_answered,
            correct_answers=session.correct_answers,
            accuracy=accuracy,
            mastery_before=before.mastery_level,
            mastery_after=after.mastery_level,
            starting_difficulty=session.starting_difficulty,
            final_difficulty=session.current_difficulty,
        )
