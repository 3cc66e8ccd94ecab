# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice domain: adaptive practice sessions and mastery persistence."""

from studycompanion.domains.practice.service import (
    InMemoryMasteryStore,
    MasteryStore,
    PracticeServiceError,
    PracticeSessionController,
    SessionNotActiveError,
    SessionNotFoundError,
)

__all__ = [
    "InMemoryMasteryStore",
    "MasteryStore",
    "PracticeServiceError",
    "PracticeSessionController",
    "SessionNotActiveError",
    "SessionNotFoundError",
]
