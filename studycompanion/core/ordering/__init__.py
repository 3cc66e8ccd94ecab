# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Card-ordering engine.

Pure, synchronous functions over ActivityFacts snapshots:

- signals: temporal scoring primitives
- state: ordered student state classifier
- scoring: per-card priority scoring with factor breakdowns
- resolver: ranking, reason text and cache expiry
"""

from studycompanion.core.ordering.constants import (
    BASE_SCORES,
    CARD_ORDER_TTL_MINUTES,
    DEFAULT_CARD_ORDER,
    CardType,
    PriorityFactor,
    StudentState,
)
from studycompanion.core.ordering.resolver import (
    DEFAULT_REASON,
    compute_card_order,
    default_card_order,
    generate_ordering_reason,
    rank_priorities,
)
from studycompanion.core.ordering.scoring import (
    PriorityBuilder,
    compute_card_priorities,
    compute_chat_priority,
    compute_practice_priority,
    compute_progress_priority,
)
from studycompanion.core.ordering.state import STATE_RULES, detect_student_state

__all__ = [
    "BASE_SCORES",
    "CARD_ORDER_TTL_MINUTES",
    "DEFAULT_CARD_ORDER",
    "CardType",
    "PriorityFactor",
    "StudentState",
    "DEFAULT_REASON",
    "compute_card_order",
    "default_card_order",
    "generate_ordering_reason",
    "rank_priorities",
    "PriorityBuilder",
    "compute_card_priorities",
    "compute_chat_priority",
    "compute_practice_priority",
    "compute_progress_priority",
    "STATE_RULES",
    "detect_student_state",
]
