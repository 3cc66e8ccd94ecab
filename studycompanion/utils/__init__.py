# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared utilities: UTC datetime helpers and structured logging."""

from studycompanion.utils.datetime import (
    days_since,
    ensure_utc,
    hours_since,
    is_expired,
    minutes_since,
    resolve_now,
    utc_now,
)
from studycompanion.utils.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)

__all__ = [
    # Datetime
    "utc_now",
    "resolve_now",
    "ensure_utc",
    "minutes_since",
    "hours_since",
    "days_since",
    "is_expired",
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
