# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Engagement metrics and retention-nudge eligibility."""

from studycompanion.core.engagement.tracking import (
    calculate_engagement_metrics,
    calculate_next_nudge_eligible_time,
    determine_nudge_variant,
    load_nudge_criteria,
    should_trigger_nudge,
)

__all__ = [
    "calculate_engagement_metrics",
    "calculate_next_nudge_eligible_time",
    "determine_nudge_variant",
    "load_nudge_criteria",
    "should_trigger_nudge",
]
