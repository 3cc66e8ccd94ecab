# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Practice streak calculation from completion timestamps."""

from collections.abc import Iterable
from datetime import datetime

from studycompanion.models.practice import PracticeStreak
from studycompanion.utils.datetime import utc_date


def calculate_practice_streak(completed_at: Iterable[datetime]) -> PracticeStreak:
    """Calculate the current and longest practice streaks.

    Only unique UTC calendar days count, so several sessions on one day
    add a single day. The current streak is the run of consecutive days
    ending at the most recent practice day; the first gap of more than one
    day ends it. The longest run is tracked across all days.

    Args:
        completed_at: Practice completion timestamps in any order.

    Returns:
        PracticeStreak, (0, 0) when there are no timestamps.
    """
    days = sorted({utc_date(timestamp) for timestamp in completed_at}, reverse=True)
    if not days:
        return PracticeStreak(current_streak=0, longest_streak=0)

    current = longest = run = 1
    current_broken = False

    for newer, older in zip(days, days[1:]):
        if (newer - older).days == 1:
            run += 1
            if not current_broken:
                current = run
            longest = max(longest, run)
        else:
            current_broken = True
            run = 1

    return PracticeStreak(current_streak=current, longest_streak=longest)
