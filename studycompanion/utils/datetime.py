# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""UTC time arithmetic for the scoring engine.

Rules applied by every helper here:

1. Naive datetimes are read as UTC; aware ones are converted to UTC.
2. Elapsed time is never negative. A timestamp ahead of ``now`` (clock
   skew between devices and the backend) counts as zero elapsed time.
3. ``now`` is always an optional argument so callers can pin it.

Usage:
------
    from studycompanion.utils.datetime import minutes_since

    minutes = minutes_since(facts.last_session_time, now)
"""

from datetime import date, datetime, timedelta, timezone

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 60 * SECONDS_PER_MINUTE
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def utc_now() -> datetime:
    """The current instant as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalise a datetime to aware UTC; None passes through."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` in UTC, or the current instant when omitted."""
    if now is None:
        return utc_now()
    return ensure_utc(now)  # type: ignore[return-value]


def seconds_since(start: datetime, now: datetime | None = None) -> float:
    """Seconds from ``start`` to ``now``, floored at zero.

    Args:
        start: Earlier instant, naive or aware.
        now: Reference instant (defaults to the current time).
    """
    elapsed = resolve_now(now) - ensure_utc(start)  # type: ignore[operator]
    return max(0.0, elapsed.total_seconds())


def minutes_since(start: datetime, now: datetime | None = None) -> float:
    return seconds_since(start, now) / SECONDS_PER_MINUTE


def hours_since(start: datetime, now: datetime | None = None) -> float:
    return seconds_since(start, now) / SECONDS_PER_HOUR


def days_since(start: datetime, now: datetime | None = None) -> float:
    """Fractional days from ``start`` to ``now``, floored at zero."""
    return seconds_since(start, now) / SECONDS_PER_DAY


def utc_date(dt: datetime) -> date:
    """Calendar day of ``dt`` in UTC, used for streak counting."""
    return ensure_utc(dt).date()  # type: ignore[union-attr]


def minutes_from(start: datetime, minutes: int) -> datetime:
    """The instant ``minutes`` after ``start``."""
    return start + timedelta(minutes=minutes)


def is_expired(expiry: datetime | None, now: datetime | None = None) -> bool:
    """Whether ``expiry`` has been reached.

    A missing expiry counts as expired, and so does ``now == expiry``.
    """
    if expiry is None:
        return True
    return resolve_now(now) >= ensure_utc(expiry)  # type: ignore[operator]
