"""Shared utility functions."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    """Return aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """Normalize datetime to UTC timezone."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def day_window(start: datetime, duration: timedelta) -> tuple[date, time, time]:
    """Split a UTC start instant into (date, start time, end time) on one calendar day.

    A window that would run past midnight is clamped to the end of that day.
    """
    start = ensure_utc(start).replace(second=0, microsecond=0)
    end = start + duration
    end_time = end.time() if end.date() == start.date() else time.max.replace(microsecond=0)
    return start.date(), start.time(), end_time
