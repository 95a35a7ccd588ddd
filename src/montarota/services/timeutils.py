"""UTC time helpers shared by the services."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def day_range(first: date, last: date) -> tuple[str, str]:
    """Half-open ISO bounds covering the whole days ``first`` through ``last``."""
    return start_of_day(first).isoformat(), start_of_day(last + timedelta(days=1)).isoformat()
