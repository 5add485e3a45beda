"""Datetime helpers for the planner's local wall-clock model."""

from __future__ import annotations

from datetime import date, datetime, time


def to_local_naive(value: datetime | date | str | None) -> datetime | None:
    """Normalize a datetime (or ISO string) to naive local time.

    Working hours are a local wall-clock window, so the store keeps naive
    local datetimes. Aware values are converted to the local zone first.
    """
    if value is None:
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    elif not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is not None:
        value = value.astimezone().replace(tzinfo=None)
    return value


def format_interval(start: datetime | None, end: datetime | None) -> str:
    """Human readable interval, e.g. ``2024-06-03 09:30 → 11:30``."""
    if start is None or end is None:
        return "-"
    if start.date() == end.date():
        return f"{start:%Y-%m-%d %H:%M} → {end:%H:%M}"
    return f"{start:%Y-%m-%d %H:%M} → {end:%Y-%m-%d %H:%M}"
