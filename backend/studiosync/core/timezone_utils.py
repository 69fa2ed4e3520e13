"""
Timezone utilities for the StudioSync platform.

Reservation instants are stored in UTC. Studio opening hours are wall-clock
times interpreted in the configured studio timezone.
"""

from datetime import date, datetime, time, timedelta
from typing import Iterator, Tuple

import pytz

from .config import settings


def get_studio_timezone() -> pytz.BaseTzInfo:
    """Return the timezone studio opening hours are expressed in."""
    return pytz.timezone(settings.studio_timezone)


def ensure_utc(dt: datetime) -> datetime:
    """
    Normalize a stored datetime to an aware UTC value.

    SQLite hands back naive datetimes for timezone-aware columns; those were
    written as UTC, so they are tagged rather than converted.
    """
    if dt.tzinfo is None:
        return pytz.utc.localize(dt)
    return dt.astimezone(pytz.utc)


def to_utc(dt: datetime) -> datetime:
    """Convert a request datetime to UTC, reading naive values as studio-local."""
    if dt.tzinfo is None:
        return get_studio_timezone().localize(dt).astimezone(pytz.utc)
    return dt.astimezone(pytz.utc)


def to_studio_local(dt: datetime) -> datetime:
    """Convert an instant to studio-local wall-clock time."""
    return ensure_utc(dt).astimezone(get_studio_timezone())


def split_by_local_day(start: datetime, end: datetime) -> Iterator[Tuple[date, time, time]]:
    """
    Split ``[start, end)`` into per-day wall-clock segments.

    Yields ``(day, segment_start, segment_end)`` tuples in studio-local time.
    A segment that runs to midnight has ``segment_end == time(0)``, meaning
    end of day.
    """
    local_start = to_studio_local(start)
    local_end = to_studio_local(end)
    cursor = local_start
    while cursor < local_end:
        day = cursor.date()
        next_midnight = datetime.combine(day + timedelta(days=1), time(0))
        if local_end.replace(tzinfo=None) >= next_midnight:
            yield day, cursor.time().replace(tzinfo=None), time(0)
            cursor = get_studio_timezone().localize(next_midnight)
        else:
            yield day, cursor.time().replace(tzinfo=None), local_end.time().replace(tzinfo=None)
            break


def js_day_of_week(day: date) -> int:
    """Day index with Sunday as 0, matching the availability schema."""
    return (day.weekday() + 1) % 7
