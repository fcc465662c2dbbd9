from __future__ import annotations

import datetime as dt
from typing import Iterator, Optional, Tuple

UTC = dt.timezone.utc


def as_utc(value: dt.datetime) -> dt.datetime:
    """Return an aware UTC datetime, treating naive values as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def optional_utc(value: Optional[dt.datetime]) -> Optional[dt.datetime]:
    if value is None:
        return None
    return as_utc(value)


def day_bounds(day: dt.date, tz: dt.tzinfo) -> Tuple[dt.datetime, dt.datetime]:
    start_local = dt.datetime.combine(day, dt.time.min, tzinfo=tz)
    end_local = dt.datetime.combine(day + dt.timedelta(days=1), dt.time.min, tzinfo=tz)
    return start_local.astimezone(UTC), end_local.astimezone(UTC)


def iter_days(start_day: dt.date, end_day: dt.date) -> Iterator[dt.date]:
    current = start_day
    while current <= end_day:
        yield current
        current += dt.timedelta(days=1)
