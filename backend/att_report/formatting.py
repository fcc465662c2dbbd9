"""Stateless formatting helpers for report values."""

from __future__ import annotations

import datetime as dt
from typing import Optional

from .utils import as_utc


def format_duration(value: dt.timedelta) -> str:
    """Format a duration as ``H:MM:SS``; hours are not wrapped at 24."""
    total_seconds = int(value.total_seconds())
    sign = "-" if total_seconds < 0 else ""
    hours, remainder = divmod(abs(total_seconds), 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{sign}{hours}:{minutes:02d}:{seconds:02d}"


def duration_hours(value: dt.timedelta, digits: Optional[int] = None) -> float:
    hours = value.total_seconds() / 3600
    if digits is None:
        return hours
    return round(hours, digits)


def format_timestamp(value: Optional[dt.datetime], tz: dt.tzinfo, pattern: str) -> str:
    if value is None:
        return ""
    return as_utc(value).astimezone(tz).strftime(pattern)


def format_date(value: dt.date, pattern: str) -> str:
    return value.strftime(pattern)


__all__ = ["duration_hours", "format_date", "format_duration", "format_timestamp"]
