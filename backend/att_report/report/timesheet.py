from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Iterable, List

from .entities import TimeSegment
from .window import DateWindow


@dataclass(frozen=True, slots=True)
class TimesheetEntry:
    """Portion of a time segment that falls on a single day."""

    day: dt.date
    segment: TimeSegment
    duration: dt.timedelta

    @property
    def hours(self) -> float:
        return self.duration.total_seconds() / 3600


def build_timesheet(time_segments: Iterable[TimeSegment], window: DateWindow) -> List[TimesheetEntry]:
    """Return day-ordered entries for every segment with time on that day.

    Each segment is clipped against every day separately, so a segment
    crossing midnight yields one entry per day it touches.
    """
    segments = list(time_segments)
    entries: List[TimesheetEntry] = []
    for day in window.days():
        day_start, day_end = window.day_bounds(day)
        for segment in segments:
            clipped = segment.clip_to(day_start, day_end)
            if clipped:
                entries.append(TimesheetEntry(day=day, segment=segment, duration=clipped.duration))
    return entries


__all__ = ["TimesheetEntry", "build_timesheet"]
