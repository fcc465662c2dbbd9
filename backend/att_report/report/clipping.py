from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Optional

from ..errors import MalformedSegmentError

ZERO = dt.timedelta(0)


@dataclass(frozen=True, slots=True)
class ClippedInterval:
    """Part of an interval that falls inside a reference window.

    ``start`` and ``end`` are ``None`` when the interval lies entirely
    outside the window; check ``duration`` before using them.
    """

    start: Optional[dt.datetime]
    end: Optional[dt.datetime]
    duration: dt.timedelta

    @property
    def seconds(self) -> float:
        return self.duration.total_seconds()

    @property
    def hours(self) -> float:
        return self.duration.total_seconds() / 3600

    def __bool__(self) -> bool:
        return self.duration > ZERO


OUTSIDE = ClippedInterval(None, None, ZERO)


def clip(
    segment_start: dt.datetime,
    segment_end: Optional[dt.datetime],
    window_start: dt.datetime,
    window_end: dt.datetime,
) -> ClippedInterval:
    """Intersect ``[segment_start, segment_end)`` with the window.

    A segment without an end is still running and is clipped against
    ``window_end`` only.
    """
    if segment_end is None:
        if segment_start >= window_end:
            return OUTSIDE
        segment_end = window_end
    elif segment_end < segment_start:
        raise MalformedSegmentError(segment_start, segment_end)
    if segment_end < window_start or segment_start > window_end:
        return OUTSIDE
    clipped_start = max(segment_start, window_start)
    clipped_end = min(segment_end, window_end)
    return ClippedInterval(clipped_start, clipped_end, clipped_end - clipped_start)


__all__ = ["ClippedInterval", "OUTSIDE", "ZERO", "clip"]
