"""Reporting period handling."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from typing import Iterator, Tuple

from ..errors import InvalidWindowError
from ..utils import UTC, day_bounds, iter_days


@dataclass(frozen=True, slots=True)
class DateWindow:
    """Inclusive range of calendar days a report covers.

    Day boundaries are computed in ``tz`` and exposed as UTC instants. The
    window end is the start of the day after ``end_date``, so the bounds of
    consecutive days tile the window without gaps or overlap.
    """

    start_date: dt.date
    end_date: dt.date
    tz: dt.tzinfo = field(default=UTC, compare=False)

    def __post_init__(self) -> None:
        if self.start_date > self.end_date:
            raise InvalidWindowError(self.start_date, self.end_date)

    @property
    def start(self) -> dt.datetime:
        return day_bounds(self.start_date, self.tz)[0]

    @property
    def end(self) -> dt.datetime:
        return day_bounds(self.end_date, self.tz)[1]

    @property
    def bounds(self) -> Tuple[dt.datetime, dt.datetime]:
        return self.start, self.end

    @property
    def length(self) -> dt.timedelta:
        return self.end - self.start

    def days(self) -> Iterator[dt.date]:
        return iter_days(self.start_date, self.end_date)

    def day_bounds(self, day: dt.date) -> Tuple[dt.datetime, dt.datetime]:
        return day_bounds(day, self.tz)


__all__ = ["DateWindow"]
