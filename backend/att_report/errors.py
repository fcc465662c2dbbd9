from __future__ import annotations

import datetime as dt
from typing import Optional


class ReportError(ValueError):
    """Base class for input-contract violations detected while building a report."""


class InvalidWindowError(ReportError):
    def __init__(self, start_date: dt.date, end_date: dt.date) -> None:
        super().__init__(f"Report window start {start_date} is after end {end_date}")
        self.start_date = start_date
        self.end_date = end_date


class MalformedSegmentError(ReportError):
    def __init__(
        self,
        start_time: dt.datetime,
        end_time: dt.datetime,
        *,
        segment_id: Optional[int] = None,
    ) -> None:
        label = f"Time segment {segment_id}" if segment_id is not None else "Time segment"
        super().__init__(f"{label} ends at {end_time.isoformat()} before it starts at {start_time.isoformat()}")
        self.start_time = start_time
        self.end_time = end_time
        self.segment_id = segment_id


__all__ = ["ReportError", "InvalidWindowError", "MalformedSegmentError"]
