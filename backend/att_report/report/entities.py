"""Task and time segment snapshots consumed by the report engine."""

from __future__ import annotations

import datetime as dt
import itertools
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..errors import MalformedSegmentError
from ..utils import as_utc, optional_utc
from .clipping import ZERO, ClippedInterval, clip
from .window import DateWindow

# Unsaved segments count downwards so they never share an id with stored rows.
_segment_ids = itertools.count(-1, -1)


@dataclass(frozen=True, slots=True)
class CustomField:
    """User-defined task attribute used to group report totals."""

    identifier: int
    name: str = field(compare=False)


@dataclass(eq=False, slots=True)
class Task:
    """A tracked task and the time segments recorded for it."""

    identifier: int
    name: str
    description: str = ""
    custom_fields: Dict[CustomField, str] = field(default_factory=dict)
    time_segments: List["TimeSegment"] = field(default_factory=list)

    def get_custom_field(self, custom_field: CustomField) -> Optional[str]:
        return self.custom_fields.get(custom_field)

    def add_time_segment(
        self,
        start_time: dt.datetime,
        end_time: Optional[dt.datetime] = None,
        description: str = "",
        *,
        identifier: Optional[int] = None,
    ) -> "TimeSegment":
        return TimeSegment(
            owner=self,
            start_time=start_time,
            end_time=end_time,
            description=description,
            identifier=identifier,
        )

    def total_time(self, window: DateWindow) -> dt.timedelta:
        total = ZERO
        for segment in self.time_segments:
            total += segment.clip(window).duration
        return total


@dataclass(eq=False, slots=True)
class TimeSegment:
    """Span of time recorded for a task.

    Constructing a segment registers it with its owner, so every segment
    belongs to exactly one task. ``end_time`` is ``None`` while the segment
    is still running.
    """

    owner: Task
    start_time: dt.datetime
    end_time: Optional[dt.datetime] = None
    description: str = ""
    identifier: Optional[int] = None

    def __post_init__(self) -> None:
        self.start_time = as_utc(self.start_time)
        self.end_time = optional_utc(self.end_time)
        if self.identifier is None:
            self.identifier = next(_segment_ids)
        if self.end_time is not None and self.end_time < self.start_time:
            raise MalformedSegmentError(self.start_time, self.end_time, segment_id=self.identifier)
        self.owner.time_segments.append(self)

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    def clip(self, window: DateWindow) -> ClippedInterval:
        return self.clip_to(window.start, window.end)

    def clip_to(self, start: dt.datetime, end: dt.datetime) -> ClippedInterval:
        return clip(self.start_time, self.end_time, start, end)


__all__ = ["CustomField", "Task", "TimeSegment"]
