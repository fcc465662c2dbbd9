"""Composition of all report aggregations into one dataset."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Callable, Dict, Iterable, List, Optional

from .aggregation import CustomFieldTime, TaskTime, aggregate_custom_field, aggregate_tasks, sort_task_times
from .clipping import ZERO, ClippedInterval
from .entities import CustomField, Task, TimeSegment
from .timesheet import TimesheetEntry, build_timesheet
from .window import DateWindow

logger = logging.getLogger(__name__)

NOT_STARTED = 0.0
RUNNING = -1.0
COMPLETE = 1.0

ProgressListener = Callable[[float], None]


class ReportProgress:
    """Progress of a report build: 0 not started, -1 running, 1 complete."""

    def __init__(self) -> None:
        self._lock = RLock()
        self._value = NOT_STARTED
        self._listeners: List[ProgressListener] = []

    @property
    def value(self) -> float:
        with self._lock:
            return self._value

    @property
    def is_complete(self) -> bool:
        return self.value == COMPLETE

    def subscribe(self, listener: ProgressListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def set(self, value: float) -> None:
        if value not in (NOT_STARTED, RUNNING, COMPLETE):
            raise ValueError(f"Unsupported progress value: {value}")
        with self._lock:
            # A finished build never goes back to running.
            if self._value == COMPLETE or value == self._value:
                return
            if value == NOT_STARTED:
                return
            self._value = value
            listeners = list(self._listeners)
        for listener in listeners:
            listener(value)


@dataclass(frozen=True, slots=True)
class ClippedSegment:
    segment: TimeSegment
    clipped: ClippedInterval

    @property
    def start(self) -> Optional[dt.datetime]:
        return self.clipped.start

    @property
    def end(self) -> Optional[dt.datetime]:
        return self.clipped.end


@dataclass(slots=True)
class ReportDataset:
    window: DateWindow
    tasks: List[TaskTime] = field(default_factory=list)
    custom_fields: Dict[CustomField, List[CustomFieldTime]] = field(default_factory=dict)
    time_segments: List[ClippedSegment] = field(default_factory=list)
    timesheet: List[TimesheetEntry] = field(default_factory=list)

    @property
    def total_duration(self) -> dt.timedelta:
        total = ZERO
        for item in self.tasks:
            total += item.duration
        return total


def clip_time_segments(time_segments: Iterable[TimeSegment], window: DateWindow) -> List[ClippedSegment]:
    """Clip segments to the window, ordered by clipped start then segment id."""
    clipped: List[ClippedSegment] = []
    for segment in time_segments:
        interval = segment.clip(window)
        if not interval:
            continue
        clipped.append(ClippedSegment(segment=segment, clipped=interval))
    clipped.sort(key=lambda item: (item.clipped.start, item.segment.identifier))
    return clipped


def build_report_dataset(
    tasks: Iterable[Task],
    time_segments: Iterable[TimeSegment],
    window: DateWindow,
    custom_fields: Iterable[CustomField],
    progress: Optional[ReportProgress] = None,
) -> ReportDataset:
    if progress is not None:
        progress.set(RUNNING)
    tasks = list(tasks)
    time_segments = list(time_segments)
    logger.debug(
        "Building report for %s - %s from %d tasks and %d segments",
        window.start_date,
        window.end_date,
        len(tasks),
        len(time_segments),
    )
    task_times = aggregate_tasks(tasks, window)
    dataset = ReportDataset(
        window=window,
        tasks=sort_task_times(task_times.values()),
        custom_fields={
            custom_field: aggregate_custom_field(tasks, custom_field, window, task_times)
            for custom_field in custom_fields
        },
        time_segments=clip_time_segments(time_segments, window),
        timesheet=build_timesheet(time_segments, window),
    )
    if progress is not None:
        progress.set(COMPLETE)
    return dataset


__all__ = [
    "COMPLETE",
    "NOT_STARTED",
    "RUNNING",
    "ClippedSegment",
    "ReportDataset",
    "ReportProgress",
    "build_report_dataset",
    "clip_time_segments",
]
