"""Per-task and per-custom-field duration totals."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .clipping import ZERO
from .entities import CustomField, Task
from .window import DateWindow


@dataclass(frozen=True, slots=True)
class TaskTime:
    task: Task
    duration: dt.timedelta
    earliest_start: Optional[dt.datetime]

    @property
    def duration_hours(self) -> float:
        return self.duration.total_seconds() / 3600


@dataclass(slots=True)
class CustomFieldTime:
    """Total time of all tasks sharing one value of a custom field.

    ``group`` is never set here; a renderer sets it on entries it folds
    into a single "other" bucket.
    """

    custom_field: CustomField
    value: str
    duration: dt.timedelta = ZERO
    group: bool = False

    def add_duration(self, duration: dt.timedelta) -> None:
        self.duration += duration

    @property
    def duration_hours(self) -> float:
        return self.duration.total_seconds() / 3600

    def chart_value(self, grouped_label: str) -> str:
        return grouped_label if self.group else self.value


def task_time(task: Task, window: DateWindow) -> TaskTime:
    total = ZERO
    earliest: Optional[dt.datetime] = None
    for segment in task.time_segments:
        clipped = segment.clip(window)
        if not clipped:
            continue
        total += clipped.duration
        if earliest is None or segment.start_time < earliest:
            earliest = segment.start_time
    return TaskTime(task=task, duration=total, earliest_start=earliest)


def aggregate_tasks(tasks: Iterable[Task], window: DateWindow) -> Dict[Task, TaskTime]:
    return {task: task_time(task, window) for task in tasks}


def _task_sort_key(item: TaskTime):
    # Tasks without time in the window go last.
    has_start = item.earliest_start is not None
    return (
        not has_start,
        item.earliest_start if has_start else dt.datetime.min,
        -item.duration,
        item.task.identifier,
    )


def sort_task_times(task_times: Iterable[TaskTime]) -> List[TaskTime]:
    """Order by earliest start, then by longest total, then by task id."""
    return sorted(task_times, key=_task_sort_key)


def aggregate_custom_field(
    tasks: Iterable[Task],
    custom_field: CustomField,
    window: DateWindow,
    task_times: Optional[Dict[Task, TaskTime]] = None,
) -> List[CustomFieldTime]:
    tasks = list(tasks)
    if task_times is None:
        task_times = aggregate_tasks(tasks, window)
    if not any(task.get_custom_field(custom_field) is not None for task in tasks):
        return []
    totals: Dict[str, CustomFieldTime] = {}
    for task in tasks:
        value = task.get_custom_field(custom_field) or ""
        entry = totals.get(value)
        if entry is None:
            entry = totals[value] = CustomFieldTime(custom_field=custom_field, value=value)
        totals_for_task = task_times.get(task) or task_time(task, window)
        entry.add_duration(totals_for_task.duration)
    return sorted(totals.values(), key=lambda item: (-item.duration, item.value))


__all__ = [
    "CustomFieldTime",
    "TaskTime",
    "aggregate_custom_field",
    "aggregate_tasks",
    "sort_task_times",
    "task_time",
]
