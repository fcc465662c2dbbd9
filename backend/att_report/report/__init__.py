"""Report aggregation engine.

Pure functions over task and time segment snapshots; nothing in this
package touches the database, the HTTP layer or any renderer.
"""

from __future__ import annotations

from .aggregation import CustomFieldTime, TaskTime, aggregate_custom_field, aggregate_tasks, sort_task_times
from .clipping import ClippedInterval, clip
from .dataset import ClippedSegment, ReportDataset, ReportProgress, build_report_dataset
from .entities import CustomField, Task, TimeSegment
from .timesheet import TimesheetEntry, build_timesheet
from .window import DateWindow

__all__ = [
    "ClippedInterval",
    "ClippedSegment",
    "CustomField",
    "CustomFieldTime",
    "DateWindow",
    "ReportDataset",
    "ReportProgress",
    "Task",
    "TaskTime",
    "TimeSegment",
    "TimesheetEntry",
    "aggregate_custom_field",
    "aggregate_tasks",
    "build_report_dataset",
    "build_timesheet",
    "clip",
    "sort_task_times",
]
