from __future__ import annotations

import datetime as dt
from typing import Dict, List, Optional

from typing_extensions import Literal

from pydantic import BaseModel, field_serializer, model_validator

from .formatting import duration_hours, format_date, format_duration, format_timestamp
from .report import ClippedSegment, CustomFieldTime, ReportDataset, TaskTime, TimesheetEntry
from .report.dataset import COMPLETE, RUNNING
from .state import ReportJob


def _serialize_datetime(value: Optional[dt.datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=dt.timezone.utc)
    else:
        value = value.astimezone(dt.timezone.utc)
    return value.isoformat()


class ReportRequest(BaseModel):
    start_date: dt.date
    end_date: dt.date

    @model_validator(mode="after")
    def _validate_range(self) -> "ReportRequest":
        if self.end_date < self.start_date:
            raise ValueError("End date must not be before the start date")
        return self


class FormatOptions(BaseModel):
    date_format: str
    datetime_format: str


class TaskTimeResponse(BaseModel):
    id: int
    name: str
    description: str
    custom_fields: Dict[str, str]
    total_seconds: float
    total_hours: float
    total_time: str
    earliest_start: Optional[dt.datetime] = None
    earliest_start_label: str = ""

    @field_serializer("earliest_start", when_used="json")
    def _serialize_start(self, value: Optional[dt.datetime]) -> Optional[str]:
        return _serialize_datetime(value)


class CustomFieldValueResponse(BaseModel):
    value: str
    total_seconds: float
    total_hours: float
    total_time: str
    group: bool


class CustomFieldReportResponse(BaseModel):
    id: int
    name: str
    values: List[CustomFieldValueResponse]


class TimeSegmentResponse(BaseModel):
    id: int
    task_id: int
    task_name: str
    description: str
    start_time: dt.datetime
    end_time: dt.datetime
    start_label: str
    end_label: str
    is_open: bool

    @field_serializer("start_time", "end_time", when_used="json")
    def _serialize_bounds(self, value: dt.datetime) -> Optional[str]:
        return _serialize_datetime(value)


class TimesheetEntryResponse(BaseModel):
    day: dt.date
    day_label: str
    segment_id: int
    task_name: str
    description: str
    hours: float


class ReportDatasetResponse(BaseModel):
    start_date: dt.date
    end_date: dt.date
    total_seconds: float
    total_time: str
    tasks: List[TaskTimeResponse]
    custom_fields: List[CustomFieldReportResponse]
    time_segments: List[TimeSegmentResponse]
    timesheet: List[TimesheetEntryResponse]


class ReportJobResponse(BaseModel):
    job_id: str
    status: Literal["pending", "running", "complete", "failed"]
    progress: float
    start_date: dt.date
    end_date: dt.date
    created_at: dt.datetime
    finished_at: Optional[dt.datetime] = None
    error: Optional[str] = None
    dataset: Optional[ReportDatasetResponse] = None

    @field_serializer("created_at", "finished_at", when_used="json")
    def _serialize_timestamps(self, value: Optional[dt.datetime]) -> Optional[str]:
        return _serialize_datetime(value)


def _task_response(item: TaskTime, tz: dt.tzinfo, options: FormatOptions) -> TaskTimeResponse:
    task = item.task
    return TaskTimeResponse(
        id=task.identifier,
        name=task.name,
        description=task.description,
        custom_fields={custom_field.name: value for custom_field, value in task.custom_fields.items()},
        total_seconds=item.duration.total_seconds(),
        total_hours=duration_hours(item.duration),
        total_time=format_duration(item.duration),
        earliest_start=item.earliest_start,
        earliest_start_label=format_timestamp(item.earliest_start, tz, options.datetime_format),
    )


def _custom_field_value_response(item: CustomFieldTime) -> CustomFieldValueResponse:
    return CustomFieldValueResponse(
        value=item.value,
        total_seconds=item.duration.total_seconds(),
        total_hours=item.duration_hours,
        total_time=format_duration(item.duration),
        group=item.group,
    )


def _segment_response(item: ClippedSegment, tz: dt.tzinfo, options: FormatOptions) -> TimeSegmentResponse:
    segment = item.segment
    return TimeSegmentResponse(
        id=segment.identifier,
        task_id=segment.owner.identifier,
        task_name=segment.owner.name,
        description=segment.description,
        start_time=item.start,
        end_time=item.end,
        start_label=format_timestamp(item.start, tz, options.datetime_format),
        end_label=format_timestamp(item.end, tz, options.datetime_format),
        is_open=segment.is_open,
    )


def _timesheet_response(entry: TimesheetEntry, options: FormatOptions) -> TimesheetEntryResponse:
    return TimesheetEntryResponse(
        day=entry.day,
        day_label=format_date(entry.day, options.date_format),
        segment_id=entry.segment.identifier,
        task_name=entry.segment.owner.name,
        description=entry.segment.description,
        hours=entry.hours,
    )


def dataset_response(dataset: ReportDataset, options: FormatOptions) -> ReportDatasetResponse:
    tz = dataset.window.tz
    return ReportDatasetResponse(
        start_date=dataset.window.start_date,
        end_date=dataset.window.end_date,
        total_seconds=dataset.total_duration.total_seconds(),
        total_time=format_duration(dataset.total_duration),
        tasks=[_task_response(item, tz, options) for item in dataset.tasks],
        custom_fields=[
            CustomFieldReportResponse(
                id=custom_field.identifier,
                name=custom_field.name,
                values=[_custom_field_value_response(item) for item in values],
            )
            for custom_field, values in dataset.custom_fields.items()
        ],
        time_segments=[_segment_response(item, tz, options) for item in dataset.time_segments],
        timesheet=[_timesheet_response(entry, options) for entry in dataset.timesheet],
    )


def _job_status(job: ReportJob) -> str:
    if job.error is not None:
        return "failed"
    progress = job.progress.value
    if progress == COMPLETE:
        return "complete"
    if progress == RUNNING:
        return "running"
    return "pending"


def job_response(job: ReportJob, options: FormatOptions, *, include_dataset: bool = True) -> ReportJobResponse:
    dataset = None
    if include_dataset and job.dataset is not None:
        dataset = dataset_response(job.dataset, options)
    return ReportJobResponse(
        job_id=job.job_id,
        status=_job_status(job),
        progress=job.progress.value,
        start_date=job.window.start_date,
        end_date=job.window.end_date,
        created_at=job.created_at,
        finished_at=job.finished_at,
        error=job.error,
        dataset=dataset,
    )
