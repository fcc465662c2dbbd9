from __future__ import annotations

import datetime as dt
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from .config import settings
from .errors import InvalidWindowError, MalformedSegmentError
from .models import utcnow
from .query import ReportQuery
from .report import CustomField, DateWindow, ReportDataset, Task, TimeSegment, build_report_dataset
from .state import ReportJob, ReportJobRegistry

logger = logging.getLogger(__name__)


@dataclass
class ReportInput:
    """Snapshot of everything a report build reads."""

    window: DateWindow
    tasks: List[Task] = field(default_factory=list)
    time_segments: List[TimeSegment] = field(default_factory=list)
    custom_fields: List[CustomField] = field(default_factory=list)


@contextmanager
def _report_errors() -> Iterator[None]:
    try:
        yield
    except InvalidWindowError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except MalformedSegmentError as exc:
        logger.error("Rejected malformed time segment: %s", exc)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc)) from exc


def make_window(start_date: dt.date, end_date: dt.date) -> DateWindow:
    with _report_errors():
        return DateWindow(start_date, end_date, tz=settings.tz)


def load_report_input(db: Session, window: DateWindow) -> ReportInput:
    query = ReportQuery(db, window)
    with _report_errors():
        custom_fields = query.get_custom_fields()
        tasks = query.query_tasks()
        time_segments = query.query_time_segments()
    return ReportInput(window=window, tasks=tasks, time_segments=time_segments, custom_fields=custom_fields)


def build_report(db: Session, start_date: dt.date, end_date: dt.date) -> ReportDataset:
    window = make_window(start_date, end_date)
    report_input = load_report_input(db, window)
    with _report_errors():
        return build_report_dataset(
            report_input.tasks,
            report_input.time_segments,
            window,
            report_input.custom_fields,
        )


def schedule_report(
    db: Session,
    registry: ReportJobRegistry,
    start_date: dt.date,
    end_date: dt.date,
) -> tuple[ReportJob, ReportInput]:
    window = make_window(start_date, end_date)
    report_input = load_report_input(db, window)
    job = registry.add(ReportJob(window=window))
    logger.info("Scheduled report job %s for %s - %s", job.job_id, start_date, end_date)
    return job, report_input


def run_report_job(job: ReportJob, report_input: ReportInput) -> None:
    try:
        job.dataset = build_report_dataset(
            report_input.tasks,
            report_input.time_segments,
            report_input.window,
            report_input.custom_fields,
            progress=job.progress,
        )
    except Exception as exc:
        logger.exception("Report job %s failed", job.job_id)
        job.error = str(exc)
    else:
        logger.info("Report job %s finished with %d tasks", job.job_id, len(job.dataset.tasks))
    finally:
        job.finished_at = utcnow()


def get_report_job(registry: ReportJobRegistry, job_id: str) -> ReportJob:
    job = registry.get(job_id)
    if job is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Report job not found")
    return job
