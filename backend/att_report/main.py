from __future__ import annotations

import datetime as dt

from fastapi import BackgroundTasks, Depends, FastAPI, Query, Request, status
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .schemas import (
    FormatOptions,
    ReportDatasetResponse,
    ReportJobResponse,
    ReportRequest,
    dataset_response,
    job_response,
)
from .services import build_report, get_report_job, run_report_job, schedule_report
from .state import ReportJobRegistry

app = FastAPI(title=settings.app_name)
app.state.report_jobs = ReportJobRegistry(settings)


def _format_options() -> FormatOptions:
    return FormatOptions(date_format=settings.date_format, datetime_format=settings.datetime_format)


def _registry(request: Request) -> ReportJobRegistry:
    return request.app.state.report_jobs


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/reports", response_model=ReportDatasetResponse)
def report(
    from_date: dt.date = Query(...),
    to_date: dt.date = Query(...),
    db: Session = Depends(get_db),
) -> ReportDatasetResponse:
    dataset = build_report(db, from_date, to_date)
    return dataset_response(dataset, _format_options())


@app.post("/reports", response_model=ReportJobResponse, status_code=status.HTTP_202_ACCEPTED)
def report_schedule(
    payload: ReportRequest,
    background_tasks: BackgroundTasks,
    request: Request,
    db: Session = Depends(get_db),
) -> ReportJobResponse:
    job, report_input = schedule_report(db, _registry(request), payload.start_date, payload.end_date)
    background_tasks.add_task(run_report_job, job, report_input)
    return job_response(job, _format_options(), include_dataset=False)


@app.get("/report-jobs", response_model=list[ReportJobResponse])
def report_jobs(request: Request) -> list[ReportJobResponse]:
    options = _format_options()
    return [job_response(job, options, include_dataset=False) for job in _registry(request).jobs()]


@app.get("/reports/{job_id}", response_model=ReportJobResponse)
def report_status(job_id: str, request: Request) -> ReportJobResponse:
    job = get_report_job(_registry(request), job_id)
    return job_response(job, _format_options())
