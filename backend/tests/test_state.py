from __future__ import annotations

from att_report.config import settings
from att_report.models import utcnow
from att_report.state import ReportJob, ReportJobRegistry


def test_registry_drops_oldest_finished_jobs(monkeypatch, sample_window) -> None:
    monkeypatch.setattr(settings, "report_job_limit", 2)
    registry = ReportJobRegistry(settings)

    first = registry.add(ReportJob(window=sample_window, finished_at=utcnow()))
    running = registry.add(ReportJob(window=sample_window))
    latest = registry.add(ReportJob(window=sample_window, finished_at=utcnow()))

    assert registry.get(first.job_id) is None
    assert registry.jobs() == [running, latest]


def test_running_jobs_are_never_evicted(monkeypatch, sample_window) -> None:
    monkeypatch.setattr(settings, "report_job_limit", 1)
    registry = ReportJobRegistry(settings)

    jobs = [registry.add(ReportJob(window=sample_window)) for _ in range(3)]

    assert registry.jobs() == jobs
