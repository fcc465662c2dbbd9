from __future__ import annotations

import datetime as dt
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from threading import RLock
from typing import List, Optional

from .config import Settings
from .models import utcnow
from .report import DateWindow, ReportDataset, ReportProgress


@dataclass(eq=False)
class ReportJob:
    """A report build scheduled on a background worker."""

    window: DateWindow
    job_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    progress: ReportProgress = field(default_factory=ReportProgress)
    created_at: dt.datetime = field(default_factory=utcnow)
    finished_at: Optional[dt.datetime] = None
    dataset: Optional[ReportDataset] = None
    error: Optional[str] = None

    @property
    def is_finished(self) -> bool:
        return self.finished_at is not None


class ReportJobRegistry:
    """Keeps the most recent report jobs in memory for polling."""

    def __init__(self, base_settings: Settings):
        self._lock = RLock()
        self._jobs: "OrderedDict[str, ReportJob]" = OrderedDict()
        self.limit: int = max(1, int(base_settings.report_job_limit))

    def add(self, job: ReportJob) -> ReportJob:
        with self._lock:
            self._jobs[job.job_id] = job
            self._evict()
            return job

    def get(self, job_id: str) -> Optional[ReportJob]:
        with self._lock:
            return self._jobs.get(job_id)

    def jobs(self) -> List[ReportJob]:
        with self._lock:
            return list(self._jobs.values())

    def _evict(self) -> None:
        # Only finished jobs are dropped; running ones stay until polled.
        overflow = len(self._jobs) - self.limit
        if overflow <= 0:
            return
        for job_id in [job_id for job_id, job in self._jobs.items() if job.is_finished][:overflow]:
            del self._jobs[job_id]


__all__ = ["ReportJob", "ReportJobRegistry"]
