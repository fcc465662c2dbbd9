"""Loads report input from the database as immutable engine snapshots."""

from __future__ import annotations

from typing import Dict, List

from sqlalchemy import and_, or_
from sqlalchemy.orm import Session, selectinload

from .models import CustomFieldRecord, CustomFieldValueRecord, TaskRecord, TimeSegmentRecord
from .report import CustomField, DateWindow, Task, TimeSegment
from .utils import as_utc, optional_utc


class ReportQuery:
    """Query tasks, time segments and custom fields relevant to a report window.

    Snapshots are cached per query so a segment returned by
    :meth:`query_time_segments` is the same object its task owns.
    """

    def __init__(self, db: Session, window: DateWindow) -> None:
        self.db = db
        self.window = window
        self._custom_fields: Dict[int, CustomField] = {}
        self._tasks: Dict[int, Task] = {}
        self._segments: Dict[int, TimeSegment] = {}

    def _overlaps_window(self):
        start, end = self.window.bounds
        return and_(
            TimeSegmentRecord.start_time < end,
            or_(TimeSegmentRecord.end_time.is_(None), TimeSegmentRecord.end_time > start),
        )

    def _custom_field(self, record: CustomFieldRecord) -> CustomField:
        snapshot = self._custom_fields.get(record.id)
        if snapshot is None:
            snapshot = self._custom_fields[record.id] = CustomField(identifier=record.id, name=record.name)
        return snapshot

    def _task(self, record: TaskRecord) -> Task:
        snapshot = self._tasks.get(record.id)
        if snapshot is not None:
            return snapshot
        snapshot = Task(
            identifier=record.id,
            name=record.name,
            description=record.description or "",
            custom_fields={
                self._custom_field(value.custom_field): value.value for value in record.custom_field_values
            },
        )
        for segment_record in record.time_segments:
            self._segments[segment_record.id] = snapshot.add_time_segment(
                as_utc(segment_record.start_time),
                optional_utc(segment_record.end_time),
                segment_record.description or "",
                identifier=segment_record.id,
            )
        self._tasks[record.id] = snapshot
        return snapshot

    def get_custom_fields(self) -> List[CustomField]:
        records = self.db.query(CustomFieldRecord).order_by(CustomFieldRecord.id.asc()).all()
        return [self._custom_field(record) for record in records]

    def query_tasks(self) -> List[Task]:
        records = (
            self.db.query(TaskRecord)
            .options(
                selectinload(TaskRecord.time_segments),
                selectinload(TaskRecord.custom_field_values).selectinload(CustomFieldValueRecord.custom_field),
            )
            .filter(TaskRecord.time_segments.any(self._overlaps_window()))
            .order_by(TaskRecord.id.asc())
            .all()
        )
        return [self._task(record) for record in records]

    def query_time_segments(self) -> List[TimeSegment]:
        records = (
            self.db.query(TimeSegmentRecord)
            .filter(self._overlaps_window())
            .order_by(TimeSegmentRecord.start_time.asc(), TimeSegmentRecord.id.asc())
            .all()
        )
        segments: List[TimeSegment] = []
        for record in records:
            self._task(record.owner)
            segments.append(self._segments[record.id])
        return segments


__all__ = ["ReportQuery"]
