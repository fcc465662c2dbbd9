from __future__ import annotations

import datetime as dt

import pytest
from sqlalchemy.orm import Session

from att_report.errors import MalformedSegmentError
from att_report.models import CustomFieldRecord, CustomFieldValueRecord, TaskRecord, TimeSegmentRecord
from att_report.query import ReportQuery
from att_report.report import DateWindow

UTC = dt.timezone.utc


def _at(day: int, hour: int = 0, minute: int = 0) -> dt.datetime:
    return dt.datetime(2024, 1, day, hour, minute, tzinfo=UTC)


def _add_task(session: Session, name: str, *segments, values=None) -> TaskRecord:
    task = TaskRecord(name=name, description=f"{name} description")
    for start, end in segments:
        task.time_segments.append(TimeSegmentRecord(start_time=start, end_time=end, description=name))
    for custom_field, value in (values or {}).items():
        task.custom_field_values.append(CustomFieldValueRecord(custom_field=custom_field, value=value))
    session.add(task)
    session.flush()
    return task


def test_query_returns_only_overlapping_tasks_and_segments(session: Session, sample_window):
    project = CustomFieldRecord(name="Project")
    session.add(project)
    inside = _add_task(session, "Inside", (_at(1, 9), _at(1, 10)), (_at(10, 9), _at(10, 10)), values={project: "alpha"})
    _add_task(session, "Outside", (_at(5, 9), _at(5, 10)))
    running = _add_task(session, "Running", (_at(2, 15), None))
    crossing = _add_task(session, "Crossing", (dt.datetime(2023, 12, 31, 23, tzinfo=UTC), _at(1, 1)))

    query = ReportQuery(session, sample_window)
    custom_fields = query.get_custom_fields()
    tasks = query.query_tasks()
    segments = query.query_time_segments()

    assert [field.name for field in custom_fields] == ["Project"]
    assert [task.identifier for task in tasks] == [inside.id, running.id, crossing.id]
    inside_task = tasks[0]
    assert inside_task.description == "Inside description"
    assert inside_task.get_custom_field(custom_fields[0]) == "alpha"
    assert len(inside_task.time_segments) == 2

    assert [segment.start_time for segment in segments] == [
        dt.datetime(2023, 12, 31, 23, tzinfo=UTC),
        _at(1, 9),
        _at(2, 15),
    ]
    assert segments[1].owner is inside_task
    assert segments[2].is_open
    assert all(segment.start_time.tzinfo is not None for segment in segments)


def test_query_on_empty_database_returns_nothing(session: Session, sample_window):
    query = ReportQuery(session, sample_window)
    assert query.query_tasks() == []
    assert query.query_time_segments() == []
    assert query.get_custom_fields() == []


def test_malformed_segment_in_database_fails_loudly(session: Session, sample_window):
    _add_task(session, "Broken", (_at(1, 10), _at(1, 9)))
    with pytest.raises(MalformedSegmentError):
        ReportQuery(session, DateWindow(dt.date(2023, 12, 31), dt.date(2024, 1, 2))).query_tasks()
