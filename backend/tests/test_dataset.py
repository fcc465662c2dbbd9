from __future__ import annotations

import datetime as dt

import pytest

from att_report.report import CustomField, DateWindow, ReportProgress, Task, build_report_dataset
from att_report.report.dataset import COMPLETE, NOT_STARTED, RUNNING

UTC = dt.timezone.utc


def _at(day: int, hour: int = 0, minute: int = 0) -> dt.datetime:
    return dt.datetime(2024, 1, day, hour, minute, tzinfo=UTC)


def test_dataset_combines_all_aggregations(sample_window):
    project = CustomField(1, "Project")
    client = CustomField(2, "Client")
    alpha = Task(1, "Alpha", custom_fields={project: "internal"})
    first = alpha.add_time_segment(_at(1, 23, 30), _at(2, 0, 30), "Night shift", identifier=11)
    beta = Task(2, "Beta")
    second = beta.add_time_segment(_at(1, 9), _at(1, 10), "Standup", identifier=12)
    outside = beta.add_time_segment(_at(8, 9), _at(8, 10), "Next week", identifier=13)

    dataset = build_report_dataset([alpha, beta], [first, second, outside], sample_window, [project, client])

    assert [item.task for item in dataset.tasks] == [beta, alpha]
    assert dataset.total_duration == dt.timedelta(hours=2)
    assert list(dataset.custom_fields) == [project, client]
    assert [(item.value, item.duration) for item in dataset.custom_fields[project]] == [
        ("", dt.timedelta(hours=1)),
        ("internal", dt.timedelta(hours=1)),
    ]
    assert dataset.custom_fields[client] == []
    assert [item.segment for item in dataset.time_segments] == [second, first]
    assert dataset.time_segments[1].start == _at(1, 23, 30)
    assert [(entry.day, entry.segment) for entry in dataset.timesheet] == [
        (dt.date(2024, 1, 1), first),
        (dt.date(2024, 1, 1), second),
        (dt.date(2024, 1, 2), first),
    ]


def test_flat_listing_ties_are_broken_by_segment_id():
    window = DateWindow(dt.date(2024, 1, 2), dt.date(2024, 1, 2))
    task = Task(1, "Alpha")
    later_id = task.add_time_segment(_at(1, 20), _at(2, 1), identifier=7)
    earlier_id = task.add_time_segment(_at(1, 22), _at(2, 2), identifier=3)

    dataset = build_report_dataset([task], [later_id, earlier_id], window, [])

    assert [item.segment for item in dataset.time_segments] == [earlier_id, later_id]
    assert all(item.start == window.start for item in dataset.time_segments)


def test_flat_listing_skips_segments_touching_only_a_window_edge(sample_window):
    task = Task(1, "Alpha")
    before = task.add_time_segment(dt.datetime(2023, 12, 31, 23, tzinfo=UTC), _at(1), identifier=1)
    after = task.add_time_segment(_at(3), _at(3, 1), identifier=2)
    inside = task.add_time_segment(_at(1, 9), _at(1, 10), identifier=3)

    dataset = build_report_dataset([task], [before, after, inside], sample_window, [])

    assert [item.segment for item in dataset.time_segments] == [inside]
    assert dataset.total_duration == dt.timedelta(hours=1)
    assert [entry.segment for entry in dataset.timesheet] == [inside]


def test_unsaved_segment_ids_never_collide_with_stored_ids():
    window = DateWindow(dt.date(2024, 1, 2), dt.date(2024, 1, 2))
    task = Task(1, "Alpha")
    stored = task.add_time_segment(_at(1, 22), _at(2, 2), identifier=1)
    unsaved = task.add_time_segment(_at(1, 20), _at(2, 1))

    dataset = build_report_dataset([task], [stored, unsaved], window, [])

    assert unsaved.identifier < 0
    assert [item.segment for item in dataset.time_segments] == [unsaved, stored]


def test_empty_input_builds_empty_dataset(sample_window):
    dataset = build_report_dataset([], [], sample_window, [])
    assert dataset.tasks == []
    assert dataset.custom_fields == {}
    assert dataset.time_segments == []
    assert dataset.timesheet == []
    assert dataset.total_duration == dt.timedelta(0)


def test_progress_reports_running_then_complete(sample_window):
    progress = ReportProgress()
    seen = []
    progress.subscribe(seen.append)
    assert progress.value == NOT_STARTED

    build_report_dataset([], [], sample_window, [], progress=progress)

    assert seen == [RUNNING, COMPLETE]
    assert progress.is_complete


def test_progress_never_moves_backwards():
    progress = ReportProgress()
    progress.set(RUNNING)
    progress.set(COMPLETE)
    progress.set(RUNNING)
    progress.set(NOT_STARTED)
    assert progress.value == COMPLETE
    with pytest.raises(ValueError):
        progress.set(0.5)
