from __future__ import annotations

import datetime as dt
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import Engine
from sqlalchemy.orm import Session

from att_report.config import settings
from att_report.database import get_db, make_engine
from att_report.main import app
from att_report.report import DateWindow


@pytest.fixture(scope="session")
def engine(tmp_path_factory: pytest.TempPathFactory) -> Iterator[Engine]:
    report_engine = make_engine(tmp_path_factory.mktemp("reports") / "att.db")
    yield report_engine
    report_engine.dispose()


@pytest.fixture()
def session(engine: Engine) -> Iterator[Session]:
    """A session whose writes are discarded when the test ends."""
    with engine.connect() as connection:
        outer = connection.begin()
        db = Session(bind=connection, autoflush=False)
        yield db
        db.close()
        outer.rollback()


@pytest.fixture()
def client(session: Session) -> Iterator[TestClient]:
    app.dependency_overrides[get_db] = lambda: session
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.pop(get_db, None)


@pytest.fixture(autouse=True)
def utc_reports(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(settings, "timezone", "UTC")


@pytest.fixture()
def sample_window() -> DateWindow:
    return DateWindow(dt.date(2024, 1, 1), dt.date(2024, 1, 2))
