from __future__ import annotations

from pathlib import Path
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from . import models
from .config import settings

if settings.storage_backend != "sqlite":
    raise NotImplementedError("Only the sqlite storage backend is supported")


def make_engine(sqlite_path: Path) -> Engine:
    """Create an engine for the report database and ensure its tables exist."""
    engine = create_engine(
        f"sqlite:///{sqlite_path}",
        connect_args={"check_same_thread": False},
        future=True,
    )
    models.Base.metadata.create_all(bind=engine)
    return engine


engine = make_engine(settings.sqlite_path)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
