from __future__ import annotations

import datetime as dt

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


class TaskRecord(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    time_segments = relationship(
        "TimeSegmentRecord",
        back_populates="owner",
        cascade="all, delete-orphan",
        order_by="TimeSegmentRecord.start_time",
    )
    custom_field_values = relationship(
        "CustomFieldValueRecord",
        back_populates="task",
        cascade="all, delete-orphan",
    )


class TimeSegmentRecord(Base):
    __tablename__ = "time_segments"

    id = Column(Integer, primary_key=True, index=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False, index=True)
    end_time = Column(DateTime(timezone=True), nullable=True, index=True)
    description = Column(Text, nullable=True)

    owner = relationship("TaskRecord", back_populates="time_segments")


class CustomFieldRecord(Base):
    __tablename__ = "custom_fields"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)

    values = relationship(
        "CustomFieldValueRecord",
        back_populates="custom_field",
        cascade="all, delete-orphan",
    )


class CustomFieldValueRecord(Base):
    __tablename__ = "custom_field_values"
    __table_args__ = (UniqueConstraint("task_id", "custom_field_id", name="uq_task_custom_field"),)

    id = Column(Integer, primary_key=True)
    task_id = Column(Integer, ForeignKey("tasks.id"), nullable=False, index=True)
    custom_field_id = Column(Integer, ForeignKey("custom_fields.id"), nullable=False, index=True)
    value = Column(String(255), nullable=False)

    task = relationship("TaskRecord", back_populates="custom_field_values")
    custom_field = relationship("CustomFieldRecord", back_populates="values")
