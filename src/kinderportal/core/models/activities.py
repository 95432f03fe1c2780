"""
Daily Record Models

Attendance and the activity feed teachers record through the day, plus
per-lesson attendance and assessments for extra classes.
"""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .children import Child

from sqlalchemy import (
    JSON,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, TimestampMixin, enum_column_type
from .enums import ActivityType


class AttendanceRecord(Base, TimestampMixin):
    """One row per child per day."""

    __tablename__ = "attendance_records"
    __table_args__ = (UniqueConstraint("child_id", "date", name="uq_attendance_child_date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    check_in_time: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    check_out_time: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    checked_in_by: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    checked_out_by: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    child: Mapped[Child] = relationship(back_populates="attendance_records")


class DailyActivity(Base, CreatedAtMixin):
    """Sleep, meals, activities, medication given, mood."""

    __tablename__ = "daily_activities"
    __table_args__ = (
        CheckConstraint("appetite IS NULL OR appetite BETWEEN 0 AND 100", name="check_appetite"),
        Index("idx_activities_child_date", "child_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    activity_type: Mapped[ActivityType] = mapped_column(
        enum_column_type(ActivityType), nullable=False
    )
    time: Mapped[datetime.datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Minutes, for sleep"
    )
    appetite: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="Percentage eaten 0-100, for meals"
    )
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_urls: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)
    recorded_by: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)

    child: Mapped[Child] = relationship(back_populates="daily_activities")


class ExtraClassAttendance(Base, CreatedAtMixin):
    """Whether an enrolled child came to one lesson of an extra class."""

    __tablename__ = "extra_class_attendance"
    __table_args__ = (
        UniqueConstraint("enrollment_id", "date", name="uq_extra_class_attendance_day"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    enrollment_id: Mapped[int] = mapped_column(
        ForeignKey("extra_class_enrollments.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    is_present: Mapped[bool] = mapped_column(default=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)


class ExtraClassPerformance(Base, CreatedAtMixin):
    """Instructor's assessment of a child in an extra class."""

    __tablename__ = "extra_class_performance"
    __table_args__ = (
        CheckConstraint("rating IS NULL OR rating BETWEEN 1 AND 5", name="check_rating"),
        Index("idx_extra_class_performance_enrollment", "enrollment_id", "date"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    enrollment_id: Mapped[int] = mapped_column(
        ForeignKey("extra_class_enrollments.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False)
    rating: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="1-5")
    comment: Mapped[str | None] = mapped_column(Text, nullable=True)
    recorded_by: Mapped[UUID | None] = mapped_column(ForeignKey("users.id"), nullable=True)
