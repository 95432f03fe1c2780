"""
Engagement Models

Notifications, calendar events, and extra-curricular classes.
"""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, TimestampMixin, enum_column_type
from .enums import NotificationPriority, NotificationType


class Notification(Base, CreatedAtMixin):
    __tablename__ = "notifications"
    __table_args__ = (Index("idx_notifications_user", "user_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    type: Mapped[NotificationType] = mapped_column(
        enum_column_type(NotificationType), nullable=False
    )
    priority: Mapped[NotificationPriority] = mapped_column(
        enum_column_type(NotificationPriority), default=NotificationPriority.NORMAL
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    related_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, comment="invoice_id, message_id, etc."
    )
    is_read: Mapped[bool] = mapped_column(default=False)


class Event(Base, TimestampMixin):
    """Calendar entry. NULL facility means network-wide."""

    __tablename__ = "events"
    __table_args__ = (Index("idx_events_start", "start_date"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    facility_id: Mapped[int | None] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True
    )
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)


class ExtraClass(Base, TimestampMixin):
    """Extra-curricular class children can enroll in."""

    __tablename__ = "extra_classes"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    instructor: Mapped[str | None] = mapped_column(String(255), nullable=True)
    schedule: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="e.g. Mon/Wed 16:00"
    )
    price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)

    enrollments: Mapped[list[ExtraClassEnrollment]] = relationship(back_populates="extra_class")


class ExtraClassEnrollment(Base):
    __tablename__ = "extra_class_enrollments"
    __table_args__ = (UniqueConstraint("extra_class_id", "child_id", name="uq_enrollment"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    extra_class_id: Mapped[int] = mapped_column(
        ForeignKey("extra_classes.id", ondelete="CASCADE"), nullable=False
    )
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    enrolled_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
    is_active: Mapped[bool] = mapped_column(default=True)

    extra_class: Mapped[ExtraClass] = relationship(back_populates="enrollments")
