"""
Staff Models

Users acting in a facility, and the groups they are responsible for.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .organizations import Facility, Group
    from .users import User

from sqlalchemy import ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, TimestampMixin


class Staff(Base, TimestampMixin):
    """A user employed at a facility (teacher, assistant, nurse)."""

    __tablename__ = "staff"
    __table_args__ = (Index("idx_staff_user", "user_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False
    )
    position: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="teacher, assistant, nurse"
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), default="active", comment="active, on_leave, inactive"
    )

    # Relationships
    user: Mapped[User] = relationship(back_populates="staff_records")
    facility: Mapped[Facility] = relationship(back_populates="staff")
    group_assignments: Mapped[list[StaffGroupAssignment]] = relationship(
        back_populates="staff", cascade="all, delete-orphan"
    )


class StaffGroupAssignment(Base, CreatedAtMixin):
    """Records that a staff member is responsible for a group."""

    __tablename__ = "staff_group_assignments"
    __table_args__ = (
        UniqueConstraint("staff_id", "group_id", name="uq_staff_group"),
        Index("idx_staff_assignments_group", "group_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    staff_id: Mapped[int] = mapped_column(
        ForeignKey("staff.id", ondelete="CASCADE"), nullable=False
    )
    group_id: Mapped[int] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=False
    )
    is_primary: Mapped[bool] = mapped_column(default=False)

    # Relationships
    staff: Mapped[Staff] = relationship(back_populates="group_assignments")
    group: Mapped[Group] = relationship(back_populates="staff_assignments")
