"""
Organization Models

Organizational hierarchy: network (organization) → facility → group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .children import Child
    from .staff import Staff, StaffGroupAssignment

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class Organization(Base, TimestampMixin):
    """A kindergarten network (tenant)."""

    __tablename__ = "organizations"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Relationships
    facilities: Mapped[list[Facility]] = relationship(
        back_populates="organization", cascade="all, delete-orphan"
    )


class Facility(Base, TimestampMixin):
    """A physical kindergarten location."""

    __tablename__ = "facilities"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    organization_id: Mapped[int] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Relationships
    organization: Mapped[Organization] = relationship(back_populates="facilities")
    groups: Mapped[list[Group]] = relationship(
        back_populates="facility", cascade="all, delete-orphan"
    )
    staff: Mapped[list[Staff]] = relationship(back_populates="facility")


class Group(Base, TimestampMixin):
    """A classroom/cohort of children within a facility."""

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    facility_id: Mapped[int] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    age_range: Mapped[str | None] = mapped_column(String(50), nullable=True, comment="e.g. 3-4")
    capacity: Mapped[int | None] = mapped_column(Integer, nullable=True)

    # Relationships
    facility: Mapped[Facility] = relationship(back_populates="groups")
    children: Mapped[list[Child]] = relationship(back_populates="group")
    staff_assignments: Mapped[list[StaffGroupAssignment]] = relationship(
        back_populates="group", cascade="all, delete-orphan"
    )
