"""
Child Models

Child profiles, parent links, and the sensitive health/document records
that are only reachable through the access gate.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .activities import AttendanceRecord, DailyActivity
    from .billing import Invoice
    from .organizations import Group
    from .users import User

from sqlalchemy import (
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, TimestampMixin, enum_column_type
from .enums import AllergySeverity, DocumentStatus, DocumentType


class Child(Base, TimestampMixin):
    """A child enrolled in a group."""

    __tablename__ = "children"
    __table_args__ = (Index("idx_children_group", "group_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=True,
        comment="NULL while the child awaits group placement",
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    enrollment_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    status: Mapped[str] = mapped_column(String(50), default="active", comment="active, inactive")

    # Relationships
    group: Mapped[Group | None] = relationship(back_populates="children")
    parent_links: Mapped[list[ChildParent]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    health: Mapped[ChildHealth | None] = relationship(
        back_populates="child", uselist=False, cascade="all, delete-orphan"
    )
    allergies: Mapped[list[ChildAllergy]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    medications: Mapped[list[ChildMedication]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    documents: Mapped[list[ChildDocument]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    attendance_records: Mapped[list[AttendanceRecord]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    daily_activities: Mapped[list[DailyActivity]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )
    invoices: Mapped[list[Invoice]] = relationship(
        back_populates="child", cascade="all, delete-orphan"
    )


class ChildParent(Base, CreatedAtMixin):
    """Parent-child relationship. The only path by which a parent reaches a child."""

    __tablename__ = "child_parents"
    __table_args__ = (
        UniqueConstraint("child_id", "parent_user_id", name="uq_child_parent"),
        Index("idx_child_parents_parent", "parent_user_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    parent_user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    relationship_type: Mapped[str | None] = mapped_column(
        "relationship", String(50), nullable=True, comment="mother, father, guardian"
    )
    is_primary: Mapped[bool] = mapped_column(default=False)

    # Relationships
    child: Mapped[Child] = relationship(back_populates="parent_links")
    parent: Mapped[User] = relationship(back_populates="child_links")


class ChildHealth(Base, TimestampMixin):
    """SENSITIVE: one health record per child. Reads are audited."""

    __tablename__ = "child_health"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    blood_type: Mapped[str | None] = mapped_column(String(10), nullable=True)
    diet_restrictions: Mapped[str | None] = mapped_column(Text, nullable=True)
    behavioral_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    emergency_contact_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    emergency_contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    emergency_contact_relationship: Mapped[str | None] = mapped_column(
        String(50), nullable=True
    )

    child: Mapped[Child] = relationship(back_populates="health")


class ChildAllergy(Base, TimestampMixin):
    __tablename__ = "child_allergies"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    allergen: Mapped[str] = mapped_column(String(255), nullable=False)
    severity: Mapped[AllergySeverity] = mapped_column(
        enum_column_type(AllergySeverity), nullable=False
    )
    protocol: Mapped[str | None] = mapped_column(
        Text, nullable=True, comment="What to do on exposure"
    )

    child: Mapped[Child] = relationship(back_populates="allergies")


class ChildMedication(Base, TimestampMixin):
    __tablename__ = "child_medications"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    medication_name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str] = mapped_column(String(100), nullable=False)
    frequency: Mapped[str | None] = mapped_column(
        String(100), nullable=True, comment="e.g. twice daily"
    )
    administration_time: Mapped[str | None] = mapped_column(
        String(100), nullable=True, comment="e.g. 13:00"
    )
    authorized_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    is_active: Mapped[bool] = mapped_column(default=True)

    child: Mapped[Child] = relationship(back_populates="medications")


class ChildDocument(Base, TimestampMixin):
    """SENSITIVE: medical certificates, vaccination records, consents. Reads are audited."""

    __tablename__ = "child_documents"
    __table_args__ = (Index("idx_child_documents_child", "child_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    document_type: Mapped[DocumentType] = mapped_column(
        enum_column_type(DocumentType), nullable=False
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    file_url: Mapped[str] = mapped_column(String(500), nullable=False)
    file_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True, comment="Bytes")
    status: Mapped[DocumentStatus] = mapped_column(
        enum_column_type(DocumentStatus), default=DocumentStatus.VALID
    )
    issue_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    version: Mapped[int] = mapped_column(Integer, default=1)

    child: Mapped[Child] = relationship(back_populates="documents")


class TrustedContact(Base, CreatedAtMixin):
    """Someone a parent has authorized to pick up their child."""

    __tablename__ = "trusted_contacts"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    parent_user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    child_id: Mapped[int] = mapped_column(
        ForeignKey("children.id", ondelete="CASCADE"), nullable=False
    )
    full_name: Mapped[str] = mapped_column(String(255), nullable=False)
    relationship_type: Mapped[str | None] = mapped_column(
        "relationship", String(100), nullable=True
    )
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    access_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    is_active: Mapped[bool] = mapped_column(default=True)
