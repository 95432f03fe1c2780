"""
User Models

Portal identities and the roles they may act under.
"""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from .children import ChildParent
    from .organizations import Facility, Group, Organization
    from .staff import Staff

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, CreatedAtMixin, OpenEnum, TimestampMixin, UUIDPrimaryKeyMixin
from .enums import Role


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """Anyone who signs in: parents, teachers, administrators, network owners."""

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str | None] = mapped_column(
        String(255), nullable=True, comment="bcrypt hash; NULL disables password login"
    )
    first_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    profile_image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    # Unknown stored roles load as plain strings and are denied by the access gate
    current_role: Mapped[Role | str | None] = mapped_column(
        OpenEnum(Role), nullable=True, comment="Role the user currently acts under"
    )
    language: Mapped[str] = mapped_column(String(2), default="ru", comment="ru, kk or en")

    # Relationships
    role_assignments: Mapped[list[UserRole]] = relationship(
        back_populates="user", cascade="all, delete-orphan"
    )
    child_links: Mapped[list[ChildParent]] = relationship(back_populates="parent")
    staff_records: Mapped[list[Staff]] = relationship(back_populates="user")

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)


class UserRole(Base, CreatedAtMixin):
    """A role a user holds, optionally scoped to part of the organization tree."""

    __tablename__ = "user_roles"
    __table_args__ = (Index("idx_user_roles_user", "user_id"),)

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"))
    role: Mapped[Role | str] = mapped_column(OpenEnum(Role), nullable=False)

    organization_id: Mapped[int | None] = mapped_column(
        ForeignKey("organizations.id", ondelete="CASCADE"), nullable=True
    )
    facility_id: Mapped[int | None] = mapped_column(
        ForeignKey("facilities.id", ondelete="CASCADE"), nullable=True
    )
    group_id: Mapped[int | None] = mapped_column(
        ForeignKey("groups.id", ondelete="CASCADE"), nullable=True
    )

    # Relationships
    user: Mapped[User] = relationship(back_populates="role_assignments")
    organization: Mapped[Organization | None] = relationship()
    facility: Mapped[Facility | None] = relationship()
    group: Mapped[Group | None] = relationship()
