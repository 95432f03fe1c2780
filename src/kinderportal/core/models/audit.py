"""
Audit Models

Append-only record of who read which sensitive resource.
"""

from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base


class AccessLog(Base):
    """One row per successful read of an audited resource."""

    __tablename__ = "access_logs"
    __table_args__ = (
        Index("idx_access_logs_user", "user_id"),
        Index("idx_access_logs_resource", "resource_type", "resource_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="e.g. get_health, get_documents"
    )
    resource_type: Mapped[str | None] = mapped_column(
        String(100), nullable=True, comment="child, health, documents"
    )
    resource_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(50), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )
