"""
Notifications API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import get_current_user
from kinderportal.core.database import get_db
from kinderportal.core.models import Notification, User
from kinderportal.core.schemas import NotificationSchema

router = APIRouter()


@router.get("/", response_model=list[NotificationSchema])
async def list_notifications(
    unread_only: bool = Query(False),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[Notification]:
    """The current user's notifications, newest first."""
    query = select(Notification).where(Notification.user_id == user.id)
    if unread_only:
        query = query.where(Notification.is_read.is_(False))

    result = await db.execute(
        query.order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    return list(result.scalars().all())


@router.post("/{notification_id}/read", response_model=NotificationSchema)
async def mark_read(
    notification_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Notification:
    """Mark one of the user's notifications as read.

    Someone else's notification is reported as not found.
    """
    notification = await db.get(Notification, notification_id)

    if notification is None or notification.user_id != user.id:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Notification not found with ID: {notification_id}",
        )

    notification.is_read = True
    await db.commit()

    return notification
