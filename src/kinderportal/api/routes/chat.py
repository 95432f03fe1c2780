"""
Chat API Endpoints

Threads between parents and staff. Clients poll for new messages; only
participants of a thread may read or post in it.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kinderportal.access import get_current_user
from kinderportal.core.database import get_db
from kinderportal.core.models import ChatParticipant, ChatThread, Message, MessageReadReceipt, User
from kinderportal.core.schemas import ChatThreadSchema, MessageCreate, MessageSchema

logger = logging.getLogger(__name__)

router = APIRouter()


def _participant_threads(user: User):
    return select(ChatParticipant.thread_id).where(ChatParticipant.user_id == user.id)


def _with_details(query):
    return query.options(
        selectinload(Message.sender), selectinload(Message.read_receipts)
    ).execution_options(populate_existing=True)


async def _require_participant(db: AsyncSession, user: User, thread_id: int) -> ChatThread:
    thread = await db.get(ChatThread, thread_id)
    if thread is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Thread not found")

    result = await db.execute(
        select(ChatParticipant.id)
        .where(ChatParticipant.thread_id == thread_id, ChatParticipant.user_id == user.id)
        .limit(1)
    )
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN, detail="You are not a participant of this thread"
        )
    return thread


@router.get("/chat/threads", response_model=list[ChatThreadSchema])
async def list_threads(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[ChatThread]:
    """Threads the user takes part in. Pinned first, then most recently active."""
    result = await db.execute(
        select(ChatThread)
        .where(ChatThread.id.in_(_participant_threads(user)))
        .order_by(ChatThread.is_pinned.desc(), ChatThread.updated_at.desc())
    )
    return list(result.scalars().all())


@router.get("/chat/threads/{thread_id}/messages", response_model=list[MessageSchema])
async def list_messages(
    thread_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[Message]:
    """
    Messages in a thread, oldest first.

    Fetching marks every message from other participants as read by the
    current user.
    """
    await _require_participant(db, user, thread_id)

    already_read = select(MessageReadReceipt.message_id).where(
        MessageReadReceipt.user_id == user.id
    )
    unread = await db.execute(
        select(Message.id).where(
            Message.thread_id == thread_id,
            Message.sender_id != user.id,
            Message.id.not_in(already_read),
        )
    )
    unread_ids = list(unread.scalars().all())
    if unread_ids:
        now = datetime.now(UTC)
        db.add_all(
            MessageReadReceipt(message_id=message_id, user_id=user.id, read_at=now)
            for message_id in unread_ids
        )
        await db.commit()
        logger.debug("Marked %d messages read in thread %s", len(unread_ids), thread_id)

    result = await db.execute(
        _with_details(
            select(Message)
            .where(Message.thread_id == thread_id)
            .order_by(Message.created_at, Message.id)
        )
    )
    return list(result.scalars().all())


@router.post(
    "/chat/threads/{thread_id}/messages",
    response_model=MessageSchema,
    status_code=status.HTTP_201_CREATED,
)
async def post_message(
    thread_id: int,
    message_data: MessageCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> Message:
    """Post a message to a thread the user participates in."""
    thread = await _require_participant(db, user, thread_id)

    message = Message(thread_id=thread_id, sender_id=user.id, **message_data.model_dump())
    db.add(message)
    thread.updated_at = datetime.now(UTC)
    await db.commit()

    result = await db.execute(_with_details(select(Message).where(Message.id == message.id)))
    return result.scalar_one()


@router.get("/messages/recent", response_model=list[MessageSchema])
async def recent_messages(
    limit: int = Query(10, ge=1, le=50),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[Message]:
    """Newest messages across all of the user's threads, for the dashboard."""
    result = await db.execute(
        _with_details(
            select(Message)
            .where(Message.thread_id.in_(_participant_threads(user)))
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit)
        )
    )
    return list(result.scalars().all())
