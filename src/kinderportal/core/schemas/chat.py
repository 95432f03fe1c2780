"""
Chat Schemas

Messages are polled; there is no push transport.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kinderportal.core.models.enums import ThreadType

from .users import UserSummary


class ChatThreadSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    type: ThreadType
    group_id: int | None
    title: str | None
    is_pinned: bool
    created_at: datetime
    updated_at: datetime


class ReadReceiptSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    message_id: int
    user_id: UUID
    read_at: datetime


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=10_000)
    is_important: bool = False


class MessageSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    thread_id: int
    sender_id: UUID
    content: str
    is_important: bool
    created_at: datetime
    sender: UserSummary | None = None
    read_receipts: list[ReadReceiptSchema] = Field(default_factory=list)
