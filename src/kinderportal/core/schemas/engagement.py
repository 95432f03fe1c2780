"""Notification, Event and Extra-Class Schemas."""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from kinderportal.core.models.enums import NotificationPriority, NotificationType


class NotificationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: UUID
    type: NotificationType
    priority: NotificationPriority
    title: str
    message: str
    related_id: int | None
    is_read: bool
    created_at: datetime


class EventSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    facility_id: int | None
    group_id: int | None
    title: str
    description: str | None
    start_date: datetime
    end_date: datetime | None
    location: str | None


class ExtraClassSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    facility_id: int
    name: str
    description: str | None
    instructor: str | None
    schedule: str | None
    price: Decimal | None
    is_active: bool


class EnrollmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    extra_class_id: int
    child_id: int
    enrolled_at: datetime
    is_active: bool


class ChildEnrollmentSchema(BaseModel):
    """An enrollment together with the class it is for."""

    enrollment: EnrollmentSchema
    extra_class: ExtraClassSchema | None
