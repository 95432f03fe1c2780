"""
Daily Record Schemas

Pydantic models for activities and attendance, including extra-class records.
"""

import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kinderportal.core.models.enums import ActivityType


class DailyActivityCreate(BaseModel):
    """Schema for recording an activity."""

    activity_type: ActivityType
    time: datetime.datetime
    date: datetime.date | None = Field(None, description="Defaults to the date part of `time`")
    duration: int | None = Field(None, ge=0, description="Minutes, for sleep")
    appetite: int | None = Field(None, ge=0, le=100, description="Percentage eaten, for meals")
    description: str | None = None
    photo_urls: list[str] | None = None


class DailyActivitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    date: datetime.date
    activity_type: ActivityType
    time: datetime.datetime
    duration: int | None
    appetite: int | None
    description: str | None
    photo_urls: list[str] | None
    recorded_by: UUID | None
    created_at: datetime.datetime


class AttendanceMark(BaseModel):
    """Check-in/check-out payload. Both fields are optional."""

    time: datetime.datetime | None = None
    notes: str | None = None


class AttendanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    date: datetime.date
    check_in_time: datetime.datetime | None
    check_out_time: datetime.datetime | None
    checked_in_by: UUID | None
    checked_out_by: UUID | None
    notes: str | None


class ExtraClassAttendanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    enrollment_id: int
    date: datetime.date
    is_present: bool
    notes: str | None


class ExtraClassPerformanceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    enrollment_id: int
    date: datetime.date
    rating: int | None
    comment: str | None
    recorded_by: UUID | None
