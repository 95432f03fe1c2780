"""
Organization and Staff Schemas

Pydantic models for the organizational structure admins manage.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .users import UserSummary


# Organization Schemas
class OrganizationCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None


class OrganizationSchema(OrganizationCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


# Facility Schemas
class FacilityCreate(BaseModel):
    organization_id: int
    name: str = Field(..., min_length=1, max_length=255)
    address: str | None = None
    phone: str | None = Field(None, max_length=50)


class FacilitySchema(FacilityCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


# Group Schemas
class GroupCreate(BaseModel):
    facility_id: int
    name: str = Field(..., min_length=1, max_length=255)
    age_range: str | None = Field(None, max_length=50)
    capacity: int | None = Field(None, ge=1)


class GroupSchema(GroupCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime


# Staff Schemas
class StaffCreate(BaseModel):
    user_id: UUID
    facility_id: int
    position: str | None = Field(None, max_length=255, description="teacher, assistant, nurse")
    phone: str | None = Field(None, max_length=50)


class StaffSchema(StaffCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_at: datetime
    user: UserSummary


class StaffAssignmentCreate(BaseModel):
    staff_id: int
    is_primary: bool = False


class StaffAssignmentSchema(StaffAssignmentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    group_id: int
    created_at: datetime
