"""
User and Auth Schemas

Pydantic models for login, current-user and role-switch payloads.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kinderportal.core.models.enums import Role


class LoginRequest(BaseModel):
    """Credentials for password login."""

    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)


class RoleSwitchRequest(BaseModel):
    """Switch the role the user is currently acting under."""

    role: Role


class RoleAssignmentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    role: Role | str
    organization_id: int | None
    facility_id: int | None
    group_id: int | None


class UserSummary(BaseModel):
    """Public subset of a user shown next to staff and messages."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    profile_image_url: str | None
    current_role: Role | str | None
    language: str


class UserSchema(UserSummary):
    """Signed-in user with every role they may switch to."""

    role_assignments: list[RoleAssignmentSchema] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
