"""
Child Schemas

Pydantic models for child profiles and the health/document records behind
the access gate.
"""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from kinderportal.core.models.enums import AllergySeverity, DocumentStatus, DocumentType


class ChildBase(BaseModel):
    """Base child schema with common fields."""

    group_id: int | None = None
    first_name: str = Field(..., min_length=1, max_length=255)
    last_name: str = Field(..., min_length=1, max_length=255)
    date_of_birth: date
    photo_url: str | None = Field(None, max_length=500)
    enrollment_date: date | None = None


class ChildCreate(ChildBase):
    """Schema for enrolling a child."""

    pass


class ChildSchema(ChildBase):
    """Full child schema for responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    status: str
    created_at: datetime
    updated_at: datetime


class AllergySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    allergen: str
    severity: AllergySeverity
    protocol: str | None


class MedicationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    medication_name: str
    dosage: str
    frequency: str | None
    administration_time: str | None
    authorized_by: str | None
    start_date: date | None
    end_date: date | None
    is_active: bool


class DocumentSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    document_type: DocumentType
    title: str
    file_url: str
    file_name: str | None
    file_size: int | None
    status: DocumentStatus
    issue_date: date | None
    expiry_date: date | None
    version: int
    created_at: datetime


class ChildOverviewSchema(ChildSchema):
    """Child as listed on the children page, with its at-a-glance records."""

    allergies: list[AllergySchema] = Field(default_factory=list)
    medications: list[MedicationSchema] = Field(default_factory=list)
    documents: list[DocumentSchema] = Field(default_factory=list)


class HealthSchema(BaseModel):
    """Health record plus allergies and medications.

    When no health record exists the record fields are null and `id` is null.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    child_id: int
    blood_type: str | None = None
    diet_restrictions: str | None = None
    behavioral_notes: str | None = None
    emergency_contact_name: str | None = None
    emergency_contact_phone: str | None = None
    emergency_contact_relationship: str | None = None
    allergies: list[AllergySchema] = Field(default_factory=list)
    medications: list[MedicationSchema] = Field(default_factory=list)


class ChildParentCreate(BaseModel):
    """Link a parent user to a child."""

    parent_user_id: UUID
    relationship_type: str | None = Field(
        None, max_length=50, description="mother, father, guardian"
    )
    is_primary: bool = False


class ChildParentSchema(ChildParentCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    created_at: datetime


class TrustedContactCreate(BaseModel):
    """Authorize someone to pick up a child."""

    child_id: int = Field(..., ge=1)
    full_name: str = Field(..., min_length=1, max_length=255)
    relationship_type: str | None = Field(None, max_length=100)
    phone: str | None = Field(None, max_length=50)
    email: str | None = Field(None, max_length=255)
    access_expires_at: datetime | None = None


class TrustedContactSchema(TrustedContactCreate):
    model_config = ConfigDict(from_attributes=True)

    id: int
    parent_user_id: UUID
    is_active: bool
    created_at: datetime
