"""Billing Schemas."""

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict

from kinderportal.core.models.enums import InvoiceStatus


class InvoiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    invoice_number: str
    amount: Decimal
    currency: str
    status: InvoiceStatus
    due_date: date
    paid_at: datetime | None
    description: str | None
    created_at: datetime


class SubscriptionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    child_id: int
    plan_name: str
    monthly_amount: Decimal
    is_auto_charge: bool
    next_billing_date: date | None
    status: str


class AdditionalServiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    facility_id: int
    name: str
    description: str | None
    price: Decimal
    age_min: int | None
    age_max: int | None
    days_of_week: list[int] | None
    max_participants: int | None
    image_url: str | None
    is_active: bool
