"""
Billing API Endpoints

Read-only views of invoices, subscriptions and the paid services catalogue.
No charging happens here.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import get_current_user, require_session, visible_child_ids
from kinderportal.core.database import get_db
from kinderportal.core.models import AdditionalService, Invoice, Subscription, User
from kinderportal.core.schemas import (
    AdditionalServiceSchema,
    InvoiceSchema,
    SubscriptionSchema,
)

router = APIRouter()


@router.get("/invoices", response_model=list[InvoiceSchema])
async def list_invoices(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[Invoice]:
    """Invoices for the user's children, newest first."""
    result = await db.execute(
        select(Invoice)
        .where(Invoice.child_id.in_(visible_child_ids(user)))
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
    )
    return list(result.scalars().all())


@router.get("/subscriptions", response_model=list[SubscriptionSchema])
async def list_subscriptions(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[Subscription]:
    """Subscription plans of the user's children."""
    result = await db.execute(
        select(Subscription)
        .where(Subscription.child_id.in_(visible_child_ids(user)))
        .order_by(Subscription.id)
    )
    return list(result.scalars().all())


@router.get(
    "/services",
    response_model=list[AdditionalServiceSchema],
    dependencies=[Depends(require_session)],
)
async def list_services(db: AsyncSession = Depends(get_db)) -> list[AdditionalService]:
    """Active additional services on offer."""
    result = await db.execute(
        select(AdditionalService)
        .where(AdditionalService.is_active.is_(True))
        .order_by(AdditionalService.name)
    )
    return list(result.scalars().all())
