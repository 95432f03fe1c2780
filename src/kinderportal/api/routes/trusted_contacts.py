"""
Trusted Contacts API Endpoints

People a parent has authorized to pick up their child.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import ensure_child_access, get_current_user, require_role
from kinderportal.core.database import get_db
from kinderportal.core.models import Role, TrustedContact, User
from kinderportal.core.schemas import TrustedContactCreate, TrustedContactSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=list[TrustedContactSchema])
async def list_trusted_contacts(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[TrustedContact]:
    """Contacts the current user has added."""
    result = await db.execute(
        select(TrustedContact)
        .where(TrustedContact.parent_user_id == user.id)
        .order_by(TrustedContact.created_at.desc(), TrustedContact.id.desc())
    )
    return list(result.scalars().all())


@router.post("/", response_model=TrustedContactSchema, status_code=status.HTTP_201_CREATED)
async def add_trusted_contact(
    contact_data: TrustedContactCreate,
    user: User = Depends(require_role(Role.PARENT)),
    db: AsyncSession = Depends(get_db),
) -> TrustedContact:
    """Authorize someone to pick up one of the parent's children."""
    await ensure_child_access(db, user, contact_data.child_id)

    contact = TrustedContact(parent_user_id=user.id, **contact_data.model_dump())
    db.add(contact)
    await db.commit()
    await db.refresh(contact)

    logger.info("Parent %s added trusted contact %s", user.id, contact.id)
    return contact
