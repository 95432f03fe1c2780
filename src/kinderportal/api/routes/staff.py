"""
Staff API Endpoints
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kinderportal.access import MANAGEMENT_ROLES, require_role, require_session
from kinderportal.core.database import get_db
from kinderportal.core.models import Facility, Staff, User
from kinderportal.core.schemas import StaffCreate, StaffSchema

router = APIRouter()


@router.get("/", response_model=list[StaffSchema], dependencies=[Depends(require_session)])
async def list_staff(db: AsyncSession = Depends(get_db)) -> list[Staff]:
    """List active staff members with their user profiles."""
    result = await db.execute(
        select(Staff)
        .where(Staff.status == "active")
        .options(selectinload(Staff.user))
        .order_by(Staff.id)
    )
    return list(result.scalars().all())


@router.post(
    "/",
    response_model=StaffSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*MANAGEMENT_ROLES))],
)
async def create_staff(staff_data: StaffCreate, db: AsyncSession = Depends(get_db)) -> Staff:
    """
    Create a staff record for an existing user.

    Raises:
        HTTPException 404: user or facility does not exist
    """
    if await db.get(User, staff_data.user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with ID: {staff_data.user_id}",
        )

    if await db.get(Facility, staff_data.facility_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Facility not found with ID: {staff_data.facility_id}",
        )

    staff = Staff(**staff_data.model_dump(), status="active")
    db.add(staff)
    await db.commit()
    await db.refresh(staff, ["user"])

    return staff
