"""
Organizational Structure API Endpoints

Organizations own facilities, facilities own groups, and staff are assigned
to groups. Any signed-in user may list; only admins and network owners may
change the structure.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import MANAGEMENT_ROLES, require_role, require_session
from kinderportal.core.database import get_db
from kinderportal.core.models import Facility, Group, Organization, Staff, StaffGroupAssignment
from kinderportal.core.schemas import (
    FacilityCreate,
    FacilitySchema,
    GroupCreate,
    GroupSchema,
    OrganizationCreate,
    OrganizationSchema,
    StaffAssignmentCreate,
    StaffAssignmentSchema,
)

router = APIRouter()

can_manage = Depends(require_role(*MANAGEMENT_ROLES))


# ============================================================================
# ORGANIZATIONS
# ============================================================================


@router.get(
    "/organizations",
    response_model=list[OrganizationSchema],
    dependencies=[Depends(require_session)],
)
async def list_organizations(db: AsyncSession = Depends(get_db)) -> list[Organization]:
    result = await db.execute(select(Organization).order_by(Organization.name))
    return list(result.scalars().all())


@router.post(
    "/organizations",
    response_model=OrganizationSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
async def create_organization(
    org_data: OrganizationCreate, db: AsyncSession = Depends(get_db)
) -> Organization:
    """Create a kindergarten network."""
    organization = Organization(**org_data.model_dump())
    db.add(organization)
    await db.commit()
    await db.refresh(organization)

    return organization


# ============================================================================
# FACILITIES
# ============================================================================


@router.get(
    "/facilities",
    response_model=list[FacilitySchema],
    dependencies=[Depends(require_session)],
)
async def list_facilities(
    organization_id: int | None = Query(None, ge=1), db: AsyncSession = Depends(get_db)
) -> list[Facility]:
    """List facilities, optionally only those of one organization."""
    query = select(Facility)
    if organization_id is not None:
        query = query.where(Facility.organization_id == organization_id)

    result = await db.execute(query.order_by(Facility.name))
    return list(result.scalars().all())


@router.post(
    "/facilities",
    response_model=FacilitySchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
async def create_facility(
    facility_data: FacilityCreate, db: AsyncSession = Depends(get_db)
) -> Facility:
    """Create a facility within an organization."""
    if await db.get(Organization, facility_data.organization_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Organization not found with ID: {facility_data.organization_id}",
        )

    facility = Facility(**facility_data.model_dump())
    db.add(facility)
    await db.commit()
    await db.refresh(facility)

    return facility


# ============================================================================
# GROUPS
# ============================================================================


@router.get(
    "/groups",
    response_model=list[GroupSchema],
    dependencies=[Depends(require_session)],
)
async def list_groups(
    facility_id: int | None = Query(None, ge=1), db: AsyncSession = Depends(get_db)
) -> list[Group]:
    """List groups, optionally only those of one facility."""
    query = select(Group)
    if facility_id is not None:
        query = query.where(Group.facility_id == facility_id)

    result = await db.execute(query.order_by(Group.name))
    return list(result.scalars().all())


@router.post(
    "/groups",
    response_model=GroupSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
async def create_group(group_data: GroupCreate, db: AsyncSession = Depends(get_db)) -> Group:
    """Create a group within a facility."""
    if await db.get(Facility, group_data.facility_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Facility not found with ID: {group_data.facility_id}",
        )

    group = Group(**group_data.model_dump())
    db.add(group)
    await db.commit()
    await db.refresh(group)

    return group


@router.post(
    "/groups/{group_id}/staff",
    response_model=StaffAssignmentSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[can_manage],
)
async def assign_staff(
    group_id: int,
    assignment_data: StaffAssignmentCreate,
    db: AsyncSession = Depends(get_db),
) -> StaffGroupAssignment:
    """
    Assign a staff member to a group.

    Teachers can only see children of groups they are assigned to.

    Raises:
        HTTPException 404: group or staff member does not exist
        HTTPException 409: staff member already assigned to this group
    """
    if await db.get(Group, group_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Group not found with ID: {group_id}"
        )

    if await db.get(Staff, assignment_data.staff_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Staff member not found with ID: {assignment_data.staff_id}",
        )

    result = await db.execute(
        select(StaffGroupAssignment).where(
            StaffGroupAssignment.staff_id == assignment_data.staff_id,
            StaffGroupAssignment.group_id == group_id,
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Staff member is already assigned to this group",
        )

    assignment = StaffGroupAssignment(group_id=group_id, **assignment_data.model_dump())
    db.add(assignment)
    await db.commit()
    await db.refresh(assignment)

    return assignment
