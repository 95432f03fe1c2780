"""
Children API Endpoints

Everything under `/children/{child_id}` passes through the access gate
before the handler touches the child's data. Health, document and profile
reads are recorded in the access log.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from datetime import UTC, date, datetime

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kinderportal.access import (
    MANAGEMENT_ROLES,
    STAFF_ROLES,
    audited_child_id,
    authorized_child_id,
    get_current_user,
    require_role,
    visible_child_ids,
)
from kinderportal.core.database import get_db
from kinderportal.core.models import (
    AttendanceRecord,
    Child,
    ChildAllergy,
    ChildDocument,
    ChildHealth,
    ChildMedication,
    ChildParent,
    DailyActivity,
    ExtraClass,
    ExtraClassEnrollment,
    Group,
    Invoice,
    User,
)
from kinderportal.core.schemas import (
    AllergySchema,
    AttendanceMark,
    AttendanceSchema,
    ChildCreate,
    ChildEnrollmentSchema,
    ChildOverviewSchema,
    ChildParentCreate,
    ChildParentSchema,
    ChildSchema,
    DailyActivityCreate,
    DailyActivitySchema,
    DocumentSchema,
    EnrollmentSchema,
    ExtraClassSchema,
    HealthSchema,
    InvoiceSchema,
    MedicationSchema,
)
from kinderportal.core.validation import parse_iso_date, validate_date_range

router = APIRouter()


@router.get("/", response_model=list[ChildOverviewSchema])
async def list_children(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[ChildOverviewSchema]:
    """List the children visible to the current user.

    Each child comes with allergies, active medications and documents.
    """
    result = await db.execute(
        select(Child)
        .where(Child.id.in_(visible_child_ids(user)))
        .options(
            selectinload(Child.allergies),
            selectinload(Child.medications),
            selectinload(Child.documents),
        )
        .order_by(Child.last_name, Child.first_name)
    )

    overviews = []
    for child in result.scalars().all():
        overview = ChildOverviewSchema.model_validate(child)
        overview.medications = [m for m in overview.medications if m.is_active]
        overviews.append(overview)

    return overviews


@router.post(
    "/",
    response_model=ChildSchema,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*MANAGEMENT_ROLES))],
)
async def create_child(child_data: ChildCreate, db: AsyncSession = Depends(get_db)) -> Child:
    """Enroll a child, optionally placing them in a group."""
    if child_data.group_id is not None and await db.get(Group, child_data.group_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Group not found with ID: {child_data.group_id}",
        )

    child = Child(**child_data.model_dump(), status="active")
    db.add(child)
    await db.commit()
    await db.refresh(child)

    return child


@router.get("/{child_id}", response_model=ChildSchema)
async def get_child(
    child_id: int = Depends(audited_child_id("child")), db: AsyncSession = Depends(get_db)
) -> Child:
    """Get a child's profile."""
    child = await db.get(Child, child_id)

    if not child:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Child not found")

    return child


@router.post(
    "/{child_id}/parents",
    response_model=ChildParentSchema,
    status_code=status.HTTP_201_CREATED,
)
async def link_parent(
    link_data: ChildParentCreate,
    child_id: int = Depends(authorized_child_id),
    _: User = Depends(require_role(*MANAGEMENT_ROLES)),
    db: AsyncSession = Depends(get_db),
) -> ChildParent:
    """Record that a user is a parent/guardian of this child."""
    if await db.get(Child, child_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Child not found")

    if await db.get(User, link_data.parent_user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User not found with ID: {link_data.parent_user_id}",
        )

    result = await db.execute(
        select(ChildParent).where(
            ChildParent.child_id == child_id,
            ChildParent.parent_user_id == link_data.parent_user_id,
        )
    )
    if result.scalar_one_or_none():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Parent is already linked to this child",
        )

    link = ChildParent(child_id=child_id, **link_data.model_dump())
    db.add(link)
    await db.commit()
    await db.refresh(link)

    return link


# ============================================================================
# DAILY RECORDS
# ============================================================================


@router.get("/{child_id}/activities", response_model=list[DailyActivitySchema])
async def list_child_activities(
    child_id: int = Depends(authorized_child_id),
    day: str | None = Query(None, alias="date", description="YYYY-MM-DD, defaults to today"),
    db: AsyncSession = Depends(get_db),
) -> list[DailyActivity]:
    """List a child's activities for one day, in time order."""
    on_date = parse_iso_date(day) or datetime.now(UTC).date()

    result = await db.execute(
        select(DailyActivity)
        .where(DailyActivity.child_id == child_id, DailyActivity.date == on_date)
        .order_by(DailyActivity.time)
    )
    return list(result.scalars().all())


@router.post(
    "/{child_id}/activities",
    response_model=DailyActivitySchema,
    status_code=status.HTTP_201_CREATED,
)
async def record_activity(
    activity_data: DailyActivityCreate,
    child_id: int = Depends(authorized_child_id),
    staff_user: User = Depends(require_role(*STAFF_ROLES)),
    db: AsyncSession = Depends(get_db),
) -> DailyActivity:
    """Record a sleep, meal, activity, medication or mood entry for a child."""
    activity = DailyActivity(
        child_id=child_id,
        date=activity_data.date or activity_data.time.date(),
        activity_type=activity_data.activity_type,
        time=activity_data.time,
        duration=activity_data.duration,
        appetite=activity_data.appetite,
        description=activity_data.description,
        photo_urls=activity_data.photo_urls,
        recorded_by=staff_user.id,
    )

    db.add(activity)
    await db.commit()
    await db.refresh(activity)

    return activity


@router.get("/{child_id}/attendance", response_model=list[AttendanceSchema])
async def list_child_attendance(
    child_id: int = Depends(authorized_child_id),
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    db: AsyncSession = Depends(get_db),
) -> list[AttendanceRecord]:
    """List a child's attendance, newest first, optionally within a date range."""
    date_range = validate_date_range(
        parse_iso_date(start_date, "startDate"), parse_iso_date(end_date, "endDate")
    )

    query = select(AttendanceRecord).where(AttendanceRecord.child_id == child_id)
    if date_range:
        query = query.where(AttendanceRecord.date.between(*date_range))

    result = await db.execute(query.order_by(AttendanceRecord.date.desc()))
    return list(result.scalars().all())


def _marked_at(mark: AttendanceMark) -> datetime:
    """The mark's time in UTC; naive times are taken as UTC, a missing one is now."""
    if mark.time is None:
        return datetime.now(UTC)
    if mark.time.tzinfo is None:
        return mark.time.replace(tzinfo=UTC)
    return mark.time.astimezone(UTC)


async def _todays_attendance(db: AsyncSession, child_id: int, today: date) -> AttendanceRecord:
    result = await db.execute(
        select(AttendanceRecord).where(
            AttendanceRecord.child_id == child_id, AttendanceRecord.date == today
        )
    )
    record = result.scalar_one_or_none()
    if record is None:
        record = AttendanceRecord(child_id=child_id, date=today)
        db.add(record)
    return record


@router.post("/{child_id}/attendance/check-in", response_model=AttendanceSchema)
async def check_in(
    mark: AttendanceMark,
    child_id: int = Depends(authorized_child_id),
    staff_user: User = Depends(require_role(*STAFF_ROLES)),
    db: AsyncSession = Depends(get_db),
) -> AttendanceRecord:
    """Mark a child as arrived. Creates today's attendance row if needed."""
    when = _marked_at(mark)
    record = await _todays_attendance(db, child_id, when.date())

    if record.check_in_time is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Child is already checked in today"
        )

    record.check_in_time = when
    record.checked_in_by = staff_user.id
    if mark.notes:
        record.notes = mark.notes

    await db.commit()
    await db.refresh(record)

    return record


@router.post("/{child_id}/attendance/check-out", response_model=AttendanceSchema)
async def check_out(
    mark: AttendanceMark,
    child_id: int = Depends(authorized_child_id),
    staff_user: User = Depends(require_role(*STAFF_ROLES)),
    db: AsyncSession = Depends(get_db),
) -> AttendanceRecord:
    """Mark a child as picked up. The child must have been checked in."""
    when = _marked_at(mark)
    record = await _todays_attendance(db, child_id, when.date())

    if record.check_in_time is None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Child has not been checked in today"
        )
    if record.check_out_time is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="Child is already checked out today"
        )

    record.check_out_time = when
    record.checked_out_by = staff_user.id
    if mark.notes:
        record.notes = mark.notes

    await db.commit()
    await db.refresh(record)

    return record


# ============================================================================
# SENSITIVE RECORDS
# ============================================================================


@router.get("/{child_id}/health", response_model=HealthSchema)
async def get_child_health(
    child_id: int = Depends(audited_child_id("health")), db: AsyncSession = Depends(get_db)
) -> HealthSchema:
    """Health record with allergies and all medications.

    Returns a record with null fields when no health record exists yet.
    """
    result = await db.execute(select(ChildHealth).where(ChildHealth.child_id == child_id))
    health = result.scalar_one_or_none()

    allergies = await db.execute(select(ChildAllergy).where(ChildAllergy.child_id == child_id))
    medications = await db.execute(
        select(ChildMedication).where(ChildMedication.child_id == child_id)
    )

    base = HealthSchema.model_validate(health) if health else HealthSchema(child_id=child_id)
    return base.model_copy(
        update={
            "allergies": [AllergySchema.model_validate(a) for a in allergies.scalars()],
            "medications": [MedicationSchema.model_validate(m) for m in medications.scalars()],
        }
    )


@router.get("/{child_id}/documents", response_model=list[DocumentSchema])
async def list_child_documents(
    child_id: int = Depends(audited_child_id("documents")), db: AsyncSession = Depends(get_db)
) -> list[ChildDocument]:
    """List a child's documents, newest first."""
    result = await db.execute(
        select(ChildDocument)
        .where(ChildDocument.child_id == child_id)
        .order_by(ChildDocument.created_at.desc(), ChildDocument.id.desc())
    )
    return list(result.scalars().all())


# ============================================================================
# BILLING & EXTRA CLASSES
# ============================================================================


@router.get("/{child_id}/invoices", response_model=list[InvoiceSchema])
async def list_child_invoices(
    child_id: int = Depends(authorized_child_id), db: AsyncSession = Depends(get_db)
) -> list[Invoice]:
    """List a child's invoices, newest first."""
    result = await db.execute(
        select(Invoice)
        .where(Invoice.child_id == child_id)
        .order_by(Invoice.created_at.desc(), Invoice.id.desc())
    )
    return list(result.scalars().all())


@router.get("/{child_id}/extra-classes", response_model=list[ChildEnrollmentSchema])
async def list_child_extra_classes(
    child_id: int = Depends(authorized_child_id), db: AsyncSession = Depends(get_db)
) -> list[ChildEnrollmentSchema]:
    """List a child's active extra-class enrollments with the class details."""
    result = await db.execute(
        select(ExtraClassEnrollment, ExtraClass)
        .outerjoin(ExtraClass, ExtraClassEnrollment.extra_class_id == ExtraClass.id)
        .where(ExtraClassEnrollment.child_id == child_id, ExtraClassEnrollment.is_active.is_(True))
    )

    return [
        ChildEnrollmentSchema(
            enrollment=EnrollmentSchema.model_validate(enrollment),
            extra_class=ExtraClassSchema.model_validate(extra_class) if extra_class else None,
        )
        for enrollment, extra_class in result.all()
    ]
