"""
Dashboard API Endpoints

Cross-child lists for the dashboard. Every query is restricted to the
children the current user may see. Per-enrollment records go through the
access gate for the enrolled child.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import ensure_child_access, get_current_user, visible_child_ids
from kinderportal.core.database import get_db
from kinderportal.core.models import (
    AttendanceRecord,
    DailyActivity,
    ExtraClassAttendance,
    ExtraClassEnrollment,
    ExtraClassPerformance,
    User,
)
from kinderportal.core.schemas import (
    AttendanceSchema,
    DailyActivitySchema,
    EnrollmentSchema,
    ExtraClassAttendanceSchema,
    ExtraClassPerformanceSchema,
)
from kinderportal.core.validation import parse_iso_date

router = APIRouter()

RECENT_ATTENDANCE_LIMIT = 30


@router.get("/attendance", response_model=list[AttendanceSchema])
async def recent_attendance(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[AttendanceRecord]:
    """Latest attendance records across the user's children."""
    result = await db.execute(
        select(AttendanceRecord)
        .where(AttendanceRecord.child_id.in_(visible_child_ids(user)))
        .order_by(AttendanceRecord.date.desc(), AttendanceRecord.id.desc())
        .limit(RECENT_ATTENDANCE_LIMIT)
    )
    return list(result.scalars().all())


@router.get("/activities", response_model=list[DailyActivitySchema])
async def activities_on_date(
    day: str | None = Query(None, alias="date", description="YYYY-MM-DD"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[DailyActivity]:
    """Activities of every visible child on one day, in time order."""
    on_date = parse_iso_date(day)
    if on_date is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Date parameter is required"
        )

    result = await db.execute(
        select(DailyActivity)
        .where(
            DailyActivity.date == on_date,
            DailyActivity.child_id.in_(visible_child_ids(user)),
        )
        .order_by(DailyActivity.time)
    )
    return list(result.scalars().all())


@router.get("/extra-classes/enrollments", response_model=list[EnrollmentSchema])
async def list_enrollments(
    user: User = Depends(get_current_user), db: AsyncSession = Depends(get_db)
) -> list[ExtraClassEnrollment]:
    """Extra-class enrollments of the user's children."""
    result = await db.execute(
        select(ExtraClassEnrollment)
        .where(ExtraClassEnrollment.child_id.in_(visible_child_ids(user)))
        .order_by(ExtraClassEnrollment.enrolled_at.desc())
    )
    return list(result.scalars().all())


async def _accessible_enrollment(
    db: AsyncSession, user: User, enrollment_id: int
) -> ExtraClassEnrollment:
    """Load an enrollment and run the access gate on its child."""
    enrollment = await db.get(ExtraClassEnrollment, enrollment_id)
    if enrollment is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Enrollment not found with ID: {enrollment_id}",
        )

    await ensure_child_access(db, user, enrollment.child_id)
    return enrollment


@router.get(
    "/enrollments/{enrollment_id}/attendance", response_model=list[ExtraClassAttendanceSchema]
)
async def enrollment_attendance(
    enrollment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[ExtraClassAttendance]:
    """Lesson attendance for one enrollment, newest first."""
    await _accessible_enrollment(db, user, enrollment_id)

    result = await db.execute(
        select(ExtraClassAttendance)
        .where(ExtraClassAttendance.enrollment_id == enrollment_id)
        .order_by(ExtraClassAttendance.date.desc(), ExtraClassAttendance.id.desc())
    )
    return list(result.scalars().all())


@router.get(
    "/enrollments/{enrollment_id}/performance", response_model=list[ExtraClassPerformanceSchema]
)
async def enrollment_performance(
    enrollment_id: int,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[ExtraClassPerformance]:
    """Instructor assessments for one enrollment, newest first."""
    await _accessible_enrollment(db, user, enrollment_id)

    result = await db.execute(
        select(ExtraClassPerformance)
        .where(ExtraClassPerformance.enrollment_id == enrollment_id)
        .order_by(ExtraClassPerformance.date.desc(), ExtraClassPerformance.id.desc())
    )
    return list(result.scalars().all())
