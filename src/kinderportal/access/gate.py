"""
Child Access Gate

Decides whether an authenticated user may read or write a given child's
records. Decision list, first match wins:

1. network_owner / admin  -> allow
2. parent                 -> allow iff a ChildParent row links user and child
3. teacher                -> allow iff the user's Staff record is assigned to
                             the child's group
4. no role / other role   -> deny

The gate is a stateless predicate over three tables and performs at most
three point lookups. It never raises for a denial; callers translate the
returned decision into an HTTP response.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, assert_never

from sqlalchemy import Select, false, select
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.core.models import Child, ChildParent, Role, Staff, StaffGroupAssignment

from .roles import coerce_role

if TYPE_CHECKING:
    from kinderportal.core.models import User

logger = logging.getLogger(__name__)


class DenyReason(StrEnum):
    """Why access was refused. Each reason has a fixed status code and message."""

    NO_ROLE = "no_role"
    INSUFFICIENT_PERMISSIONS = "insufficient_permissions"
    NO_RELATIONSHIP = "no_relationship"
    CHILD_NOT_FOUND = "child_not_found"
    STAFF_RECORD_NOT_FOUND = "staff_record_not_found"
    NOT_ASSIGNED = "not_assigned"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_STATUS_CODES: dict[DenyReason, int] = {
    DenyReason.NO_ROLE: 403,
    DenyReason.INSUFFICIENT_PERMISSIONS: 403,
    DenyReason.NO_RELATIONSHIP: 403,
    DenyReason.CHILD_NOT_FOUND: 404,
    DenyReason.STAFF_RECORD_NOT_FOUND: 403,
    DenyReason.NOT_ASSIGNED: 403,
}

_MESSAGES: dict[DenyReason, str] = {
    DenyReason.NO_ROLE: "No role assigned",
    DenyReason.INSUFFICIENT_PERMISSIONS: "Insufficient permissions",
    DenyReason.NO_RELATIONSHIP: "You do not have access to this child",
    DenyReason.CHILD_NOT_FOUND: "Child not found or not assigned to a group",
    DenyReason.STAFF_RECORD_NOT_FOUND: "Staff record not found",
    DenyReason.NOT_ASSIGNED: "You do not have access to this child",
}


@dataclass(frozen=True, slots=True)
class AccessDecision:
    """Outcome of an access check."""

    allowed: bool
    reason: DenyReason | None = None

    @classmethod
    def allow(cls) -> AccessDecision:
        return cls(allowed=True)

    @classmethod
    def deny(cls, reason: DenyReason) -> AccessDecision:
        return cls(allowed=False, reason=reason)


ALLOW = AccessDecision.allow()


async def check_child_access(db: AsyncSession, user: User, child_id: int) -> AccessDecision:
    """Decide whether `user` may access the child with id `child_id`.

    Args:
        db: Request-scoped session
        user: Authenticated user (its `current_role` drives the decision)
        child_id: Already-validated child identifier

    Returns:
        AccessDecision; `reason` is set when access is denied
    """
    if user.current_role is None:
        decision = AccessDecision.deny(DenyReason.NO_ROLE)
    else:
        role = coerce_role(user.current_role)
        if role is None:
            decision = AccessDecision.deny(DenyReason.INSUFFICIENT_PERMISSIONS)
        else:
            decision = await _decide_for_role(db, user, role, child_id)

    if not decision.allowed:
        logger.info(
            "Denied child access: user=%s role=%s child=%s reason=%s",
            user.id,
            user.current_role,
            child_id,
            decision.reason,
        )
    return decision


async def _decide_for_role(
    db: AsyncSession, user: User, role: Role, child_id: int
) -> AccessDecision:
    match role:
        case Role.NETWORK_OWNER | Role.ADMIN:
            return ALLOW
        case Role.PARENT:
            return await _parent_decision(db, user, child_id)
        case Role.TEACHER:
            return await _teacher_decision(db, user, child_id)
        case _:
            assert_never(role)


async def _parent_decision(db: AsyncSession, user: User, child_id: int) -> AccessDecision:
    result = await db.execute(
        select(ChildParent.id)
        .where(ChildParent.child_id == child_id, ChildParent.parent_user_id == user.id)
        .limit(1)
    )
    if result.scalar_one_or_none() is None:
        return AccessDecision.deny(DenyReason.NO_RELATIONSHIP)
    return ALLOW


async def _teacher_decision(db: AsyncSession, user: User, child_id: int) -> AccessDecision:
    # child -> group
    result = await db.execute(select(Child.group_id).where(Child.id == child_id).limit(1))
    group_id = result.scalar_one_or_none()
    if group_id is None:
        return AccessDecision.deny(DenyReason.CHILD_NOT_FOUND)

    # user -> staff
    result = await db.execute(
        select(Staff.id).where(Staff.user_id == user.id).order_by(Staff.id).limit(1)
    )
    staff_id = result.scalar_one_or_none()
    if staff_id is None:
        return AccessDecision.deny(DenyReason.STAFF_RECORD_NOT_FOUND)

    # staff + group -> assignment
    result = await db.execute(
        select(StaffGroupAssignment.id)
        .where(
            StaffGroupAssignment.staff_id == staff_id,
            StaffGroupAssignment.group_id == group_id,
        )
        .limit(1)
    )
    if result.scalar_one_or_none() is None:
        return AccessDecision.deny(DenyReason.NOT_ASSIGNED)
    return ALLOW


def visible_child_ids(user: User) -> Select[tuple[int]]:
    """Select the ids of every child `user` may see.

    Applies the same rules as `check_child_access` to list endpoints, for use
    as `Model.child_id.in_(visible_child_ids(user))`.
    """
    role = coerce_role(user.current_role)
    if role is None:
        return select(Child.id).where(false())

    match role:
        case Role.NETWORK_OWNER | Role.ADMIN:
            return select(Child.id)
        case Role.PARENT:
            return select(ChildParent.child_id).where(ChildParent.parent_user_id == user.id)
        case Role.TEACHER:
            first_staff = (
                select(Staff.id)
                .where(Staff.user_id == user.id)
                .order_by(Staff.id)
                .limit(1)
                .scalar_subquery()
            )
            return (
                select(Child.id)
                .join(StaffGroupAssignment, StaffGroupAssignment.group_id == Child.group_id)
                .where(StaffGroupAssignment.staff_id == first_staff)
            )
        case _:
            assert_never(role)
