"""
Unit tests for the child access gate.

Exercises check_child_access and visible_child_ids against a real database.
"""

import logging
from types import SimpleNamespace
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.access import AccessDecision, DenyReason, check_child_access, visible_child_ids
from kinderportal.core.models import Child, Role

# ============================================================================
# Deny reasons
# ============================================================================


class TestDenyReason:
    """Status codes and messages attached to each reason."""

    @pytest.mark.parametrize(
        "reason,status_code,message",
        [
            (DenyReason.NO_ROLE, 403, "No role assigned"),
            (DenyReason.INSUFFICIENT_PERMISSIONS, 403, "Insufficient permissions"),
            (DenyReason.NO_RELATIONSHIP, 403, "You do not have access to this child"),
            (DenyReason.CHILD_NOT_FOUND, 404, "Child not found or not assigned to a group"),
            (DenyReason.STAFF_RECORD_NOT_FOUND, 403, "Staff record not found"),
            (DenyReason.NOT_ASSIGNED, 403, "You do not have access to this child"),
        ],
    )
    def test_reason_maps_to_response(self, reason, status_code, message):
        assert reason.status_code == status_code
        assert reason.message == message

    def test_allow_has_no_reason(self):
        decision = AccessDecision.allow()
        assert decision.allowed is True
        assert decision.reason is None

    def test_deny_carries_reason(self):
        decision = AccessDecision.deny(DenyReason.NOT_ASSIGNED)
        assert decision.allowed is False
        assert decision.reason is DenyReason.NOT_ASSIGNED


# ============================================================================
# Unrestricted roles
# ============================================================================


class TestManagementAccess:
    """Admins and network owners see every child."""

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.NETWORK_OWNER])
    async def test_allowed_for_any_child(self, db_session, make_user, make_group, make_child, role):
        user = await make_user(role)
        child = await make_child(await make_group())

        decision = await check_child_access(db_session, user, child.id)

        assert decision.allowed is True

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.NETWORK_OWNER])
    async def test_allowed_without_lookups(self, db_session, make_user, role):
        """The decision does not depend on the child existing."""
        user = await make_user(role)

        decision = await check_child_access(db_session, user, 999_999)

        assert decision.allowed is True


# ============================================================================
# Parents
# ============================================================================


class TestParentAccess:
    """Parents see exactly the children they are linked to."""

    async def test_linked_child_allowed(self, db_session, make_user, make_child, link_parent):
        parent = await make_user(Role.PARENT)
        child = await make_child()
        await link_parent(parent, child)

        decision = await check_child_access(db_session, parent, child.id)

        assert decision == AccessDecision.allow()

    async def test_other_child_denied(self, db_session, make_user, make_child, link_parent):
        """Parent A linked to child 1 is refused child 2."""
        parent = await make_user(Role.PARENT)
        own = await make_child(first_name="Own")
        other = await make_child(first_name="Other")
        await link_parent(parent, own)

        assert (await check_child_access(db_session, parent, own.id)).allowed is True

        decision = await check_child_access(db_session, parent, other.id)

        assert decision.allowed is False
        assert decision.reason is DenyReason.NO_RELATIONSHIP

    async def test_nonexistent_child_is_relationship_denial(self, db_session, make_user):
        """A parent cannot tell a missing child from someone else's."""
        parent = await make_user(Role.PARENT)

        decision = await check_child_access(db_session, parent, 424242)

        assert decision.reason is DenyReason.NO_RELATIONSHIP

    async def test_link_of_another_parent_does_not_count(
        self, db_session, make_user, make_child, link_parent
    ):
        parent = await make_user(Role.PARENT)
        other_parent = await make_user(Role.PARENT)
        child = await make_child()
        await link_parent(other_parent, child)

        decision = await check_child_access(db_session, parent, child.id)

        assert decision.reason is DenyReason.NO_RELATIONSHIP


# ============================================================================
# Teachers
# ============================================================================


class TestTeacherAccess:
    """Teachers see children of the groups their staff record is assigned to."""

    async def test_child_in_assigned_group_allowed(
        self, db_session, make_user, make_group, make_child, make_staff
    ):
        teacher = await make_user(Role.TEACHER)
        group_g = await make_group("G")
        group_h = await make_group("H")
        await make_staff(teacher, group_g)
        child_in_g = await make_child(group_g)
        child_in_h = await make_child(group_h)

        assert (await check_child_access(db_session, teacher, child_in_g.id)).allowed is True

        decision = await check_child_access(db_session, teacher, child_in_h.id)
        assert decision.allowed is False
        assert decision.reason is DenyReason.NOT_ASSIGNED

    async def test_child_without_group(
        self, db_session, make_user, make_group, make_child, make_staff
    ):
        teacher = await make_user(Role.TEACHER)
        await make_staff(teacher, await make_group())
        child = await make_child(None)

        decision = await check_child_access(db_session, teacher, child.id)

        assert decision.reason is DenyReason.CHILD_NOT_FOUND
        assert decision.reason.status_code == 404

    async def test_nonexistent_child(self, db_session, make_user, make_group, make_staff):
        teacher = await make_user(Role.TEACHER)
        await make_staff(teacher, await make_group())

        decision = await check_child_access(db_session, teacher, 777)

        assert decision.reason is DenyReason.CHILD_NOT_FOUND

    async def test_teacher_without_staff_record(
        self, db_session, make_user, make_group, make_child
    ):
        teacher = await make_user(Role.TEACHER)
        child = await make_child(await make_group())

        decision = await check_child_access(db_session, teacher, child.id)

        assert decision.reason is DenyReason.STAFF_RECORD_NOT_FOUND

    async def test_only_first_staff_record_is_used(
        self, db_session, make_user, make_group, make_child, make_staff
    ):
        """With several staff records, assignments of later ones are ignored."""
        teacher = await make_user(Role.TEACHER)
        group_a = await make_group("A")
        group_b = await make_group("B")
        await make_staff(teacher, group_a)
        await make_staff(teacher, group_b)
        child_b = await make_child(group_b)

        decision = await check_child_access(db_session, teacher, child_b.id)

        assert decision.reason is DenyReason.NOT_ASSIGNED


# ============================================================================
# Missing and unknown roles
# ============================================================================


class TestRolelessAccess:
    async def test_no_role_denied(self, db_session, make_user, make_child):
        user = await make_user(None)
        child = await make_child()

        decision = await check_child_access(db_session, user, child.id)

        assert decision.allowed is False
        assert decision.reason is DenyReason.NO_ROLE

    async def test_unknown_role_denied(self, db_session, make_child):
        child = await make_child()
        user = SimpleNamespace(id=uuid4(), current_role="janitor")

        decision = await check_child_access(db_session, user, child.id)

        assert decision.allowed is False
        assert decision.reason is DenyReason.INSUFFICIENT_PERMISSIONS

    async def test_denial_logged_at_info(self, db_session, make_user, make_child, caplog):
        user = await make_user(Role.PARENT)
        child = await make_child()

        with caplog.at_level(logging.INFO, logger="kinderportal.access.gate"):
            await check_child_access(db_session, user, child.id)

        assert "Denied child access" in caplog.text
        assert "no_relationship" in caplog.text


class TestIdempotence:
    """Repeated checks with unchanged data give the same decision."""

    async def test_repeated_checks_agree(
        self, db_session, make_user, make_group, make_child, make_staff, link_parent
    ):
        group = await make_group()
        teacher = await make_user(Role.TEACHER)
        parent = await make_user(Role.PARENT)
        await make_staff(teacher, group)
        child = await make_child(group)
        stranger_child = await make_child(None)
        await link_parent(parent, child)

        for user in (teacher, parent):
            for child_id in (child.id, stranger_child.id):
                first = await check_child_access(db_session, user, child_id)
                second = await check_child_access(db_session, user, child_id)
                assert first == second


# ============================================================================
# Scoped visibility
# ============================================================================


async def _visible(db: AsyncSession, user) -> set[int]:
    result = await db.execute(visible_child_ids(user))
    return set(result.scalars().all())


class TestVisibleChildIds:
    """List endpoints see the same children the gate would allow."""

    async def test_parent_sees_linked_children(
        self, db_session, make_user, make_child, link_parent
    ):
        parent = await make_user(Role.PARENT)
        own = await make_child()
        await make_child()
        await link_parent(parent, own)

        assert await _visible(db_session, parent) == {own.id}

    async def test_teacher_sees_assigned_groups(
        self, db_session, make_user, make_group, make_child, make_staff
    ):
        teacher = await make_user(Role.TEACHER)
        group_g = await make_group("G")
        group_h = await make_group("H")
        await make_staff(teacher, group_g)
        in_g = await make_child(group_g)
        await make_child(group_h)
        await make_child(None)

        assert await _visible(db_session, teacher) == {in_g.id}

    async def test_teacher_without_staff_sees_nothing(
        self, db_session, make_user, make_group, make_child
    ):
        teacher = await make_user(Role.TEACHER)
        await make_child(await make_group())

        assert await _visible(db_session, teacher) == set()

    @pytest.mark.parametrize("role", [Role.ADMIN, Role.NETWORK_OWNER])
    async def test_management_sees_everyone(
        self, db_session, make_user, make_group, make_child, role
    ):
        user = await make_user(role)
        children = [await make_child(await make_group()), await make_child(None)]

        assert await _visible(db_session, user) == {c.id for c in children}

    async def test_roleless_sees_nothing(self, db_session, make_user, make_child):
        user = await make_user(None)
        await make_child()

        assert await _visible(db_session, user) == set()

    async def test_agrees_with_gate(
        self, db_session, make_user, make_group, make_child, make_staff, link_parent
    ):
        group = await make_group()
        teacher = await make_user(Role.TEACHER)
        parent = await make_user(Role.PARENT)
        await make_staff(teacher, group)
        children: list[Child] = [await make_child(group), await make_child(None)]
        await link_parent(parent, children[1])

        for user in (teacher, parent):
            visible = await _visible(db_session, user)
            for child in children:
                decision = await check_child_access(db_session, user, child.id)
                assert decision.allowed == (child.id in visible)
