"""
Unit Tests for SQLAlchemy Models

Tests for model defaults and mixins.
"""

from datetime import date, datetime
from uuid import UUID, uuid4

from kinderportal.core.models import (
    AccessLog,
    Child,
    ChildParent,
    Role,
    User,
)


def test_uuid_primary_key_mixin():
    """Users get a UUID as soon as they are constructed."""
    user = User(email="aliya@demo.kz")

    assert isinstance(user.id, UUID)
    assert len(str(user.id)) == 36


def test_explicit_uuid_kept():
    user_id = uuid4()
    user = User(id=user_id, email="aliya@demo.kz")

    assert user.id == user_id


def test_timestamp_mixin():
    """Test TimestampMixin sets created_at and updated_at."""
    child = Child(first_name="Ainur", last_name="Seitova", date_of_birth=date(2019, 3, 15))

    # Timestamps should be set (in memory, not DB default)
    assert isinstance(child.created_at, datetime)
    assert isinstance(child.updated_at, datetime)
    assert child.created_at.tzinfo is not None


def test_created_at_only_mixin():
    link = ChildParent(child_id=1, parent_user_id=uuid4())

    assert isinstance(link.created_at, datetime)
    assert not hasattr(link, "updated_at")


def test_user_without_role():
    user = User(email="new@demo.kz")

    assert user.current_role is None
    assert user.role_assignments == []


def test_user_role_is_enum():
    user = User(email="teacher@demo.kz", current_role=Role.TEACHER)

    assert user.current_role == "teacher"


def test_access_log_timestamp_applied_on_insert():
    """AccessLog uses a column default rather than the mixin listeners."""
    entry = AccessLog(user_id=uuid4(), action="get_health", resource_type="health", resource_id=1)

    assert entry.action == "get_health"
    assert entry.timestamp is None
