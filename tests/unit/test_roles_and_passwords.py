"""
Unit tests for role coercion and password hashing.
"""

import pytest

from kinderportal.access import MANAGEMENT_ROLES, STAFF_ROLES, coerce_role
from kinderportal.auth import hash_password, verify_password
from kinderportal.core.models import Role


class TestCoerceRole:
    @pytest.mark.parametrize("role", list(Role))
    def test_enum_passes_through(self, role):
        assert coerce_role(role) is role

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("parent", Role.PARENT),
            ("teacher", Role.TEACHER),
            ("admin", Role.ADMIN),
            ("network_owner", Role.NETWORK_OWNER),
        ],
    )
    def test_stored_strings(self, raw, expected):
        assert coerce_role(raw) is expected

    @pytest.mark.parametrize("raw", [None, "", "Parent", "janitor", 3])
    def test_unknown_values(self, raw):
        assert coerce_role(raw) is None


class TestRoleGroups:
    def test_parents_are_not_staff(self):
        assert Role.PARENT not in STAFF_ROLES

    def test_management_is_subset_of_staff(self):
        assert set(MANAGEMENT_ROLES) <= set(STAFF_ROLES)
        assert Role.TEACHER not in MANAGEMENT_ROLES


class TestPasswords:
    def test_round_trip(self):
        password_hash = hash_password("demo123", rounds=4)

        assert password_hash != "demo123"
        assert verify_password("demo123", password_hash) is True
        assert verify_password("demo124", password_hash) is False

    def test_salted(self):
        assert hash_password("demo123", rounds=4) != hash_password("demo123", rounds=4)

    @pytest.mark.parametrize("stored", [None, "", "not-a-bcrypt-hash"])
    def test_unusable_stored_hash(self, stored):
        assert verify_password("demo123", stored) is False
