"""
Unit tests for the access audit trail.
"""

import logging
from types import SimpleNamespace
from unittest.mock import MagicMock
from uuid import uuid4

from sqlalchemy import select

from kinderportal.access import AccessAuditor, AccessEntry
from kinderportal.access.audit import entry_from_request
from kinderportal.core.models import AccessLog, Role


def _entry(user_id, resource_type="health", resource_id=1) -> AccessEntry:
    return AccessEntry(
        user_id=user_id,
        action=f"get_{resource_type}",
        resource_type=resource_type,
        resource_id=resource_id,
        ip_address="127.0.0.1",
        user_agent="pytest",
    )


class TestAccessAuditor:
    """Fire-and-forget writes to access_logs."""

    async def test_record_writes_row(self, database, db_session, make_user):
        user = await make_user(Role.PARENT)
        auditor = AccessAuditor(database.session_factory)

        auditor.record(_entry(user.id, resource_id=7))
        await auditor.drain()

        result = await db_session.execute(select(AccessLog))
        log = result.scalar_one()
        assert log.user_id == user.id
        assert log.action == "get_health"
        assert log.resource_type == "health"
        assert log.resource_id == 7
        assert log.ip_address == "127.0.0.1"
        assert log.user_agent == "pytest"
        assert log.timestamp is not None

    async def test_record_does_not_block(self, database, make_user):
        """record() returns before the insert runs."""
        user = await make_user(Role.PARENT)
        auditor = AccessAuditor(database.session_factory)

        auditor.record(_entry(user.id))

        assert auditor.pending == 1
        await auditor.drain()
        assert auditor.pending == 0

    async def test_failed_write_is_logged_and_swallowed(self, caplog):
        """A broken session factory never raises out of the auditor."""
        factory = MagicMock(side_effect=RuntimeError("database is gone"))
        auditor = AccessAuditor(factory)

        with caplog.at_level(logging.ERROR, logger="kinderportal.access.audit"):
            auditor.record(_entry(uuid4()))
            await auditor.drain()

        assert "Failed to log access" in caplog.text
        assert "database is gone" in caplog.text
        assert auditor.pending == 0

    async def test_drain_with_nothing_pending(self, database):
        auditor = AccessAuditor(database.session_factory)

        await auditor.drain()

        assert auditor.pending == 0


class TestEntryFromRequest:
    def test_builds_action_from_method_and_resource(self):
        request = SimpleNamespace(
            method="GET",
            client=SimpleNamespace(host="10.0.0.5"),
            headers={"user-agent": "Mozilla/5.0"},
        )
        user_id = uuid4()

        entry = entry_from_request(request, user_id, "documents", 12)

        assert entry == AccessEntry(
            user_id=user_id,
            action="get_documents",
            resource_type="documents",
            resource_id=12,
            ip_address="10.0.0.5",
            user_agent="Mozilla/5.0",
        )

    def test_missing_client_and_agent(self):
        request = SimpleNamespace(method="GET", client=None, headers={})

        entry = entry_from_request(request, uuid4(), "child", 3)

        assert entry.ip_address is None
        assert entry.user_agent is None
