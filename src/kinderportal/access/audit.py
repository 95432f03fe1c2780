"""
Access Audit Trail

Records successful reads of sensitive resources (health records, documents,
child profiles) to the `access_logs` table.

Writes are fire-and-forget: each entry is inserted by a background task on
its own session, so a failed insert is logged and dropped without touching
the request transaction or the response. Pending writes are awaited by
`drain()` during shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import asdict, dataclass
from uuid import UUID

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from kinderportal.core.models import AccessLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AccessEntry:
    user_id: UUID
    action: str
    resource_type: str | None
    resource_id: int | None
    ip_address: str | None
    user_agent: str | None


class AccessAuditor:
    """Schedules access-log inserts without blocking the caller."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._pending: set[asyncio.Task[None]] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(self, entry: AccessEntry) -> None:
        """Queue an access-log insert. Never raises."""
        try:
            task = asyncio.get_running_loop().create_task(self._write(entry))
        except RuntimeError:
            logger.exception("Failed to schedule access log for %s", entry.action)
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, entry: AccessEntry) -> None:
        try:
            async with self._session_factory() as session:
                session.add(AccessLog(**asdict(entry)))
                await session.commit()
        except Exception:
            logger.exception(
                "Failed to log access: user=%s action=%s resource=%s/%s",
                entry.user_id,
                entry.action,
                entry.resource_type,
                entry.resource_id,
            )

    async def drain(self) -> None:
        """Wait for every queued write to finish."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


def entry_from_request(
    request: Request, user_id: UUID, resource_type: str, resource_id: int | None
) -> AccessEntry:
    """Build an entry from the request method and origin metadata."""
    client_host = request.client.host if request.client else None
    return AccessEntry(
        user_id=user_id,
        action=f"{request.method.lower()}_{resource_type}",
        resource_type=resource_type,
        resource_id=resource_id,
        ip_address=client_host,
        user_agent=request.headers.get("user-agent"),
    )


def get_auditor(request: Request) -> AccessAuditor:
    """FastAPI dependency returning the app's auditor."""
    auditor: AccessAuditor = request.app.state.auditor
    return auditor
