"""
FastAPI Access Dependencies

Order of checks for a child-scoped route:
1. session present           -> else 401 (no database access)
2. child id well-formed      -> else 400 (no database access)
3. user still exists         -> else 401
4. access gate               -> else 403/404 with the gate's reason
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

from collections.abc import AsyncGenerator, Awaitable, Callable
from uuid import UUID

from fastapi import Depends, HTTPException, Path, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from kinderportal.auth import session_user_id
from kinderportal.core.database import get_db
from kinderportal.core.models import Role, User
from kinderportal.core.validation import ValidationError, parse_child_id

from .audit import AccessAuditor, entry_from_request, get_auditor
from .gate import DenyReason, check_child_access
from .roles import coerce_role


def require_session(request: Request) -> UUID:
    """Reject requests without a signed-in session before any lookup."""
    user_id = session_user_id(request)
    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user_id


async def get_current_user(
    user_id: UUID = Depends(require_session), db: AsyncSession = Depends(get_db)
) -> User:
    """Load the signed-in user. A session for a deleted user counts as signed out."""
    user = await db.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    return user


def require_role(*allowed_roles: Role) -> Callable[..., Awaitable[User]]:
    """Build a dependency admitting only users whose current role is listed."""

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.current_role is None:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail=DenyReason.NO_ROLE.message
            )
        if coerce_role(user.current_role) not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=DenyReason.INSUFFICIENT_PERMISSIONS.message,
            )
        return user

    return dependency


def valid_child_id(
    child_id: str = Path(..., description="Numeric child identifier"),
    _: UUID = Depends(require_session),
) -> int:
    """Parse the child id path segment. Malformed ids never reach the database."""
    try:
        return parse_child_id(child_id)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid child ID"
        ) from e


async def ensure_child_access(db: AsyncSession, user: User, child_id: int) -> None:
    """Run the access gate and raise the matching HTTP error on denial."""
    decision = await check_child_access(db, user, child_id)
    if not decision.allowed:
        reason = decision.reason or DenyReason.INSUFFICIENT_PERMISSIONS
        raise HTTPException(status_code=reason.status_code, detail=reason.message)


async def authorized_child_id(
    child_id: int = Depends(valid_child_id),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> int:
    """Child id from the path, after the access gate has allowed it."""
    await ensure_child_access(db, user, child_id)
    return child_id


def audited_child_id(resource_type: str) -> Callable[..., AsyncGenerator[int, None]]:
    """Like `authorized_child_id`, and records the read once the handler succeeds.

    The access log entry is written only if the route handler returns
    normally; a handler error skips it.
    """

    async def dependency(
        request: Request,
        child_id: int = Depends(authorized_child_id),
        user: User = Depends(get_current_user),
        auditor: AccessAuditor = Depends(get_auditor),
    ) -> AsyncGenerator[int, None]:
        yield child_id
        auditor.record(entry_from_request(request, user.id, resource_type, child_id))

    return dependency
