"""
Auth API Endpoints

Password login backed by a signed session cookie, plus role switching for
users who hold more than one role.
"""
# ruff: noqa: B008 - FastAPI Depends in function defaults is standard pattern

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from kinderportal.access import get_current_user, require_session
from kinderportal.auth import end_session, start_session, verify_password
from kinderportal.core.database import get_db
from kinderportal.core.models import User, UserRole
from kinderportal.core.schemas import LoginRequest, RoleSwitchRequest, UserSchema
from kinderportal.core.validation import ValidationError, normalize_email

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_CREDENTIALS = "Invalid email or password"


async def _load_user(db: AsyncSession, **criteria: object) -> User | None:
    result = await db.execute(
        select(User)
        .filter_by(**criteria)
        .options(selectinload(User.role_assignments))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


@router.post("/login", response_model=UserSchema)
async def login(
    credentials: LoginRequest, request: Request, db: AsyncSession = Depends(get_db)
) -> User:
    """
    Sign in with email and password.

    On success the session cookie carries the user id. Unknown emails and
    wrong passwords get the same 401.
    """
    try:
        email = normalize_email(credentials.email)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
        ) from e

    user = await _load_user(db, email=email)

    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS)

    start_session(request, user.id)
    logger.info("User %s signed in", user.id)

    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request) -> None:
    """Clear the session. Succeeds even when nobody is signed in."""
    end_session(request)


@router.get("/user", response_model=UserSchema)
async def get_user(
    user_id: UUID = Depends(require_session), db: AsyncSession = Depends(get_db)
) -> User:
    """Get the signed-in user and the roles they can switch to."""
    user = await _load_user(db, id=user_id)

    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    return user


@router.post("/role", response_model=UserSchema)
async def switch_role(
    switch: RoleSwitchRequest,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Act under another role. The user must hold an assignment for it."""
    result = await db.execute(
        select(UserRole.id)
        .where(UserRole.user_id == user.id, UserRole.role == switch.role)
        .limit(1)
    )
    if result.scalar_one_or_none() is None:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Role not assigned to user: {switch.role}",
        )

    user.current_role = switch.role
    await db.commit()

    refreshed = await _load_user(db, id=user.id)

    if refreshed is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")

    return refreshed
