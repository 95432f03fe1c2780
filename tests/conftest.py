"""
Pytest Configuration and Fixtures

Shared test fixtures for unit and API tests. Each test gets a fresh SQLite
database file unless TEST_DATABASE_URL points somewhere else.
"""

import os
from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import date
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import configure_mappers

from kinderportal.auth import hash_password
from kinderportal.core.database import Database
from kinderportal.core.models import (
    Child,
    ChildParent,
    Facility,
    Group,
    Organization,
    Role,
    Staff,
    StaffGroupAssignment,
    User,
    UserRole,
)
from kinderportal.main import create_app

# Ensure all mappers are configured
configure_mappers()

TEST_PASSWORD = "correct-horse"


@pytest.fixture
async def database(tmp_path) -> AsyncIterator[Database]:
    """Database client over a throwaway schema."""
    database_url = os.getenv(
        "TEST_DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'kinderportal_test.db'}"
    )
    database = Database(database_url)

    await database.drop_all()
    await database.create_all()

    yield database

    await database.close()


@pytest.fixture
async def db_session(database: Database) -> AsyncIterator[AsyncSession]:
    """Create database session for arranging and inspecting test data."""
    async with database.session() as session:
        yield session


@pytest.fixture
async def app(database: Database) -> AsyncIterator[FastAPI]:
    """Application bound to the test database. Pending audit writes are drained on teardown."""
    application = create_app(database=database)
    yield application
    await application.state.auditor.drain()


@pytest.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


# ============================================================================
# Data factories
# ============================================================================


@pytest.fixture
def make_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory creating a user who holds (and currently acts under) `role`."""
    counter = 0

    async def factory(role: Role | None, *, email: str | None = None, **fields: Any) -> User:
        nonlocal counter
        counter += 1
        user = User(
            email=email or f"user{counter}@example.kz",
            password_hash=hash_password(TEST_PASSWORD, rounds=4),
            first_name=fields.pop("first_name", "Test"),
            last_name=fields.pop("last_name", f"User{counter}"),
            current_role=role,
            **fields,
        )
        if role is not None:
            user.role_assignments.append(UserRole(role=role))
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user

    return factory


@pytest.fixture
async def facility(db_session: AsyncSession) -> Facility:
    organization = Organization(name="Test Network")
    facility = Facility(organization=organization, name="Test Kindergarten")
    db_session.add_all([organization, facility])
    await db_session.commit()
    await db_session.refresh(facility)
    return facility


@pytest.fixture
def make_group(db_session: AsyncSession, facility: Facility) -> Callable[..., Awaitable[Group]]:
    async def factory(name: str = "Sunflowers") -> Group:
        group = Group(facility_id=facility.id, name=name, age_range="4-5", capacity=20)
        db_session.add(group)
        await db_session.commit()
        await db_session.refresh(group)
        return group

    return factory


@pytest.fixture
def make_child(db_session: AsyncSession) -> Callable[..., Awaitable[Child]]:
    async def factory(group: Group | None = None, first_name: str = "Ainur") -> Child:
        child = Child(
            group_id=group.id if group else None,
            first_name=first_name,
            last_name="Seitova",
            date_of_birth=date(2019, 3, 15),
        )
        db_session.add(child)
        await db_session.commit()
        await db_session.refresh(child)
        return child

    return factory


@pytest.fixture
def link_parent(db_session: AsyncSession) -> Callable[[User, Child], Awaitable[ChildParent]]:
    async def factory(parent: User, child: Child) -> ChildParent:
        link = ChildParent(child_id=child.id, parent_user_id=parent.id, relationship_type="mother")
        db_session.add(link)
        await db_session.commit()
        return link

    return factory


@pytest.fixture
def make_staff(
    db_session: AsyncSession, facility: Facility
) -> Callable[..., Awaitable[Staff]]:
    """Factory creating a staff record, optionally assigned to groups."""

    async def factory(user: User, *groups: Group) -> Staff:
        staff = Staff(user_id=user.id, facility_id=facility.id, position="teacher")
        db_session.add(staff)
        await db_session.flush()
        db_session.add_all(StaffGroupAssignment(staff_id=staff.id, group_id=g.id) for g in groups)
        await db_session.commit()
        await db_session.refresh(staff)
        return staff

    return factory


@pytest.fixture
def password() -> str:
    """Password every factory-made user signs in with."""
    return TEST_PASSWORD


@pytest.fixture
def login(client: AsyncClient) -> Callable[[User], Awaitable[None]]:
    """Sign the test client in as `user`."""

    async def do_login(user: User) -> None:
        response = await client.post(
            "/api/auth/login", json={"email": user.email, "password": TEST_PASSWORD}
        )
        assert response.status_code == 200, response.text

    return do_login
