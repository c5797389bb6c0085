"""Shared fixtures: in-memory SQLite database, unit of work, API client.

Every test gets a fresh schema. The API client shares the same engine as the
``db`` fixture, so rows created through either are visible to the other.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("SEED_DEFAULT_LEAVE_TYPES", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")

from typing import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from leave_management.core.database import Base
from leave_management.core.dependencies import get_db
from leave_management.core.enums import Role
from leave_management.core.security import create_user_token, hash_password
from leave_management.main import app
from leave_management.models import LeaveBalance, LeaveType, User
from leave_management.repositories import UnitOfWork

PASSWORD = "secret123"


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def uow(db) -> UnitOfWork:
    return UnitOfWork(db)


@pytest.fixture
async def client(session_factory) -> AsyncIterator[AsyncClient]:
    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ── Seed helpers ──────────────────────────────────────────────────────────────
# Helpers return plain ids: a rolled-back transaction expires every loaded
# object, and touching an expired attribute outside the session's greenlet
# fails under asyncio.


async def make_user(
    db: AsyncSession,
    *,
    name: str = "Alice Employee",
    email: str = "alice@acme.com",
    role: Role = Role.EMPLOYEE,
    password: str = PASSWORD,
) -> int:
    user = User(name=name, email=email, password_hash=hash_password(password), role=role)
    db.add(user)
    await db.commit()
    return user.id


async def make_leave_type(
    db: AsyncSession, *, name: str = "Casual Leave", max_days: int = 12
) -> int:
    leave_type = LeaveType(name=name, max_days_per_year=max_days)
    db.add(leave_type)
    await db.commit()
    return leave_type.id


async def make_balance(
    db: AsyncSession, user_id: int, leave_type_id: int, remaining_days: int
) -> None:
    db.add(
        LeaveBalance(
            user_id=user_id, leave_type_id=leave_type_id, remaining_days=remaining_days
        )
    )
    await db.commit()


async def remaining_days(db: AsyncSession, user_id: int, leave_type_id: int):
    """Current remaining days straight from the table, or None with no row."""
    return await db.scalar(
        select(LeaveBalance.remaining_days).where(
            LeaveBalance.user_id == user_id,
            LeaveBalance.leave_type_id == leave_type_id,
        )
    )


async def auth_headers(db: AsyncSession, user_id: int) -> dict[str, str]:
    user = await db.get(User, user_id)
    return {"Authorization": f"Bearer {create_user_token(user)}"}
