"""
Notekeeper Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Every test gets a fresh in-memory SQLite database (aiosqlite +
       StaticPool so all sessions share one connection). API tests run the
       real FastAPI app through httpx's ASGITransport with get_db_session
       overridden to use that database.

Fixture Hierarchy (all function-scoped):
    ├── db_engine / session_factory: fresh schema per test
    ├── db_session: one AsyncSession for service-level tests
    ├── mock_db_session: AsyncMock session for failure injection
    ├── test_app / test_client: app + HTTPX AsyncClient bound to it
    ├── root_user: a stored user "root" / "sekret"
    └── auth_header: bearer header for root, obtained through POST /api/login
"""

import os

# Override settings BEFORE any app imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["BCRYPT_ROUNDS"] = "4"  # minimum cost keeps hashing fast
os.environ["LOG_LEVEL"] = "WARNING"

from typing import List
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db_session
from app.main import create_app
from app.models import Note, User
from app.services.auth_service import auth_service


ROOT_USERNAME = "root"
ROOT_PASSWORD = "sekret"


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
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
def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    """A single session for calling services directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.side_effect = OperationalError(...)
        with pytest.raises(DatabaseError):
            await note_service.list_notes(mock_db_session)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.get = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# Application Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_app(session_factory):
    """FastAPI app whose request sessions come from the test database."""
    app = create_app()

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def test_client(test_app):
    """
    Provides an async HTTP test client for endpoint testing.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ══════════════════════════════════════════════════════════════════════════
# Data Fixtures & Helpers
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def root_user(session_factory) -> User:
    async with session_factory() as session:
        user = User(
            username=ROOT_USERNAME,
            name="Superuser",
            password_hash=await auth_service.hash_password(ROOT_PASSWORD),
        )
        session.add(user)
        await session.commit()
        return user


@pytest_asyncio.fixture
async def auth_header(test_client, root_user) -> dict:
    response = await test_client.post(
        "/api/login",
        json={"username": ROOT_USERNAME, "password": ROOT_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"bearer {response.json()['token']}"}


@pytest.fixture
def notes_in_db(session_factory):
    """Async callable returning every stored note, read in a fresh session."""
    async def _notes() -> List[Note]:
        async with session_factory() as session:
            result = await session.execute(select(Note))
            return list(result.scalars().all())
    return _notes


@pytest.fixture
def users_in_db(session_factory):
    async def _users() -> List[User]:
        async with session_factory() as session:
            result = await session.execute(select(User))
            return list(result.scalars().all())
    return _users
