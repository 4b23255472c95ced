"""
ProjectHub Backend — Test Configuration (conftest.py)
======================================================

What:  Shared pytest fixtures for the entire test suite.

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for repository unit tests
    ├── db_engine:       in-memory SQLite (aiosqlite) with all tables created
    ├── db_session:      a real AsyncSession on db_engine
    ├── test_client:     HTTPX AsyncClient whose requests use db_engine
    └── make_user / make_project: row factories for API tests
"""

import os

# Must run before any projecthub import: settings are read at import time
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-client-id"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-client-secret"
os.environ["POST_LOGIN_REDIRECT_URL"] = "http://frontend.test/"

from typing import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import projecthub.models  # noqa: F401
from projecthub.database import Base, get_db_session
from projecthub.models.user import utcnow


# ══════════════════════════════════════════════════════════════════════════
# Mock Session
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    A mock AsyncSession.

    Usage:
        async def test_find(mock_db_session):
            mock_db_session.execute.return_value.scalar_one_or_none.return_value = user
            result = await user_repository.find_by_id(mock_db_session, 1)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.execute.return_value = MagicMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.delete = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Database
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_engine():
    # StaticPool: every session shares the one in-memory connection
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # SQLite leaves foreign keys (and ON DELETE CASCADE) off unless asked
    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app in-process.

    get_db_session is overridden so every request runs against the
    in-memory database instead of DATABASE_URL's engine.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/users")
            assert response.status_code == 200
    """
    from projecthub.main import app

    async def override_get_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


# ══════════════════════════════════════════════════════════════════════════
# Row Factories
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def make_user(session_factory):
    """Insert a user directly, bypassing the API."""
    from projecthub.models.user import User

    async def _make_user(sub: str = "google-oauth2|1", **fields):
        values = {
            "email": f"{sub}@example.com",
            "name": f"User {sub}",
            "picture": "https://example.com/p.jpg",
            "last_login": utcnow(),
        }
        values.update(fields)
        async with session_factory() as session:
            user = User(sub=sub, **values)
            session.add(user)
            await session.commit()
            return user

    return _make_user


@pytest.fixture
def make_project(session_factory):
    from projecthub.models.project import Project

    async def _make_project(owning_user_id: int, name: str = "Project", **fields):
        async with session_factory() as session:
            project = Project(
                owning_user_id=owning_user_id,
                name=name,
                creation_date=fields.pop("creation_date", utcnow()),
                **fields,
            )
            session.add(project)
            await session.commit()
            return project

    return _make_project
