"""
Help Center Backend — Test Configuration (conftest.py)
========================================================

Fixture Hierarchy (all function-scoped):
    ├── mock_db_session: AsyncMock session for pure unit tests
    ├── db_engine: in-memory SQLite (aiosqlite + StaticPool) with all tables
    ├── db_session: a real AsyncSession on that engine
    ├── session_factory: sessionmaker on that engine, for seeding/asserting
    └── test_client: httpx AsyncClient on the app, get_db_session overridden
                     to use the in-memory database
"""

import os

# Must run before any helpcenter import: settings are read at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["SESSION_SECRET"] = "test-session-secret"
os.environ["GOOGLE_CLIENT_ID"] = "test-google-client"
os.environ["GOOGLE_CLIENT_SECRET"] = "test-google-secret"
os.environ["GITHUB_CLIENT_ID"] = "test-github-client"
os.environ["GITHUB_CLIENT_SECRET"] = "test-github-secret"
os.environ["MESSAGE_LANGUAGE"] = "es"
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from helpcenter.database import Base, get_db_session
from helpcenter.models.article import Article, ArticleSection  # noqa: F401
from helpcenter.models.report import Report  # noqa: F401
from helpcenter.models.user import User  # noqa: F401


@pytest.fixture
def mock_db_session():
    """
    AsyncMock standing in for AsyncSession.

    Usage:
        mock_db_session.execute.side_effect = SQLAlchemyError("boom")
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session


@pytest_asyncio.fixture
async def db_engine():
    """Fresh in-memory database per test, so generated ids start at 1."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
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
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    HTTPX AsyncClient talking to the app through ASGITransport.

    get_db_session is replaced by the same commit/rollback/close scope bound
    to the in-memory engine.
    """
    from helpcenter.main import app

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
