"""API test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - db_manager patched to a manager bound to the test engine, so the real
      get_db dependency is exercised
    - service_db_manager is None unless the test asks for service_client

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row-level policies are PostgreSQL-only and not exercised here)
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)
from sqlalchemy.pool import StaticPool

import bbs.infrastructure.database as db_module
import bbs.models  # noqa: F401
from bbs.db.base import Base
from bbs.infrastructure.database import DatabaseSessionManager
from bbs.main import app


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def test_manager(test_engine, test_session_factory):
    manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    manager.engine = test_engine
    manager._session_factory = test_session_factory
    return manager


@pytest.fixture
async def client(test_manager):
    """FastAPI test client with the public db_manager bound to the test DB."""
    original = (db_module.db_manager, db_module.service_db_manager)
    db_module.db_manager = test_manager
    db_module.service_db_manager = None

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager, db_module.service_db_manager = original


@pytest.fixture
async def service_client(client, test_manager):
    """Client with the service role configured against the same test DB."""
    db_module.service_db_manager = test_manager
    yield client


@pytest.fixture
async def lenient_client(client):
    """Client that returns 500 responses instead of re-raising app exceptions."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as c:
        yield c
