"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB sessions
    - db_manager patched so the readiness probe sees the test engine

Design Decisions:
    - SQLite in-memory with one shared connection: fast, no external dependency,
      sufficient for service and route tests (no PostgreSQL-specific features used)
"""

import pytest
from httpx import ASGITransport, AsyncClient

from foodlist.db.session import create_schema, create_session_factory, create_test_engine
from foodlist.infrastructure.database import get_db, DatabaseSessionManager
import foodlist.infrastructure.database as db_module
from foodlist.main import app


@pytest.fixture
async def test_engine():
    engine = create_test_engine()
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
