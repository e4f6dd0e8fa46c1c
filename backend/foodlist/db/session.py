"""Async Session Factory — provides async DB sessions for direct usage outside FastAPI.

Invariants:
    - Meant for scripts, migrations, and test fixtures
    - create_schema() is idempotent (CREATE TABLE IF NOT EXISTS semantics)

Design Decisions:
    - Separate from infrastructure/database.py: this is a convenience for non-FastAPI contexts
      (alembic and test fixtures need a raw session factory)
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)

from foodlist.db.base import Base


def create_session_factory(
    engine: AsyncEngine,
) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory bound to the given engine."""
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create every table known to Base.metadata."""
    import foodlist.models  # noqa: F401  (registers tables on Base.metadata)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def create_test_engine(database_url: str = "sqlite+aiosqlite:///:memory:") -> AsyncEngine:
    """Engine for tests: one shared connection so in-memory SQLite survives across sessions."""
    from sqlalchemy.pool import StaticPool

    return create_async_engine(
        database_url, echo=False,
        connect_args={"check_same_thread": False}, poolclass=StaticPool,
    )
