"""Shared pytest fixtures for all test suites."""

import os
from collections.abc import AsyncGenerator, Generator
from datetime import date
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from tripflow.api.deps import get_gateway
from tripflow.db.gateway import InstrumentedGateway
from tripflow.db.local_gateway import LocalTripGateway
from tripflow.db.local_store import InMemoryKeyValueStore
from tripflow.db.models import Base
from tripflow.db.sql_gateway import SqlTripGateway
from tripflow.main import app
from tripflow.models.trip import Trip


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def local_gateway(memory_store: InMemoryKeyValueStore) -> LocalTripGateway:
    """Local gateway over an empty in-memory store (demo data seeds on first read)."""
    return LocalTripGateway(memory_store)


@pytest.fixture
def trip() -> Trip:
    """Four-day trip from 2025-11-06 to 2025-11-09."""
    return Trip(
        id="trip-1",
        user_id="user-1",
        title="Jordan Adventure",
        start_date=date(2025, 11, 6),
        end_date=date(2025, 11, 9),
    )


@pytest_asyncio.fixture
async def sqlite_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Async engine on a throwaway SQLite file with all tables created."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'tripflow.db'}",
        poolclass=NullPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def sql_gateway(sqlite_engine: AsyncEngine) -> SqlTripGateway:
    """SQL gateway bound to the SQLite test engine."""
    return SqlTripGateway(async_sessionmaker(bind=sqlite_engine, expire_on_commit=False))


@pytest_asyncio.fixture
async def postgres_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create async engine for PostgreSQL integration tests.

    Requires TEST_POSTGRES_URL to be set to a real PostgreSQL connection string.
    Tests using this fixture should be marked with @pytest.mark.postgres.
    """
    database_url = os.getenv("TEST_POSTGRES_URL")
    if not database_url:
        pytest.skip("TEST_POSTGRES_URL not set - skipping postgres test")

    # Convert to async driver if needed
    if database_url.startswith("postgresql://"):
        database_url = database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    engine = create_async_engine(database_url, poolclass=NullPool, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup: drop all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def postgres_session(postgres_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Async session for PostgreSQL integration tests."""
    async with AsyncSession(postgres_engine) as session:
        yield session
        await session.rollback()


@pytest.fixture
def api_gateway(local_gateway: LocalTripGateway) -> InstrumentedGateway:
    """Instrumented local gateway served by the API under test."""
    return InstrumentedGateway(local_gateway, backend="local")


@pytest.fixture
def client(api_gateway: InstrumentedGateway) -> Generator[TestClient, None, None]:
    """Test client with the gateway dependency overridden."""
    app.dependency_overrides[get_gateway] = lambda: api_gateway
    yield TestClient(app)
    app.dependency_overrides.clear()
