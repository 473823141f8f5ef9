"""
Testcontainers-based PostgreSQL fixtures for integration tests.

Provides isolated, ephemeral Postgres instances for each test session.
Tests relying on PostgreSQL semantics (conditional updates, unique
constraints, timezone-aware columns) use these fixtures.

Usage:
    # In your test file or conftest.py
    from tests.shared.fixtures.database import db_session

    async def test_something(db_session):
        repo = UserRepositorySQLAlchemy(db_session)
        await repo.add(user)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from testcontainers.postgres import PostgresContainer

from ogla_identity.infrastructure.persistence.sqlalchemy import Base

# Use same Postgres version as production
POSTGRES_IMAGE = "postgres:16-alpine"


@pytest.fixture(scope="session")
def postgres_container():
    """
    Start a PostgreSQL container for the test session.

    The container is shared across all tests in the session for performance.
    Each test gets a clean database state via table drop/create.
    """
    with PostgresContainer(POSTGRES_IMAGE) as postgres:
        yield postgres


@pytest.fixture(scope="session")
def async_engine(postgres_container):
    """
    Create an async SQLAlchemy engine connected to the test container.

    Session-scoped to avoid recreating the engine for each test.
    """
    connection_url = postgres_container.get_connection_url()
    # Testcontainers may return postgresql+psycopg2:// or postgresql://
    async_url = connection_url.replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    )
    async_url = async_url.replace("postgresql://", "postgresql+asyncpg://")

    return create_async_engine(
        async_url,
        echo=False,
        future=True,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )


@pytest_asyncio.fixture(scope="function")
async def session_maker(async_engine):
    """Fresh schema plus a session factory bound to the container."""
    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


@pytest_asyncio.fixture(scope="function")
async def db_session(session_maker):
    """
    Provide an isolated database session for each test.

    Tables are recreated per test; uncommitted changes are rolled back.
    """
    async with session_maker() as session:
        yield session
        await session.rollback()
