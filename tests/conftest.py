"""
Global test fixtures and configuration.

This module provides base fixtures for all tests:
- Database session on a fresh in-memory SQLite database per test
- Redis client (in-memory fake)
- HTTP client with dependency overrides
- Base data fixtures (user, agency_user, auth_headers)
"""

import os
import pytest
from typing import AsyncGenerator
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fakeredis import FakeAsyncRedis

# Set test environment variables BEFORE importing app
os.environ["MODE"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DATABASE_URL_EXTERNAL"] = "sqlite+aiosqlite:///:memory:"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["REDIS_URL"] = "redis://localhost:6379/0"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["SENTRY_DSN"] = ""
os.environ["CRON_SECRET"] = ""
os.environ["SMTP_USERNAME"] = ""
os.environ["SMTP_PASSWORD"] = ""

from app.main import app
from app.api.dependencies import get_db, get_redis
from app.db.base import Base
from app.db.session import enable_sqlite_foreign_keys

TEST_DATABASE_URL = os.environ["DATABASE_URL"]


# ==================== Database ====================

@pytest.fixture(scope="function")
async def test_engine():
    """
    Fresh in-memory database per test.

    StaticPool keeps the single connection alive, so every session sees the
    same database; foreign keys are switched on so ON DELETE rules apply.
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False  # Set to True for SQL debugging
    )
    enable_sqlite_foreign_keys(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture(scope="function")
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Session shared by the test and the app under test.

    Commits are real; isolation comes from the per-test database.
    """
    session_factory = sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )
    session = session_factory()

    yield session

    await session.close()


# ==================== Redis ====================

@pytest.fixture(scope="function")
async def redis_client() -> AsyncGenerator[FakeAsyncRedis, None]:
    """
    Create fake Redis client (in-memory) for each test.
    """
    redis = FakeAsyncRedis()
    yield redis
    await redis.flushall()
    await redis.aclose()


# ==================== Background work ====================

@pytest.fixture(autouse=True)
def queue_flushes(monkeypatch):
    """
    Replace the Celery hand-off with a recorder so no broker is needed.

    Returns the list of recorded calls.
    """
    calls = []

    def record():
        calls.append(True)

    monkeypatch.setattr("app.services.email.schedule_queue_flush", record)
    monkeypatch.setattr("app.api.endpoints.invoices.schedule_queue_flush", record)
    return calls


# ==================== FastAPI Client ====================

@pytest.fixture(scope="function")
async def client(
    db_session: AsyncSession,
    redis_client: FakeAsyncRedis
) -> AsyncGenerator[AsyncClient, None]:
    """
    Create HTTP client for testing FastAPI endpoints.

    Overrides get_db and get_redis dependencies to use test fixtures.
    """

    async def override_get_db():
        yield db_session

    async def override_get_redis():
        yield redis_client

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_redis] = override_get_redis

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ==================== Base Data Fixtures ====================

@pytest.fixture
async def user(db_session: AsyncSession):
    """
    Freelancer on the free plan with a completed profile.
    """
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(db_session)
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def agency_user(db_session: AsyncSession):
    """
    Agency account on the agency plan.
    """
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(
        db_session,
        email="agency@test.com",
        name="Agency Owner",
        user_type="agency",
        plan="agency",
        agency_name="Pixel Forge Studio",
        agency_email="hello@pixelforge.com",
    )
    await db_session.commit()
    await db_session.refresh(user)
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession):
    """
    A second freelancer, for ownership isolation checks.
    """
    from tests.factories.user import UserFactory
    user = await UserFactory.create_async(db_session, email="other@test.com", name="Other User")
    await db_session.commit()
    await db_session.refresh(user)
    return user


def headers_for(user) -> dict:
    from app.core.security import create_access_token

    token = create_access_token(
        data={"sub": str(user.id)},
        token_version=user.token_version
    )
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def auth_headers(user):
    """
    Generate authentication headers for authenticated requests.
    """
    return headers_for(user)


@pytest.fixture
async def agency_headers(agency_user):
    return headers_for(agency_user)


@pytest.fixture
async def other_headers(other_user):
    return headers_for(other_user)


# ==================== Helper Fixtures ====================

@pytest.fixture
def anyio_backend():
    """
    Configure anyio backend for httpx AsyncClient.
    """
    return "asyncio"
