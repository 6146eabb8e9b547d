"""
Pytest configuration and fixtures.

WHY: Fixtures provide reusable test setup/teardown logic, reducing
duplication and ensuring consistent test environments.
"""

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Callable, Dict
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from httpx import AsyncClient, ASGITransport

from proposal_desk.main import app
from proposal_desk.models import Base
from proposal_desk.db.session import get_db
from proposal_desk.core.auth import create_access_token
from proposal_desk.core.guard import Identity


# WHY: SQLite in memory keeps tests free of external services; each test
# gets a brand new database.
TEST_ASYNC_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def db_engine():
    """
    Create a test database engine.

    WHY: Function scope ensures each test gets a fresh database state.
    """
    engine = create_async_engine(TEST_ASYNC_DATABASE_URL, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """
    Create a test database session.

    Yields:
        AsyncSession: Database session for the test
    """
    async_session = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    Create a test HTTP client.

    WHY: AsyncClient over ASGITransport exercises the real app (middleware,
    dependencies, exception handlers) without running a server.

    Yields:
        AsyncClient: HTTP client for making test requests
    """

    async def override_get_db():
        """Override database dependency with test session."""
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def user_a() -> Identity:
    """Identity of the first test user."""
    return Identity(user_id="user-a")


@pytest.fixture
def user_b() -> Identity:
    """Identity of a second, unrelated test user."""
    return Identity(user_id="user-b")


@pytest.fixture
def auth_headers() -> Callable[[Identity], Dict[str, str]]:
    """
    Build Authorization headers for an identity.

    Usage:
        response = await client.get("/api/proposals", headers=auth_headers(user_a))
    """

    def _headers(identity: Identity) -> Dict[str, str]:
        token = create_access_token({"sub": identity.user_id})
        return {"Authorization": f"Bearer {token}"}

    return _headers
