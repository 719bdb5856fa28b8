"""Integration test fixtures with an in-memory database."""

from collections.abc import AsyncGenerator
from datetime import date

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from kz_tax_engine.api.app import create_app
from kz_tax_engine.api.dependencies import get_clock, get_db_session
from kz_tax_engine.calculators.deadlines import FixedClock
from kz_tax_engine.models import Base
from kz_tax_engine.repositories import SqlProfileRepository, SqlTransactionRepository

# One shared connection so every session sees the same in-memory database
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

USER_ID = "user-1"
OTHER_USER_ID = "user-2"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with the schema."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Get database session for repository and service tests."""
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def transactions(db_session) -> SqlTransactionRepository:
    return SqlTransactionRepository(db_session)


@pytest_asyncio.fixture
async def profiles(db_session) -> SqlProfileRepository:
    return SqlProfileRepository(db_session)


@pytest.fixture
def api_clock() -> FixedClock:
    """Clock the API uses for deadline urgency."""
    return FixedClock.on(date(2026, 3, 10))


def _build_app(session_factory, clock):
    app = create_app()

    async def override_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
            finally:
                await session.close()

    app.dependency_overrides[get_db_session] = override_session
    app.dependency_overrides[get_clock] = lambda: clock
    return app


@pytest_asyncio.fixture
async def app(session_factory, api_clock):
    return _build_app(session_factory, api_clock)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the app without starting a server."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def user_headers() -> dict[str, str]:
    return {"X-User-ID": USER_ID}
