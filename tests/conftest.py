"""Pytest configuration and shared fixtures."""

import os
from collections.abc import AsyncGenerator, Callable
from uuid import UUID

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from backoffice.core.auth import create_access_token
from backoffice.core.database import Base, get_db
from backoffice.core.permissions.models import Profile, Role
from backoffice.main import create_app
from tests.factories import create_profile, create_role


# In-memory SQLite by default; point at Postgres with TEST_DATABASE_URL
TEST_DATABASE_URL = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite://")


@pytest.fixture
async def engine():
    """Create test database engine."""
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
async def db(engine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a transactional database session for tests.

    Each test runs in its own transaction that is rolled back
    after the test completes, ensuring test isolation.
    """
    session_factory = async_sessionmaker(
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with engine.connect() as conn:
        await conn.begin()

        async with session_factory(bind=conn) as session:
            yield session

        await conn.rollback()


@pytest.fixture
async def app(db: AsyncSession):
    """Create test application instance."""
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    application.dependency_overrides[get_db] = override_get_db

    yield application

    application.dependency_overrides.clear()


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Provide async HTTP client for API testing."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client


# ============================================================
# Role and Profile Fixtures
# ============================================================


@pytest.fixture
async def owner_role(db: AsyncSession) -> Role:
    """Role with edit access to everything through the wildcard."""
    return await create_role(db, "Owner", [("*", True, True)])


@pytest.fixture
async def viewer_role(db: AsyncSession) -> Role:
    """Role that can only look at a few pages."""
    return await create_role(
        db,
        "Viewer",
        [
            ("/dashboard", True, False),
            ("/dashboard/billing", True, False),
            ("/dashboard/billing/entries", True, False),
            ("/dashboard/profile", True, False),
        ],
    )


@pytest.fixture
async def owner(db: AsyncSession, owner_role: Role) -> Profile:
    return await create_profile(db, owner_role)


@pytest.fixture
async def viewer(db: AsyncSession, viewer_role: Role) -> Profile:
    return await create_profile(db, viewer_role)


@pytest.fixture
def make_headers() -> Callable[[UUID], dict[str, str]]:
    """Build authorization headers carrying a valid JWT for a user id."""

    def _make(user_id: UUID) -> dict[str, str]:
        token = create_access_token(user_id=user_id)
        return {"Authorization": f"Bearer {token}"}

    return _make


@pytest.fixture
def owner_headers(owner: Profile, make_headers) -> dict[str, str]:
    return make_headers(owner.id)


@pytest.fixture
def viewer_headers(viewer: Profile, make_headers) -> dict[str, str]:
    return make_headers(viewer.id)
