"""Pytest configuration for all tests."""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from teampulse.application.token_factory import TokenFactory
from teampulse.core.config import Settings
from teampulse.infrastructure.auth.password_hasher import BcryptPasswordHasher
from teampulse.infrastructure.persistence.database import Base
from teampulse.infrastructure.persistence.models import RefreshTokenModel  # noqa: F401

ACCESS_SECRET = "test-access-secret-that-is-at-least-32-chars"
REFRESH_SECRET = "test-refresh-secret-that-is-at-least-32-chars"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Undo any logging configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: fixed secrets, low bcrypt cost, no .env file."""
    return Settings(
        _env_file=None,
        environment="testing",
        jwt_secret=ACCESS_SECRET,
        jwt_refresh_secret=REFRESH_SECRET,
        bcrypt_rounds=4,
        database_url="sqlite+aiosqlite:///:memory:",
    )


@pytest.fixture
def token_factory() -> TokenFactory:
    return TokenFactory(ACCESS_SECRET, REFRESH_SECRET)


@pytest.fixture
def password_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session.

    Uses an in-memory SQLite database for testing.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()
