"""Database session management using SQLAlchemy 2.0 async.

Only the refresh-token table is owned by this package. Schema migrations are
out of scope; ``create_tables`` exists for development and tests.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from teampulse.core.config import Settings, get_settings
from teampulse.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class DatabaseManager:
    """Owns the async engine and hands out sessions.

    The engine is created lazily on first use.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            url = self.settings.database_url
            if url.startswith("sqlite") and ":memory:" not in url:
                _ensure_sqlite_directory(url)
            self._engine = create_async_engine(
                url,
                echo=self.settings.db_echo,
                connect_args={"check_same_thread": False} if url.startswith("sqlite") else {},
            )
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all tables defined on ``Base``. Development only."""
        # Register models on Base.metadata
        from teampulse.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    async def disconnect(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope: commit on success, rollback on error.

        Example:
            async with db.session() as session:
                repo = SqlAlchemyRefreshTokenRepository(session)
                await repo.delete_expired()
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise


def _ensure_sqlite_directory(url: str) -> None:
    # sqlite+aiosqlite:///./tp_data/teampulse.db -> ./tp_data
    path = url.split(":///", 1)[-1]
    if path:
        Path(path).parent.mkdir(parents=True, exist_ok=True)
