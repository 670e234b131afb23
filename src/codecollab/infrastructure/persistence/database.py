"""Database abstraction layer using SQLAlchemy 2.0 async.

This module provides the database session management and engine configuration
for SQLAlchemy with async support. It supports both SQLite (aiosqlite) and
PostgreSQL (asyncpg) drivers.

The DatabaseManager is constructed by the application factory and kept on
``app.state``; nothing here holds a process-wide connection.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, AsyncGenerator

from fastapi import Request
from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from codecollab.core.config import Settings, get_settings
from codecollab.core.logging import get_logger

logger = get_logger(__name__)


def utc_now() -> datetime:
    """Timestamp default for model columns (timezone-aware UTC)."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    All models should inherit from this class to get proper ORM mapping
    and metadata management.
    """

    pass


DEFAULT_BADGES: list[dict[str, Any]] = [
    {
        "name": "First Share",
        "description": "Shared your first code snippet",
        "icon_url": "/badges/first-share.svg",
        "point_value": 10,
        "color": "#28a745",
        "category": "sharing",
    },
    {
        "name": "Code Reviewer",
        "description": "Left your first code review",
        "icon_url": "/badges/code-reviewer.svg",
        "point_value": 15,
        "color": "#17a2b8",
        "category": "reviewing",
    },
    {
        "name": "Community Member",
        "description": "Joined the CodeCollab community",
        "icon_url": "/badges/community-member.svg",
        "point_value": 5,
        "color": "#007bff",
        "category": "community",
    },
]


class DatabaseManager:
    """Database connection and session manager.

    This class manages the async database engine and session factory.
    It provides context managers for database sessions and handles
    connection pooling.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        database_url: str | None = None,
    ) -> None:
        """Initialize the database manager.

        Args:
            settings: Application settings. Loaded from environment if omitted.
            database_url: Overrides ``settings.database_url``.
        """
        self.settings = settings or get_settings()
        self.database_url = database_url or self.settings.database_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def is_memory(self) -> bool:
        return self.is_sqlite and ":memory:" in self.database_url

    @property
    def engine(self) -> AsyncEngine:
        """Get or create the database engine.

        Returns:
            AsyncEngine: SQLAlchemy async engine instance.
        """
        if self._engine is None:
            engine_kwargs: dict[str, Any] = {"echo": self.settings.db_echo}
            if self.is_memory:
                # One shared connection, otherwise every session sees an empty DB
                engine_kwargs["poolclass"] = StaticPool
                engine_kwargs["connect_args"] = {"check_same_thread": False}
            elif self.is_sqlite:
                engine_kwargs["connect_args"] = {"check_same_thread": False}
            else:
                engine_kwargs["pool_size"] = self.settings.db_pool_size
                engine_kwargs["max_overflow"] = self.settings.db_max_overflow
                engine_kwargs["pool_pre_ping"] = True

            self._engine = create_async_engine(self.database_url, **engine_kwargs)
            logger.info(
                "Database engine created",
                database_url=self._engine.url.render_as_string(hide_password=True),
            )
        return self._engine

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the session factory.

        Returns:
            async_sessionmaker: SQLAlchemy async session factory.
        """
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.engine,
                class_=AsyncSession,
                expire_on_commit=False,
                autoflush=False,
            )
            logger.debug("Database session factory created")
        return self._session_factory

    async def create_tables(self) -> None:
        """Create all database tables that do not exist yet."""
        # Register every model with Base.metadata
        from codecollab.infrastructure.persistence import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
            logger.info("Database tables created")

    async def drop_tables(self) -> None:
        """Drop all database tables.

        WARNING: This will delete all data. Only use in testing!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            logger.warning("Database tables dropped")

    async def disconnect(self) -> None:
        """Close the database engine and all connections.

        Should be called on application shutdown.
        """
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            logger.info("Database engine disposed")

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Provide a transactional scope for database operations.

        Yields:
            AsyncSession: SQLAlchemy async session.

        Example:
            async with db.session() as session:
                result = await session.execute(select(UserModel))
                users = result.scalars().all()
        """
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def check_connection(self) -> bool:
        """Check if database connection is working.

        Returns:
            bool: True if connection is successful, False otherwise.
        """
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            logger.debug("Database connection check successful")
            return True
        except Exception as e:
            logger.error("Database connection check failed", error=str(e))
            return False

    async def seed_default_badges(self) -> int:
        """Insert the default badges that are missing.

        Returns:
            Number of badges created.
        """
        from codecollab.infrastructure.persistence.models import BadgeModel

        created = 0
        async with self.session() as session:
            for badge_data in DEFAULT_BADGES:
                result = await session.execute(
                    select(BadgeModel.id).where(BadgeModel.name == badge_data["name"])
                )
                if result.scalar_one_or_none() is None:
                    session.add(BadgeModel(**badge_data))
                    created += 1
                    logger.info("Seeded default badge", badge_name=badge_data["name"])
            await session.commit()
        return created


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to get database session.

    The session comes from the DatabaseManager stored on ``app.state``.

    Yields:
        AsyncSession: SQLAlchemy async session.

    Example:
        @router.get("/users")
        async def list_users(session: AsyncSession = Depends(get_db_session)):
            result = await session.execute(select(UserModel))
            return result.scalars().all()
    """
    db: DatabaseManager = request.app.state.db_manager
    async with db.session() as session:
        yield session


async def init_database(db: DatabaseManager) -> None:
    """Initialize the database.

    Creates the SQLite directory if needed, checks the connection and, when
    ``auto_create_tables`` is enabled, creates tables and seeds badges.

    Raises:
        RuntimeError: If the database cannot be reached.
    """
    if db.is_sqlite and not db.is_memory:
        # Extract path from sqlite+aiosqlite:///path/to/file.db
        db_path = db.database_url.split(":///")[-1]
        db_dir = Path(db_path).parent
        db_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("Database directory ensured", path=str(db_dir))

    if not await db.check_connection():
        logger.error("Database connection failed")
        raise RuntimeError("Failed to connect to database")

    if db.settings.auto_create_tables:
        await db.create_tables()
        await db.seed_default_badges()
    else:
        logger.info("Skipping table creation, auto_create_tables is disabled")
