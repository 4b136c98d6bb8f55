"""Database connection and session management."""

from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sims_api.config import Settings
from sims_api.exceptions import MissingConfigurationError


class Database:
    """Engine and session factory for the credential store.

    Built once per application by ``create_app`` and handed to request
    handlers through ``get_db``.
    """

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.session_maker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database | None":
        """Create a database for the configured URL, or None if unset."""
        url = settings.async_database_url
        if url is None:
            return None

        if url.startswith("sqlite"):
            return cls(create_async_engine(url, echo=False))

        engine = create_async_engine(
            url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
            # Validate connections before checkout to detect stale connections
            pool_pre_ping=True,
            # Recycle connections after 1 hour (important for cloud proxies)
            pool_recycle=3600,
            # Never echo SQL statements as they may contain password hashes
            echo=False,
        )
        return cls(engine)

    async def dispose(self) -> None:
        """Release pooled connections."""
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Get database session dependency."""
    database: Database | None = request.app.state.database
    if database is None:
        raise MissingConfigurationError(["DATABASE_URL"])

    async with database.session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
