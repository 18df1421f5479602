"""
Database engine and session management.

Wraps a SQLAlchemy AsyncEngine and session factory so the API and the
CLI share one way of talking to the database.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator, Union

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..core.config import Settings, is_memory_url
from ..core.logging import get_logger
from .base import Base


logger = get_logger(__name__)


class Database:
    """
    Owns the async engine and hands out sessions.

    One instance is created per application and shared by every request.
    """

    def __init__(self, url: Union[str, URL], echo: bool = False):
        """
        Initialize the database.

        Args:
            url: Async SQLAlchemy URL (e.g. sqlite+aiosqlite:///app.db)
            echo: Echo SQL statements
        """
        self.url = make_url(url)

        engine_kwargs: dict = {"echo": echo}
        if is_memory_url(self.url):
            # In-memory databases live as long as their connection
            engine_kwargs["poolclass"] = StaticPool
        elif self.url.get_backend_name() != "sqlite":
            engine_kwargs["pool_pre_ping"] = True

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create a database from application settings."""
        return cls(settings.database.build_url(), echo=settings.database.echo)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session, rolling back if the block raises."""
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        # Register entities on the metadata
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Created tables", tables=sorted(Base.metadata.tables))

    async def drop_all(self) -> None:
        """Drop all known tables."""
        from .. import models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
        logger.warning("Dropped tables", tables=sorted(Base.metadata.tables))

    async def ping(self) -> bool:
        """Check that the database answers a trivial query."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database ping failed", error=str(e))
            return False

    async def dispose(self) -> None:
        """Close all pooled connections."""
        await self.engine.dispose()
        logger.info("Disposed database engine")

    def __repr__(self) -> str:
        return f"Database({self.url.render_as_string(hide_password=True)!r})"
