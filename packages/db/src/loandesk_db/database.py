# This project was developed with assistance from AI tools.
"""Async engine, session factory and declarative base.

Services that run outside a request (scripts, background callers) open their
own ``SessionLocal()`` context; request handlers receive a session through
the ``get_db`` dependency.
"""

import logging
from collections.abc import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from .config import db_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

engine = create_async_engine(
    db_settings.DATABASE_URL,
    echo=db_settings.SQL_ECHO,
    pool_pre_ping=True,
)
SessionLocal = async_sessionmaker(engine, expire_on_commit=False)


async def get_db() -> AsyncIterator[AsyncSession]:
    """FastAPI dependency yielding a session that is closed after the request."""
    async with SessionLocal() as session:
        yield session


class DatabaseService:
    """Schema bootstrap and connectivity checks for a given engine."""

    def __init__(self, bind: AsyncEngine | None = None) -> None:
        self._engine = bind or engine

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    async def create_all(self) -> None:
        """Create every mapped table that does not exist yet."""
        from . import models  # noqa: F401  (register mappers)

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured")

    async def drop_all(self) -> None:
        from . import models  # noqa: F401

        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def health_check(self) -> bool:
        """Return True when a trivial query round-trips."""
        try:
            async with self._engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception:
            logger.warning("Database health check failed", exc_info=True)
            return False

    async def dispose(self) -> None:
        await self._engine.dispose()


_service = DatabaseService()


def get_db_service() -> DatabaseService:
    """Return the module-level DatabaseService singleton."""
    return _service
