"""
Database Configuration

Async SQLAlchemy engine, session factory and the declarative Base.
One session per request: committed when the handler succeeds, rolled back
when it raises.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from school_admin.core.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


engine = create_async_engine(
    settings.database_url,
    echo=settings.database_echo,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that yields a database session.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Verify the database is reachable.

    Schema changes are applied with Alembic, not at startup.
    """
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))


async def check_db_connected() -> bool:
    """Run a trivial query to verify the database is reachable."""
    try:
        async with async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.warning(f"Database readiness check failed: {e}")
        return False


async def close_db() -> None:
    """Dispose of the connection pool."""
    await engine.dispose()
