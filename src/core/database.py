"""Async database engine factory and session management."""

from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.core.config import settings
from src.core.logging import get_logger
from src.models import Base

logger = get_logger(__name__)


def create_engine(
    database_url: str | None = None,
    **engine_options: Any,
) -> AsyncEngine:
    """Create an async SQLAlchemy engine.

    Args:
        database_url: Connection URL. Defaults to settings.database_url.
        **engine_options: Additional options passed to create_async_engine.

    Returns:
        Configured AsyncEngine instance.
    """
    url = database_url or settings.database_url

    default_options: dict[str, Any] = {"echo": settings.debug}
    if not url.startswith("sqlite"):
        # SQLite uses a static/null pool and rejects sizing options.
        default_options.update(
            {
                "pool_size": 10,
                "max_overflow": 0,
                "pool_pre_ping": True,
            }
        )
    default_options.update(engine_options)

    return create_async_engine(url, **default_options)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory.

    Args:
        engine: AsyncEngine instance to bind sessions to.

    Returns:
        Configured async_sessionmaker instance.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_schema(engine: AsyncEngine) -> None:
    """Create missing tables. Existing tables are left untouched."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("database_schema_ready", tables=sorted(Base.metadata.tables))
