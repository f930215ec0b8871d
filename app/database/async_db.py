import logging
from functools import lru_cache
from typing import AsyncGenerator
from urllib.parse import quote_plus

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.config.settings import get_settings

logger = logging.getLogger(__name__)


def get_async_database_url() -> str:
    """Build the asyncpg connection URL, escaping credentials."""
    settings = get_settings()

    if not settings.DB_NAME:
        raise ValueError("Database name is required (DB_NAME)")

    user = quote_plus(settings.DB_USER)
    host = f"{settings.DB_HOST}:{settings.DB_PORT}/{settings.DB_NAME}"
    if settings.DB_PASSWORD:
        return f"postgresql+asyncpg://{user}:{quote_plus(settings.DB_PASSWORD)}@{host}"
    return f"postgresql+asyncpg://{user}@{host}"


@lru_cache(maxsize=1)
def get_async_engine() -> AsyncEngine:
    """
    Engine is created on first use so importing the app never opens a pool.
    Development runs without pooling.
    """
    settings = get_settings()
    options = dict(settings.database_config)

    if settings.is_development:
        logger.info("Creating async database engine for DEVELOPMENT (NullPool)")
        options["poolclass"] = NullPool
    else:
        logger.info("Creating async database engine for PRODUCTION (pooled)")

    try:
        return create_async_engine(get_async_database_url(), **options)
    except Exception as e:
        logger.error(f"Failed to create async database engine: {e}")
        raise


@lru_cache(maxsize=1)
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        get_async_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency: one session per request.

    Commits once after the handler returns; any exception rolls back every
    write the request made.
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            logger.error(f"Async database error, rolling back: {e}")
            await session.rollback()
            raise


async def dispose_engine() -> None:
    if get_async_engine.cache_info().currsize:
        await get_async_engine().dispose()
        logger.info("Async database engine disposed")
