"""
Application lifecycle management using the FastAPI lifespan pattern.

Startup only checks configuration; the database engine is created lazily
on the first request and disposed on shutdown.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config.settings import Settings, get_settings
from app.database.async_db import dispose_engine

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup checks and graceful shutdown.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._initialized = False

    async def startup(self) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()

        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        """Warn about integrations that will fail at request time."""
        if not self._settings.STRIPE_SECRET_KEY:
            logger.warning("STRIPE_SECRET_KEY not configured - payment intents will fail")

        if not self._settings.EMAIL_ENABLED:
            logger.info("Transactional email is disabled via EMAIL_ENABLED=False")
        elif not self._settings.SMTP_HOST:
            logger.warning("SMTP_HOST not configured - shipping notifications will fail")

        logger.info(f"Return window: {self._settings.RETURN_WINDOW_DAYS} days")


# Global lifecycle manager instance
_lifecycle_manager: LifecycleManager | None = None


def get_lifecycle_manager() -> LifecycleManager:
    """Get or create the global lifecycle manager instance."""
    global _lifecycle_manager
    if _lifecycle_manager is None:
        _lifecycle_manager = LifecycleManager()
    return _lifecycle_manager


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = get_lifecycle_manager()

    await lifecycle.startup()

    yield

    await lifecycle.shutdown()
