"""
GymPortal API - Lazy Database Connection Middleware.

If MongoDB was unreachable at startup, the first request that needs
workout storage retries the connection. Health checks never wait on it.
"""

import asyncio
import logging

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from database import Database
from settings import settings

logger = logging.getLogger(__name__)

HEALTH_PATHS = ("/health", "/health/detailed")


def needs_database(path: str) -> bool:
    return path not in HEALTH_PATHS


class LazyDatabaseMiddleware(BaseHTTPMiddleware):
    """Connect to MongoDB on demand; concurrent first requests share one attempt."""

    def __init__(self, app):
        super().__init__(app)
        self._connect_lock = asyncio.Lock()

    async def ensure_connected(self) -> None:
        async with self._connect_lock:
            if Database._initialized:
                return
            logger.info("Connecting to MongoDB on first storage request")
            try:
                await Database.connect_db(
                    database_url=settings.DATABASE_URL,
                    database_name=settings.DATABASE_NAME
                )
            except Exception as e:
                # Routes surface the storage error to the caller
                logger.error(f"Lazy MongoDB connection failed: {e}")

    async def dispatch(self, request: Request, call_next):
        if needs_database(request.url.path) and not Database._initialized:
            await self.ensure_connected()
        return await call_next(request)
