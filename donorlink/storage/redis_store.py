"""
Redis-backed text store.

Each collection lives under a single string key. Unlike lookups, writes
must never fail silently: a failed SET raises StorageError so the caller
knows the mutation did not persist.
"""

import redis.asyncio as redis
from redis.asyncio.connection import ConnectionPool

from donorlink.config import settings
from donorlink.errors import StorageError
from donorlink.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)


class RedisStore:
    """Key-value store over a pooled redis.asyncio client"""

    def __init__(self, url: str | None = None):
        self.url = url or settings.REDIS_URL
        self.pool = None
        self.client = None
        self._initialized = False

    async def initialize(self):
        """Initialize connection pool on startup"""
        if self._initialized:
            return

        try:
            pool_config = settings.get_redis_pool_config()
            logger.info("Attempting Redis connection", url_preview=self.url[:30] + "...")

            self.pool = ConnectionPool.from_url(
                self.url,
                retry_on_timeout=True,
                health_check_interval=30,
                decode_responses=True,
                **pool_config,
            )
            self.client = redis.Redis(connection_pool=self.pool)

            result = await self.client.ping()
            logger.info("Redis ping successful", result=result)

            self._initialized = True
            logger.info(
                "Redis store initialized", max_connections=pool_config["max_connections"]
            )

        except Exception as e:
            logger.error("Failed to initialize Redis store", error=str(e))
            self._initialized = False
            raise StorageError("Redis initialization failed", operation="initialize") from e

    async def close(self):
        """Clean shutdown"""
        try:
            if self.client:
                await self.client.aclose()
            if self.pool:
                await self.pool.disconnect()
            self._initialized = False
            logger.info("Redis store closed")
        except Exception as e:
            logger.error("Error closing Redis store", error=str(e))

    async def _ensure_initialized(self):
        if not self._initialized:
            logger.warning("Redis not initialized, attempting to initialize")
            await self.initialize()

    async def ping(self) -> bool:
        """Test Redis connection"""
        try:
            await self._ensure_initialized()
            result = await self.client.ping()
            return bool(result)
        except Exception as e:
            logger.error("Redis ping failed", error=str(e))
            return False

    async def get(self, key: str) -> str | None:
        try:
            await self._ensure_initialized()
            result = await self.client.get(key)
            return result if result else None
        except StorageError:
            raise
        except Exception as e:
            logger.error("Redis GET failed", key=key[:30], error=str(e))
            raise StorageError(f"Read failed: {e}", operation="get", key=key) from e

    async def set(self, key: str, value: str) -> None:
        try:
            await self._ensure_initialized()
            result = await self.client.set(key, value)
        except StorageError:
            raise
        except Exception as e:
            logger.error("Redis SET failed", key=key[:30], error=str(e))
            raise StorageError(f"Write failed: {e}", operation="set", key=key) from e

        if not result:
            logger.error("Redis SET not acknowledged", key=key[:30])
            raise StorageError("Write was not acknowledged", operation="set", key=key)

    async def delete(self, key: str) -> bool:
        try:
            await self._ensure_initialized()
            result = await self.client.delete(key)
            return result > 0
        except StorageError:
            raise
        except Exception as e:
            logger.error("Redis DELETE failed", key=key[:30], error=str(e))
            raise StorageError(f"Delete failed: {e}", operation="delete", key=key) from e
