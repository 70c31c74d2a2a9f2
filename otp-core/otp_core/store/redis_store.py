"""
Redis Expiring Store
====================
Redis-backed expiring store using SET EX / GET / DEL.
"""

from typing import Optional
import structlog
from redis.exceptions import RedisError

from ..errors import StoreUnavailableError
from .base import ExpiringStore

logger = structlog.get_logger(__name__)


class RedisExpiringStore(ExpiringStore):
    """
    Redis-backed expiring store.

    Relies on Redis key expiry for eviction; every operation is a single command.
    """

    def __init__(self, redis_client, key_prefix: str = ""):
        """
        Args:
            redis_client: Async Redis client (redis.asyncio.Redis)
            key_prefix: Prepended to every key, e.g. "anketa:"
        """
        self.redis = redis_client
        self.key_prefix = key_prefix

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}{key}"

    async def get(self, key: str) -> Optional[str]:
        try:
            value = await self.redis.get(self._key(key))
        except RedisError as e:
            logger.error("Redis get failed", error=str(e))
            raise StoreUnavailableError("Expiring store unavailable", details=str(e)) from e

        if isinstance(value, bytes):
            return value.decode()
        return value

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        try:
            await self.redis.set(self._key(key), value, ex=max(1, int(ttl_seconds)))
        except RedisError as e:
            logger.error("Redis set failed", error=str(e))
            raise StoreUnavailableError("Expiring store unavailable", details=str(e)) from e

    async def delete(self, key: str) -> None:
        try:
            await self.redis.delete(self._key(key))
        except RedisError as e:
            logger.error("Redis delete failed", error=str(e))
            raise StoreUnavailableError("Expiring store unavailable", details=str(e)) from e
