"""
Redis cache store implementation.

Backs the permission cache with Redis: JSON payloads, SETEX for TTL and
SCAN-based prefix deletion so bulk invalidation only touches keys under
the given prefix.
"""
import json
import re
from typing import Any, Optional

import redis.asyncio as redis
from redis.exceptions import RedisError
from loguru import logger

from ...core.exceptions import CacheUnavailableError

_GLOB_SPECIAL = re.compile(r"([*?\[\]\\])")


def _escape_glob(value: str) -> str:
    """Escape Redis MATCH glob characters."""
    return _GLOB_SPECIAL.sub(r"\\\1", value)


class RedisCacheStore:
    """
    Redis implementation of the cache store protocol.
    
    Every backend failure is raised as CacheUnavailableError; deciding how
    to degrade is left to the permission cache.
    """

    def __init__(self, redis_client: redis.Redis, scan_batch_size: int = 500):
        self._redis = redis_client
        self._scan_batch_size = scan_batch_size

    async def get(self, key: str) -> Optional[Any]:
        try:
            result = await self._redis.get(key)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Failed to read cache key: {e}", key=key) from e
        
        if result is None:
            return None
        
        try:
            return json.loads(result)
        except ValueError:
            logger.warning(f"Discarding undecodable cache entry {key}")
            return None

    async def set(self, key: str, value: Any, ttl: int) -> None:
        try:
            await self._redis.setex(key, ttl, json.dumps(value))
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Failed to write cache key: {e}", key=key) from e

    async def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return await self._redis.delete(*keys)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Failed to delete cache keys: {e}", key=keys[0]) from e

    async def delete_by_prefix(self, prefix: str) -> int:
        pattern = f"{_escape_glob(prefix)}*"
        deleted = 0
        try:
            batch = []
            async for key in self._redis.scan_iter(match=pattern, count=self._scan_batch_size):
                batch.append(key)
                if len(batch) >= self._scan_batch_size:
                    deleted += await self._redis.delete(*batch)
                    batch = []
            if batch:
                deleted += await self._redis.delete(*batch)
        except (RedisError, OSError) as e:
            raise CacheUnavailableError(f"Failed to delete cache prefix: {e}", key=prefix) from e
        
        logger.debug(f"Deleted {deleted} cache entries with prefix {prefix}")
        return deleted

    @classmethod
    def from_url(cls, redis_url: str, **kwargs) -> "RedisCacheStore":
        """Create a store with its own client from a Redis URL."""
        return cls(redis.from_url(redis_url), **kwargs)
