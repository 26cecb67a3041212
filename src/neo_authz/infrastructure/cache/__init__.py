"""Cache store adapters."""

from .memory_cache_store import MemoryCacheStore
from .redis_cache_store import RedisCacheStore

__all__ = [
    "MemoryCacheStore",
    "RedisCacheStore",
]
