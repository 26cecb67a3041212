"""
Infrastructure adapters for the authorization engine.

- AsyncPG permission store (durable store)
- Redis and in-memory cache stores
"""

from .database import DatabaseManager
from .repositories import AsyncPGPermissionStore
from .cache import MemoryCacheStore, RedisCacheStore

__all__ = [
    "DatabaseManager",
    "AsyncPGPermissionStore",
    "MemoryCacheStore",
    "RedisCacheStore",
]
