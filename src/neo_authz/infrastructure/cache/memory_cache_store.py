"""
In-memory cache store.

Implements the cache store protocol inside the process for tests and
single-instance deployments. Values are kept JSON-encoded so callers never
share mutable state with the cache.
"""

import asyncio
import json
import time
from typing import Any, Callable, Dict, Optional, Tuple

from loguru import logger


class MemoryCacheStore:
    """Async in-memory key/value store with per-key TTL."""
    
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        """
        Initialize memory cache store.
        
        Args:
            clock: Time source in seconds, injectable for tests
        """
        self._clock = clock
        self._entries: Dict[str, Tuple[str, float]] = {}
        self._lock = asyncio.Lock()
    
    async def get(self, key: str) -> Optional[Any]:
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            
            payload, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            
            return json.loads(payload)
    
    async def set(self, key: str, value: Any, ttl: int) -> None:
        if ttl <= 0:
            raise ValueError("TTL must be positive")
        
        async with self._lock:
            self._entries[key] = (json.dumps(value), self._clock() + ttl)
    
    async def delete(self, *keys: str) -> int:
        async with self._lock:
            deleted = 0
            for key in keys:
                if self._entries.pop(key, None) is not None:
                    deleted += 1
            return deleted
    
    async def delete_by_prefix(self, prefix: str) -> int:
        async with self._lock:
            matching = [key for key in self._entries if key.startswith(prefix)]
            for key in matching:
                del self._entries[key]
        
        logger.debug(f"Deleted {len(matching)} in-memory cache entries with prefix {prefix}")
        return len(matching)
    
    def __len__(self) -> int:
        return len(self._entries)
    
    def keys(self):
        """Snapshot of stored keys, expired ones included."""
        return list(self._entries)
