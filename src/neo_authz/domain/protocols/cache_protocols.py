"""
Cache store protocol for the authorization engine.

Any key/value store with per-key atomic get/set/delete, TTL on write and
prefix deletion satisfies it.
"""
from typing import Protocol, runtime_checkable, Any, Optional


@runtime_checkable
class CacheStoreProtocol(Protocol):
    """Key/value cache operations.
    
    Implementations raise CacheUnavailableError when the backend cannot
    be reached.
    """
    
    async def get(self, key: str) -> Optional[Any]:
        """Get a JSON-compatible value, None when absent or expired."""
        ...
    
    async def set(self, key: str, value: Any, ttl: int) -> None:
        """Store a JSON-compatible value for ``ttl`` seconds."""
        ...
    
    async def delete(self, *keys: str) -> int:
        """Delete keys, returning how many existed."""
        ...
    
    async def delete_by_prefix(self, prefix: str) -> int:
        """Delete every key starting with ``prefix``."""
        ...
