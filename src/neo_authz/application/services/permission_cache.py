"""
Permission cache - Write-through cache of catalog results per principal.

Keys are ``{prefix}:{namespace}:{principal_id}`` with one namespace for
permission sets and one for role sets. Entries expire ``ttl`` seconds after
they were written; the write time travels with the payload, so an entry is
never served past its TTL even if the backing store keeps it longer.

Cache unavailability degrades to a miss. Loader failures are propagated
and never cached.

A check racing ahead of an invalidation may observe the pre-mutation set
until the invalidation lands or the TTL runs out. Writers must invalidate
only after their change is committed.
"""
import time
from typing import Any, Awaitable, Callable, Dict, List, Tuple

from loguru import logger

from ...core.exceptions import CacheUnavailableError
from ...domain.entities.permission import Permission
from ...domain.entities.role import Role
from ...domain.protocols.cache_protocols import CacheStoreProtocol
from ...infrastructure.cache.serializers import (
    serialize_permissions,
    deserialize_permissions,
    serialize_roles,
    deserialize_roles,
)

PERMISSIONS_NAMESPACE = "permissions"
ROLES_NAMESPACE = "roles"

_CODECS: Dict[str, Tuple[Callable, Callable]] = {
    PERMISSIONS_NAMESPACE: (serialize_permissions, deserialize_permissions),
    ROLES_NAMESPACE: (serialize_roles, deserialize_roles),
}


class PermissionCache:
    """Per-principal cache of role and permission sets."""
    
    def __init__(
        self,
        store: CacheStoreProtocol,
        ttl: int = 300,
        key_prefix: str = "neo_authz",
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize permission cache.
        
        Args:
            store: Cache store shared with the rest of the process
            ttl: Seconds an entry stays valid after it was written
            key_prefix: Prefix isolating this cache inside the store
            clock: Wall-clock time source, injectable for tests
        """
        if ttl <= 0:
            raise ValueError("TTL must be positive")
        
        self.store = store
        self.ttl = ttl
        self.key_prefix = key_prefix
        self._clock = clock
    
    def key_for(self, namespace: str, principal_id: str) -> str:
        return f"{self.key_prefix}:{namespace}:{principal_id}"
    
    async def get_or_load(
        self,
        namespace: str,
        principal_id: str,
        loader: Callable[[], Awaitable[Any]]
    ) -> Any:
        """
        Return the cached value for a principal, loading it on a miss.
        
        Args:
            namespace: PERMISSIONS_NAMESPACE or ROLES_NAMESPACE
            principal_id: Principal the value belongs to
            loader: Coroutine factory producing the value on a miss
        """
        serialize, deserialize = _CODECS[namespace]
        key = self.key_for(namespace, principal_id)
        
        cached = await self._read(key)
        if cached is not None:
            try:
                value = deserialize(cached)
                logger.debug(f"Cache hit for {key}")
                return value
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"Discarding malformed cache entry {key}: {e}")
        
        logger.debug(f"Cache miss for {key}")
        value = await loader()
        
        envelope = {"cached_at": self._clock(), "data": serialize(value)}
        try:
            await self.store.set(key, envelope, self.ttl)
        except CacheUnavailableError as e:
            logger.warning(f"Failed to cache {key}: {e}")
        
        return value
    
    async def get_permissions(
        self,
        principal_id: str,
        loader: Callable[[], Awaitable[List[Permission]]]
    ) -> List[Permission]:
        return await self.get_or_load(PERMISSIONS_NAMESPACE, principal_id, loader)
    
    async def get_roles(
        self,
        principal_id: str,
        loader: Callable[[], Awaitable[List[Role]]]
    ) -> List[Role]:
        return await self.get_or_load(ROLES_NAMESPACE, principal_id, loader)
    
    async def invalidate(self, principal_id: str) -> bool:
        """
        Remove a principal's cached role and permission sets.
        
        Returns:
            False if the cache store could not be reached
        """
        keys = [self.key_for(namespace, principal_id) for namespace in _CODECS]
        try:
            await self.store.delete(*keys)
        except CacheUnavailableError as e:
            logger.error(f"Failed to invalidate permission cache for principal {principal_id}: {e}")
            return False
        
        logger.info(f"Invalidated permission cache for principal {principal_id}")
        return True
    
    async def invalidate_all(self) -> bool:
        """Remove every entry of this cache, leaving other data in the store."""
        try:
            count = await self.store.delete_by_prefix(f"{self.key_prefix}:")
        except CacheUnavailableError as e:
            logger.error(f"Failed to invalidate permission cache: {e}")
            return False
        
        logger.info(f"Invalidated {count} permission cache entries")
        return True
    
    async def _read(self, key: str) -> Any:
        try:
            envelope = await self.store.get(key)
        except CacheUnavailableError as e:
            logger.warning(f"Permission cache unavailable, loading {key} from store: {e}")
            return None
        
        if not isinstance(envelope, dict) or "data" not in envelope:
            return None
        
        cached_at = envelope.get("cached_at")
        if not isinstance(cached_at, (int, float)) or self._clock() - cached_at >= self.ttl:
            return None
        
        return envelope["data"]
