"""
Ownership predicates for ``own``-scoped permissions.

Each ownable resource type registers a predicate; resource types without
one are never owned. Supporting a new resource type means registering a
predicate, not editing the scope authorizer.
"""
from typing import Awaitable, Callable, Dict, Optional

from loguru import logger

from ...domain.protocols.store_protocols import PermissionStoreProtocol

OwnershipPredicate = Callable[[str, str], Awaitable[bool]]


class OwnershipRegistry:
    """Registry of ownership predicates keyed by resource type."""
    
    def __init__(self):
        self._predicates: Dict[str, OwnershipPredicate] = {}
    
    def register(self, resource_type: str, predicate: OwnershipPredicate) -> None:
        if resource_type in self._predicates:
            logger.warning(f"Replacing ownership predicate for resource type {resource_type}")
        self._predicates[resource_type] = predicate
    
    def unregister(self, resource_type: str) -> None:
        self._predicates.pop(resource_type, None)
    
    def get(self, resource_type: str) -> Optional[OwnershipPredicate]:
        return self._predicates.get(resource_type)
    
    def __contains__(self, resource_type: str) -> bool:
        return resource_type in self._predicates
    
    async def is_owner(self, principal_id: str, resource_type: str, resource_id: str) -> bool:
        """Check ownership, False for unregistered resource types."""
        predicate = self._predicates.get(resource_type)
        if predicate is None:
            return False
        return await predicate(principal_id, resource_id)


async def owns_user(principal_id: str, resource_id: str) -> bool:
    """A principal owns its own user record."""
    if principal_id is None or resource_id is None:
        return False
    return str(principal_id) == str(resource_id)


class AccountOwnership:
    """A principal owns the account it belongs to."""
    
    def __init__(self, store: PermissionStoreProtocol):
        self.store = store
    
    async def __call__(self, principal_id: str, resource_id: str) -> bool:
        if resource_id is None:
            return False
        account_id = await self.store.find_account_id_for_principal(principal_id)
        return account_id is not None and str(account_id) == str(resource_id)


def create_default_ownership_registry(store: PermissionStoreProtocol) -> OwnershipRegistry:
    """Registry with the ``user`` and ``account`` predicates."""
    registry = OwnershipRegistry()
    registry.register("user", owns_user)
    registry.register("account", AccountOwnership(store))
    return registry
