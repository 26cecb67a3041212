"""Pytest configuration and fixtures for neo-authz tests."""

from typing import Dict, List, Optional

import pytest

from neo_authz.core.exceptions import StoreUnavailableError
from neo_authz.domain.entities.permission import Permission, PermissionScope
from neo_authz.domain.entities.role import Role
from neo_authz.infrastructure.cache.memory_cache_store import MemoryCacheStore
from neo_authz.application.services.permission_cache import PermissionCache
from neo_authz.application.services.permission_catalog import PermissionCatalog
from neo_authz.application.services.permission_resolver import PermissionResolver
from neo_authz.application.services.ownership import create_default_ownership_registry
from neo_authz.application.services.scope_authorizer import ScopeAuthorizer


class FakeClock:
    """Manually advanced time source."""
    
    def __init__(self, start: float = 1_700_000_000.0):
        self.now = start
    
    def __call__(self) -> float:
        return self.now
    
    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryPermissionStore:
    """Permission store double backed by dictionaries, counting calls."""
    
    def __init__(self):
        self.roles: Dict[str, List[Role]] = {}
        self.direct_permissions: Dict[str, List[Permission]] = {}
        self.accounts: Dict[str, str] = {}
        self.role_holders: Dict[str, int] = {}
        self.catalog: Dict[str, Permission] = {}
        self.calls: Dict[str, int] = {}
        self.unavailable = False
    
    def _record(self, operation: str) -> None:
        self.calls[operation] = self.calls.get(operation, 0) + 1
        if self.unavailable:
            raise StoreUnavailableError(operation=operation)
    
    async def find_roles_for_principal(self, principal_id: str) -> List[Role]:
        self._record("find_roles_for_principal")
        return list(self.roles.get(principal_id, []))
    
    async def find_direct_permissions_for_principal(self, principal_id: str) -> List[Permission]:
        self._record("find_direct_permissions_for_principal")
        return list(self.direct_permissions.get(principal_id, []))
    
    async def find_permission_by_name(self, name: str) -> Optional[Permission]:
        self._record("find_permission_by_name")
        return self.catalog.get(name)
    
    async def find_account_id_for_principal(self, principal_id: str) -> Optional[str]:
        self._record("find_account_id_for_principal")
        return self.accounts.get(principal_id)
    
    async def count_role_holders(self, role_id: str) -> int:
        self._record("count_role_holders")
        return self.role_holders.get(role_id, 0)


def make_permission(name: str, scope=PermissionScope.TENANT, id: Optional[str] = None) -> Permission:
    return Permission(id=id or f"perm-{name}", name=name, scope=scope)


def make_role(code: str, level: int = 0, permissions=None, tenant_id=None, is_system=False) -> Role:
    return Role(
        id=f"role-{code}",
        code=code,
        level=level,
        tenant_id=tenant_id,
        is_system=is_system,
        permissions=list(permissions or [])
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache_store(clock):
    return MemoryCacheStore(clock=clock)


@pytest.fixture
def store():
    return InMemoryPermissionStore()


@pytest.fixture
def permission_cache(cache_store, clock):
    return PermissionCache(cache_store, ttl=300, key_prefix="neo_authz", clock=clock)


@pytest.fixture
def catalog(store):
    return PermissionCatalog(store)


@pytest.fixture
def resolver(catalog, permission_cache):
    return PermissionResolver(catalog, permission_cache)


@pytest.fixture
def scope_authorizer(resolver, store):
    return ScopeAuthorizer(resolver, create_default_ownership_registry(store))


@pytest.fixture
def permission_factory():
    return make_permission


@pytest.fixture
def role_factory():
    return make_role
