"""Tests for the permission catalog."""

import pytest

from neo_authz.core.exceptions import StoreUnavailableError


class TestPermissionCatalog:
    
    @pytest.mark.asyncio
    async def test_effective_permissions_union_roles_and_direct(
        self, catalog, store, role_factory, permission_factory
    ):
        read = permission_factory("tenant.billing.read")
        store.roles["user-1"] = [role_factory("tenant_manager", permissions=[read])]
        store.direct_permissions["user-1"] = [permission_factory("profile.self.update")]
        
        names = [perm.name for perm in await catalog.fetch_permissions("user-1")]
        
        assert names == ["tenant.billing.read", "profile.self.update"]
    
    @pytest.mark.asyncio
    async def test_deduplicates_by_id_not_by_name(self, catalog, store, role_factory, permission_factory):
        shared = permission_factory("tenant.billing.read", id="p-1")
        twin = permission_factory("tenant.billing.read", id="p-2")
        store.roles["user-1"] = [
            role_factory("tenant_manager", permissions=[shared]),
            role_factory("account_admin", permissions=[shared]),
        ]
        store.direct_permissions["user-1"] = [twin]
        
        ids = [perm.id for perm in await catalog.fetch_permissions("user-1")]
        
        assert ids == ["p-1", "p-2"]
    
    @pytest.mark.asyncio
    async def test_preloaded_roles_skip_role_query(self, catalog, store, role_factory, permission_factory):
        roles = [role_factory("tenant_manager", permissions=[permission_factory("tenant.billing.read")])]
        store.direct_permissions["user-1"] = [permission_factory("profile.self.update")]
        
        names = [perm.name for perm in await catalog.fetch_permissions("user-1", roles=roles)]
        
        assert names == ["tenant.billing.read", "profile.self.update"]
        assert store.calls.get("find_roles_for_principal", 0) == 0
    
    @pytest.mark.asyncio
    async def test_roles_deduplicated_by_id(self, catalog, store, role_factory):
        role = role_factory("tenant_admin")
        store.roles["user-1"] = [role, role]
        
        assert len(await catalog.fetch_roles("user-1")) == 1
    
    @pytest.mark.asyncio
    async def test_unknown_principal_has_nothing(self, catalog):
        assert await catalog.fetch_roles("ghost") == []
        assert await catalog.fetch_permissions("ghost") == []
    
    @pytest.mark.asyncio
    async def test_fetch_raises_when_store_unavailable(self, catalog, store):
        store.unavailable = True
        
        with pytest.raises(StoreUnavailableError):
            await catalog.fetch_permissions("user-1")
    
    @pytest.mark.asyncio
    async def test_load_returns_empty_when_store_unavailable(self, catalog, store):
        store.unavailable = True
        
        assert await catalog.load_roles("user-1") == []
        assert await catalog.load_permissions("user-1") == []
    
    @pytest.mark.asyncio
    async def test_find_account_id(self, catalog, store):
        store.accounts["user-1"] = "acc-9"
        
        assert await catalog.find_account_id("user-1") == "acc-9"
        assert await catalog.find_account_id("user-2") is None
