"""Tests for role administration guards and cache invalidation hooks."""

import pytest

from neo_authz.application.services.role_administration import RoleAdministrationService


@pytest.fixture
def admin(resolver, store):
    return RoleAdministrationService(resolver, store)


@pytest.fixture
def seeded(store, role_factory, permission_factory):
    store.roles["root"] = [role_factory("super_admin", level=100)]
    store.roles["alice"] = [
        role_factory("tenant_admin", level=50, tenant_id="t-1", permissions=[
            permission_factory("tenant.roles.assign"),
            permission_factory("tenant.roles.delete"),
        ])
    ]
    store.roles["bob"] = [role_factory("member", level=10)]
    return store


class TestRequiredPermission:
    
    def test_platform_and_tenant_roles(self, role_factory):
        assert RoleAdministrationService.required_permission(
            role_factory("platform_admin"), "update"
        ) == "platform.roles.update"
        assert RoleAdministrationService.required_permission(
            role_factory("editor", tenant_id="t-1"), "assign"
        ) == "tenant.roles.assign"
    
    def test_unknown_action(self, role_factory):
        with pytest.raises(ValueError):
            RoleAdministrationService.required_permission(role_factory("editor"), "promote")


class TestAssignAndDelete:
    
    @pytest.mark.asyncio
    async def test_assign_requires_level_at_least_role_level(self, admin, seeded, role_factory):
        assert await admin.can_assign_role("alice", role_factory("editor", level=40, tenant_id="t-1"))
        assert await admin.can_assign_role("alice", role_factory("peer", level=50, tenant_id="t-1"))
        assert not await admin.can_assign_role("alice", role_factory("owner", level=60, tenant_id="t-1"))
    
    @pytest.mark.asyncio
    async def test_assign_requires_grant(self, admin, seeded, role_factory):
        assert not await admin.can_assign_role("bob", role_factory("editor", level=1, tenant_id="t-1"))
        assert not await admin.can_assign_role("alice", role_factory("platform_admin", level=1))
    
    @pytest.mark.asyncio
    async def test_super_admin_assigns_anything(self, admin, seeded, role_factory):
        assert await admin.can_assign_role("root", role_factory("platform_admin", level=1000))
    
    @pytest.mark.asyncio
    async def test_delete_blocked_while_role_is_held(self, admin, seeded, role_factory):
        role = role_factory("editor", tenant_id="t-1")
        seeded.role_holders[role.id] = 3
        
        assert not await admin.can_delete_role("alice", role)
        
        seeded.role_holders[role.id] = 0
        assert await admin.can_delete_role("alice", role)
    
    @pytest.mark.asyncio
    async def test_system_role_deletion_needs_super_admin(self, admin, seeded, role_factory):
        system_role = role_factory("billing", tenant_id="t-1", is_system=True)
        
        assert not await admin.can_delete_role("alice", system_role)
        assert await admin.can_delete_role("root", system_role)
    
    @pytest.mark.asyncio
    async def test_delete_denied_when_holders_cannot_be_counted(self, admin, seeded, role_factory):
        # Warm the cache so only the holder count hits the store
        await admin.resolver.has_permission("alice", "tenant.roles.delete")
        seeded.unavailable = True
        
        assert not await admin.can_delete_role("alice", role_factory("editor", tenant_id="t-1"))


class TestInvalidationHooks:
    
    @pytest.mark.asyncio
    async def test_role_assigned_invalidates_principal(self, admin, seeded, role_factory):
        assert not await admin.resolver.has_permission("bob", "tenant.roles.assign")
        
        seeded.roles["bob"].append(role_factory("tenant_admin", level=50, permissions=[]))
        await admin.role_assigned("bob")
        
        assert await admin.resolver.get_max_role_level("bob") == 50
    
    @pytest.mark.asyncio
    async def test_role_revoked_invalidates_principal(self, admin, seeded):
        assert await admin.resolver.has_permission("alice", "tenant.roles.assign")
        
        seeded.roles["alice"] = []
        assert await admin.role_revoked("alice") is True
        
        assert not await admin.resolver.has_permission("alice", "tenant.roles.assign")
    
    @pytest.mark.asyncio
    async def test_role_permissions_changed_for_listed_holders(self, admin, seeded, cache_store):
        await admin.resolver.get_user_roles("alice")
        await admin.resolver.get_user_roles("bob")
        
        assert await admin.role_permissions_changed(seeded.roles["alice"][0], ["alice"]) is True
        
        assert cache_store.keys() == ["neo_authz:roles:bob"]
    
    @pytest.mark.asyncio
    async def test_role_permissions_changed_without_holders_clears_all(self, admin, seeded, cache_store):
        await admin.resolver.get_user_roles("alice")
        await admin.resolver.get_user_roles("bob")
        
        await admin.role_permissions_changed(seeded.roles["alice"][0])
        
        assert len(cache_store) == 0
    
    @pytest.mark.asyncio
    async def test_principal_permissions_changed(self, admin, seeded, permission_factory):
        assert not await admin.resolver.has_permission("bob", "reports.sales.read")
        
        seeded.direct_permissions["bob"] = [permission_factory("reports.sales.read")]
        await admin.principal_permissions_changed("bob")
        
        assert await admin.resolver.has_permission("bob", "reports.sales.read")
