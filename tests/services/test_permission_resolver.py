"""Tests for the permission resolver."""

import pytest

from neo_authz.domain.value_objects.decision import Decision


@pytest.fixture
def seeded(store, role_factory, permission_factory):
    """Principals with typical role layouts."""
    store.roles["root"] = [role_factory("super_admin", level=100)]
    store.roles["alice"] = [
        role_factory("tenant_admin", level=50, tenant_id="t-1", permissions=[
            permission_factory("tenant.*"),
            permission_factory("tenant.billing.read"),
        ])
    ]
    store.roles["bob"] = [
        role_factory("account_manager", level=20, permissions=[
            permission_factory("accounts.*.read"),
        ]),
        role_factory("account_admin", level=30),
    ]
    store.direct_permissions["bob"] = [permission_factory("profile.self.update")]
    return store


class TestCheckPermission:
    
    @pytest.mark.asyncio
    async def test_super_admin_bypasses_matching(self, resolver, seeded):
        result = await resolver.check_permission("root", "anything.at.all")
        
        assert result.granted
        assert result.matched_pattern is None
        # Permissions are never loaded for a super admin
        assert seeded.calls.get("find_direct_permissions_for_principal", 0) == 0
    
    @pytest.mark.asyncio
    async def test_module_wildcard_grant(self, resolver, seeded):
        result = await resolver.check_permission("alice", "tenant.users.delete")
        
        assert result.granted
        assert result.matched_pattern == "tenant.*"
    
    @pytest.mark.asyncio
    async def test_direct_permission_grant(self, resolver, seeded):
        assert await resolver.has_permission("bob", "profile.self.update")
        assert await resolver.has_permission("bob", "accounts.billing.read")
        assert not await resolver.has_permission("bob", "accounts.billing.update")
    
    @pytest.mark.asyncio
    async def test_unknown_principal_is_denied(self, resolver, seeded):
        result = await resolver.check_permission("nobody", "tenant.billing.read")
        
        assert result.decision == Decision.DENIED
    
    @pytest.mark.asyncio
    async def test_store_outage_fails_closed_as_unavailable(self, resolver, seeded):
        seeded.unavailable = True
        
        result = await resolver.check_permission("alice", "tenant.billing.read")
        
        assert result.decision == Decision.UNAVAILABLE
        assert result.is_unavailable
        assert not await resolver.has_permission("root", "tenant.billing.read")
    
    @pytest.mark.asyncio
    async def test_repeat_checks_are_served_from_cache(self, resolver, seeded):
        await resolver.has_permission("alice", "tenant.billing.read")
        await resolver.has_permission("alice", "tenant.users.read")
        
        assert seeded.calls["find_direct_permissions_for_principal"] == 1
        assert seeded.calls["find_roles_for_principal"] == 1
    
    @pytest.mark.asyncio
    async def test_braces_in_principal_id_still_fail_closed(self, resolver, seeded):
        seeded.unavailable = True
        
        assert await resolver.has_permission("{tenant}", "tenant.billing.read") is False
        assert await resolver.has_any_permission("{0}", ["tenant.billing.read"]) is False
        assert await resolver.get_user_roles("{tenant}") == []


class TestCombinators:
    
    @pytest.mark.asyncio
    async def test_any_with_empty_list_is_denied(self, resolver, seeded):
        assert await resolver.has_any_permission("root", []) is False
    
    @pytest.mark.asyncio
    async def test_all_with_empty_list_is_granted(self, resolver, seeded):
        assert await resolver.has_all_permissions("nobody", []) is True
    
    @pytest.mark.asyncio
    async def test_any_grants_on_first_satisfied(self, resolver, seeded):
        result = await resolver.check_any_permission(
            "bob", ["platform.users.read", "profile.self.update"]
        )
        
        assert result.granted
        assert result.permission == "profile.self.update"
    
    @pytest.mark.asyncio
    async def test_all_reports_first_unsatisfied(self, resolver, seeded):
        result = await resolver.check_all_permissions(
            "bob", ["profile.self.update", "platform.users.read", "tenant.users.read"]
        )
        
        assert not result.granted
        assert result.permission == "platform.users.read"
    
    @pytest.mark.asyncio
    async def test_combinators_fail_closed(self, resolver, seeded):
        seeded.unavailable = True
        
        assert await resolver.has_any_permission("alice", ["tenant.users.read"]) is False
        assert await resolver.has_all_permissions("alice", ["tenant.users.read"]) is False


class TestAggregates:
    
    @pytest.mark.asyncio
    async def test_max_role_level(self, resolver, seeded):
        assert await resolver.get_max_role_level("bob") == 30
        assert await resolver.get_max_role_level("root") == 100
        assert await resolver.get_max_role_level("nobody") == 0
    
    @pytest.mark.asyncio
    async def test_aggregates_fail_closed(self, resolver, seeded):
        seeded.unavailable = True
        
        assert await resolver.get_max_role_level("bob") == 0
        assert await resolver.get_user_roles("bob") == []
        assert await resolver.get_user_permissions("bob") == []
        assert await resolver.is_super_admin("root") is False
    
    @pytest.mark.asyncio
    async def test_user_permissions_include_direct(self, resolver, seeded):
        names = {perm.name for perm in await resolver.get_user_permissions("bob")}
        
        assert names == {"accounts.*.read", "profile.self.update"}
    
    @pytest.mark.asyncio
    async def test_is_super_admin(self, resolver, seeded):
        assert await resolver.is_super_admin("root")
        assert not await resolver.is_super_admin("alice")


class TestInvalidation:
    
    @pytest.mark.asyncio
    async def test_grant_visible_after_invalidate(self, resolver, seeded, permission_factory):
        assert not await resolver.has_permission("bob", "platform.audit.read")
        
        seeded.direct_permissions["bob"].append(permission_factory("platform.audit.read"))
        assert not await resolver.has_permission("bob", "platform.audit.read")
        
        assert await resolver.invalidate_user("bob") is True
        assert await resolver.has_permission("bob", "platform.audit.read")
    
    @pytest.mark.asyncio
    async def test_grant_visible_after_ttl(self, resolver, seeded, clock, permission_factory):
        await resolver.has_permission("bob", "platform.audit.read")
        seeded.direct_permissions["bob"].append(permission_factory("platform.audit.read"))
        
        clock.advance(301)
        
        assert await resolver.has_permission("bob", "platform.audit.read")
    
    def test_name_helpers(self, resolver):
        assert resolver.validate_permission_name("tenant.billing.read")
        assert resolver.parse_permission_name("tenant.billing") is None
