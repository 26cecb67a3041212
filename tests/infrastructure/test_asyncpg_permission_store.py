"""Tests for the asyncpg permission store with a mocked database manager."""

from unittest.mock import AsyncMock

import asyncpg
import pytest

from neo_authz.core.exceptions import StoreUnavailableError
from neo_authz.domain.entities.permission import PermissionScope
from neo_authz.infrastructure.repositories.asyncpg_permission_store import AsyncPGPermissionStore


def role_row(role_id, code, level, permission_id=None, permission_name=None, scope=None):
    return {
        "role_id": role_id,
        "code": code,
        "name": None,
        "level": level,
        "tenant_id": None,
        "is_system": False,
        "role_description": None,
        "permission_id": permission_id,
        "permission_name": permission_name,
        "scope": scope,
        "permission_description": None,
    }


@pytest.fixture
def mock_db():
    return AsyncMock()


@pytest.fixture
def pg_store(mock_db):
    return AsyncPGPermissionStore(mock_db, schema="admin")


class TestAsyncPGPermissionStore:
    
    def test_rejects_unsafe_schema(self, mock_db):
        with pytest.raises(ValueError):
            AsyncPGPermissionStore(mock_db, schema="admin; DROP TABLE users")
    
    @pytest.mark.asyncio
    async def test_groups_role_rows(self, pg_store, mock_db):
        mock_db.fetch.return_value = [
            role_row("1", "tenant_admin", 50, "10", "tenant.*", "tenant"),
            role_row("1", "tenant_admin", 50, "11", "tenant.billing.read", "tenant"),
            role_row("2", "viewer", 5),
        ]
        
        roles = await pg_store.find_roles_for_principal("user-1")
        
        assert [role.code for role in roles] == ["tenant_admin", "viewer"]
        assert roles[0].get_permission_names() == {"tenant.*", "tenant.billing.read"}
        assert roles[0].name == "tenant_admin"
        assert roles[1].permissions == []
        query, principal_id = mock_db.fetch.await_args.args
        assert "admin.user_roles" in query
        assert principal_id == "user-1"
    
    @pytest.mark.asyncio
    async def test_unknown_scope_is_kept_raw(self, pg_store, mock_db):
        mock_db.fetch.return_value = [
            {"id": "7", "name": "reports.sales.read", "scope": "galaxy", "description": None}
        ]
        
        [permission] = await pg_store.find_direct_permissions_for_principal("user-1")
        
        assert permission.scope is None
        assert permission.raw_scope == "galaxy"
    
    @pytest.mark.asyncio
    async def test_find_permission_by_name(self, pg_store, mock_db):
        mock_db.fetchrow.return_value = {
            "id": "3", "name": "profile.self.update", "scope": "own", "description": "Edit own profile"
        }
        
        permission = await pg_store.find_permission_by_name("profile.self.update")
        
        assert permission.scope == PermissionScope.OWN
        assert permission.resource == "self"
        
        mock_db.fetchrow.return_value = None
        assert await pg_store.find_permission_by_name("missing.perm.name") is None
    
    @pytest.mark.asyncio
    async def test_scalar_queries(self, pg_store, mock_db):
        mock_db.fetchval.return_value = "acc-1"
        assert await pg_store.find_account_id_for_principal("user-1") == "acc-1"
        
        mock_db.fetchval.return_value = None
        assert await pg_store.count_role_holders("role-1") == 0
    
    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        asyncpg.PostgresError("boom"),
        asyncpg.InterfaceError("pool closed"),
        OSError("connection refused"),
    ])
    async def test_database_errors_become_store_unavailable(self, pg_store, mock_db, error):
        mock_db.fetch.side_effect = error
        
        with pytest.raises(StoreUnavailableError) as exc_info:
            await pg_store.find_roles_for_principal("user-1")
        
        assert exc_info.value.details["operation"] == "find_roles_for_principal"
