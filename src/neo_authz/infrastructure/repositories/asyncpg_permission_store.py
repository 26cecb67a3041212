"""
Permission store implementation using AsyncPG.

Read-only queries over the role/permission catalog and the principal
assignment tables. Expired or inactive assignments and soft-deleted rows
are never returned.
"""
import asyncio
import re
from typing import Any, Dict, List, Optional

import asyncpg
from loguru import logger

from ...core.exceptions import StoreUnavailableError
from ...domain.entities.permission import Permission
from ...domain.entities.role import Role

_SCHEMA_NAME = re.compile(r"^[a-z_][a-z0-9_]*$")

_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


class AsyncPGPermissionStore:
    """
    AsyncPG implementation of the permission store protocol.
    
    Principal and role identifiers are compared as text so the store works
    with integer and UUID primary keys alike.
    """
    
    def __init__(self, database_manager, schema: str = "admin"):
        """
        Initialize with database connection manager and schema.
        
        Args:
            database_manager: Object exposing asyncpg-style fetch/fetchrow/fetchval
            schema: Schema holding the authorization tables
        """
        self.db = database_manager
        self.schema = self._validate_schema_name(schema)
    
    @staticmethod
    def _validate_schema_name(schema_name: str) -> str:
        """Validate schema name to prevent SQL injection."""
        if not _SCHEMA_NAME.match(schema_name or ""):
            raise ValueError(f"Invalid schema name: {schema_name}")
        return schema_name
    
    async def find_roles_for_principal(self, principal_id: str) -> List[Role]:
        """Get roles assigned to a principal, each with its permissions."""
        query = f"""
            SELECT
                r.id::text AS role_id, r.code, r.name, r.level, r.tenant_id::text AS tenant_id,
                r.is_system, r.description AS role_description,
                p.id::text AS permission_id, p.name AS permission_name,
                p.scope, p.description AS permission_description
            FROM {self.schema}.user_roles ur
            JOIN {self.schema}.roles r ON r.id = ur.role_id
            LEFT JOIN {self.schema}.role_permissions rp ON rp.role_id = r.id
            LEFT JOIN {self.schema}.permissions p
                ON p.id = rp.permission_id AND p.deleted_at IS NULL
            WHERE ur.user_id::text = $1
                AND ur.is_active = true
                AND (ur.expires_at IS NULL OR ur.expires_at > NOW())
                AND r.deleted_at IS NULL
            ORDER BY r.level DESC, r.code ASC
        """
        rows = await self._fetch("find_roles_for_principal", query, str(principal_id))
        
        roles: Dict[str, Dict[str, Any]] = {}
        for row in rows:
            entry = roles.get(row["role_id"])
            if entry is None:
                entry = roles[row["role_id"]] = {"row": row, "permissions": []}
            if row["permission_id"] is not None:
                entry["permissions"].append(Permission.from_record(
                    id=row["permission_id"],
                    name=row["permission_name"],
                    scope=row["scope"],
                    description=row["permission_description"]
                ))
        
        return [
            Role(
                id=role_id,
                code=entry["row"]["code"],
                name=entry["row"]["name"] or entry["row"]["code"],
                level=entry["row"]["level"] or 0,
                tenant_id=entry["row"]["tenant_id"],
                is_system=bool(entry["row"]["is_system"]),
                description=entry["row"]["role_description"],
                permissions=entry["permissions"]
            )
            for role_id, entry in roles.items()
        ]
    
    async def find_direct_permissions_for_principal(self, principal_id: str) -> List[Permission]:
        """Get permissions granted to a principal outside of any role."""
        query = f"""
            SELECT p.id::text AS id, p.name, p.scope, p.description
            FROM {self.schema}.user_permissions up
            JOIN {self.schema}.permissions p ON p.id = up.permission_id
            WHERE up.user_id::text = $1
                AND up.is_active = true
                AND (up.expires_at IS NULL OR up.expires_at > NOW())
                AND p.deleted_at IS NULL
        """
        rows = await self._fetch("find_direct_permissions_for_principal", query, str(principal_id))
        return [self._record_to_permission(row) for row in rows]
    
    async def find_permission_by_name(self, name: str) -> Optional[Permission]:
        """Get a catalog permission by name."""
        query = f"""
            SELECT p.id::text AS id, p.name, p.scope, p.description
            FROM {self.schema}.permissions p
            WHERE p.name = $1 AND p.deleted_at IS NULL
            ORDER BY p.id
            LIMIT 1
        """
        try:
            record = await self.db.fetchrow(query, name)
        except _STORE_ERRORS as e:
            raise self._unavailable("find_permission_by_name", e) from e
        
        if not record:
            return None
        return self._record_to_permission(record)
    
    async def find_account_id_for_principal(self, principal_id: str) -> Optional[str]:
        """Get the account a principal belongs to."""
        query = f"""
            SELECT u.account_id::text
            FROM {self.schema}.users u
            WHERE u.id::text = $1 AND u.deleted_at IS NULL
        """
        try:
            return await self.db.fetchval(query, str(principal_id))
        except _STORE_ERRORS as e:
            raise self._unavailable("find_account_id_for_principal", e) from e
    
    async def count_role_holders(self, role_id: str) -> int:
        """Count principals with an active assignment of the role."""
        query = f"""
            SELECT COUNT(DISTINCT ur.user_id)
            FROM {self.schema}.user_roles ur
            WHERE ur.role_id::text = $1
                AND ur.is_active = true
                AND (ur.expires_at IS NULL OR ur.expires_at > NOW())
        """
        try:
            return int(await self.db.fetchval(query, str(role_id)) or 0)
        except _STORE_ERRORS as e:
            raise self._unavailable("count_role_holders", e) from e
    
    async def _fetch(self, operation: str, query: str, *args) -> List[Any]:
        try:
            return await self.db.fetch(query, *args)
        except _STORE_ERRORS as e:
            raise self._unavailable(operation, e) from e
    
    @staticmethod
    def _unavailable(operation: str, error: Exception) -> StoreUnavailableError:
        logger.warning(f"Permission store query {operation} failed: {error}")
        return StoreUnavailableError(f"Permission store query failed: {error}", operation=operation)
    
    @staticmethod
    def _record_to_permission(record) -> Permission:
        return Permission.from_record(
            id=record["id"],
            name=record["name"],
            scope=record["scope"],
            description=record["description"]
        )
