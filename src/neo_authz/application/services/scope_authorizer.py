"""
Scope authorizer - Resource-scoped permission checks.

A base grant is necessary but not sufficient: the declared scope of the
concrete permission decides what else must hold.

Tenant and account scopes are coarse role thresholds and do not compare
``resource_id`` with the principal's own tenant or account. Filtering by
tenant/account identity is expected at the query layer.
"""
from typing import List, Optional

from loguru import logger

from ...core.exceptions import StoreUnavailableError
from ...domain.entities.permission import Permission, PermissionScope
from ...domain.entities.role import (
    Role,
    PLATFORM_ROLE_CODES,
    TENANT_ROLE_CODES,
    ACCOUNT_ROLE_CODES,
)
from ...domain.value_objects.decision import AuthorizationResult
from .ownership import OwnershipRegistry
from .permission_resolver import PermissionResolver

_ROLE_THRESHOLDS = {
    PermissionScope.PLATFORM: PLATFORM_ROLE_CODES,
    PermissionScope.TENANT: TENANT_ROLE_CODES,
    PermissionScope.ACCOUNT: ACCOUNT_ROLE_CODES,
}


class ScopeAuthorizer:
    """Checks permissions against a concrete resource."""
    
    def __init__(self, resolver: PermissionResolver, ownership: OwnershipRegistry):
        self.resolver = resolver
        self.ownership = ownership
    
    async def check_resource_permission(
        self,
        principal_id: str,
        permission_name: str,
        resource_type: str,
        resource_id: str
    ) -> AuthorizationResult:
        """
        Check a permission on a specific resource.
        
        Args:
            principal_id: Principal making the request
            permission_name: Concrete permission name (e.g., "profile.self.update")
            resource_type: Resource type (e.g., "user", "account", "tenant")
            resource_id: Identifier of the resource
        """
        base = await self.resolver.check_permission(principal_id, permission_name)
        if not base.granted:
            return base
        
        try:
            roles = await self.resolver.load_roles(principal_id)
            if any(role.is_super_admin for role in roles):
                return AuthorizationResult.grant(principal_id, permission_name, reason="super_admin role")
            
            permissions = await self.resolver.load_permissions(principal_id)
        except StoreUnavailableError as e:
            return self._unavailable(principal_id, permission_name, e)
        
        held = self._find_concrete(permissions, permission_name)
        if held is None:
            return AuthorizationResult.deny(
                principal_id, permission_name,
                reason="Granted only by pattern, no scoped permission to check"
            )
        
        if held.scope is None:
            logger.warning(f"Permission {held.name} ({held.id}) has unknown scope {held.raw_scope!r}, denying")
            return AuthorizationResult.deny(
                principal_id, permission_name, reason=f"Unknown scope {held.raw_scope}"
            )
        
        if held.scope == PermissionScope.PUBLIC:
            return AuthorizationResult.grant(principal_id, permission_name, reason="public scope")
        
        if held.scope == PermissionScope.OWN:
            try:
                owned = await self.ownership.is_owner(principal_id, resource_type, resource_id)
            except StoreUnavailableError as e:
                return self._unavailable(principal_id, permission_name, e)
            if owned:
                return AuthorizationResult.grant(
                    principal_id, permission_name, reason=f"Owns {resource_type} {resource_id}"
                )
            return AuthorizationResult.deny(
                principal_id, permission_name, reason=f"Does not own {resource_type} {resource_id}"
            )
        
        return self._check_role_threshold(principal_id, permission_name, held.scope, roles)
    
    async def has_resource_permission(
        self,
        principal_id: str,
        permission_name: str,
        resource_type: str,
        resource_id: str
    ) -> bool:
        result = await self.check_resource_permission(
            principal_id, permission_name, resource_type, resource_id
        )
        return result.granted
    
    @staticmethod
    def _find_concrete(permissions: List[Permission], permission_name: str) -> Optional[Permission]:
        """Scope belongs to the concrete permission, not to the granting pattern."""
        return next((perm for perm in permissions if perm.name == permission_name), None)
    
    @staticmethod
    def _check_role_threshold(
        principal_id: str,
        permission_name: str,
        scope: PermissionScope,
        roles: List[Role]
    ) -> AuthorizationResult:
        threshold = _ROLE_THRESHOLDS.get(scope)
        if threshold is None:
            return AuthorizationResult.deny(principal_id, permission_name, reason=f"Unhandled scope {scope}")
        
        held_codes = {role.code for role in roles}
        if held_codes & threshold:
            return AuthorizationResult.grant(
                principal_id, permission_name, reason=f"Role threshold met for {scope.value} scope"
            )
        return AuthorizationResult.deny(
            principal_id, permission_name, reason=f"No role qualifies for {scope.value} scope"
        )
    
    @staticmethod
    def _unavailable(principal_id: str, permission_name: str, error: Exception) -> AuthorizationResult:
        logger.warning(f"Resource permission check for principal {principal_id} failed closed: {error}")
        return AuthorizationResult.unavailable(principal_id, permission_name, reason=str(error))
