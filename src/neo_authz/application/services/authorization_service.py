"""
Authorization service - Public entry point of the engine.

Exposes every operation HTTP controllers and services call, built once per
process and passed by reference.
"""
from typing import List, Optional, Sequence

from ...domain.entities.permission import Permission
from ...domain.entities.role import Role
from ...domain.value_objects.decision import AuthorizationResult
from ...domain.value_objects.scope_context import EntityScope, ScopeContext
from ...permissions.names import PermissionName, parse_permission_name, validate_permission_name
from .permission_resolver import PermissionResolver
from .role_administration import RoleAdministrationService
from .scope_authorizer import ScopeAuthorizer
from .scoped_registration_guard import ScopedRegistrationGuard


class AuthorizationService:
    """Facade over the resolver, scope authorizer and guards."""
    
    def __init__(
        self,
        resolver: PermissionResolver,
        scope_authorizer: ScopeAuthorizer,
        registration_guard: ScopedRegistrationGuard,
        role_administration: RoleAdministrationService
    ):
        self.resolver = resolver
        self.scope_authorizer = scope_authorizer
        self.registration_guard = registration_guard
        self.role_administration = role_administration
    
    async def has_permission(self, principal_id: str, permission: str) -> bool:
        return await self.resolver.has_permission(principal_id, permission)
    
    async def has_any_permission(self, principal_id: str, permissions: Sequence[str]) -> bool:
        return await self.resolver.has_any_permission(principal_id, permissions)
    
    async def has_all_permissions(self, principal_id: str, permissions: Sequence[str]) -> bool:
        return await self.resolver.has_all_permissions(principal_id, permissions)
    
    async def has_resource_permission(
        self,
        principal_id: str,
        permission: str,
        resource_type: str,
        resource_id: str
    ) -> bool:
        return await self.scope_authorizer.has_resource_permission(
            principal_id, permission, resource_type, resource_id
        )
    
    async def check_permission(self, principal_id: str, permission: str) -> AuthorizationResult:
        return await self.resolver.check_permission(principal_id, permission)
    
    async def check_resource_permission(
        self,
        principal_id: str,
        permission: str,
        resource_type: str,
        resource_id: str
    ) -> AuthorizationResult:
        return await self.scope_authorizer.check_resource_permission(
            principal_id, permission, resource_type, resource_id
        )
    
    async def get_user_permissions(self, principal_id: str) -> List[Permission]:
        return await self.resolver.get_user_permissions(principal_id)
    
    async def get_user_roles(self, principal_id: str) -> List[Role]:
        return await self.resolver.get_user_roles(principal_id)
    
    async def get_max_role_level(self, principal_id: str) -> int:
        return await self.resolver.get_max_role_level(principal_id)
    
    async def invalidate_user(self, principal_id: str) -> None:
        await self.resolver.invalidate_user(principal_id)
    
    async def invalidate_all(self) -> None:
        await self.resolver.invalidate_all()
    
    def can_create_at_scope(self, scope, context: ScopeContext) -> bool:
        return self.registration_guard.can_create_at_scope(scope, context)
    
    def can_access_existing(self, entity: EntityScope, context: ScopeContext) -> bool:
        return self.registration_guard.can_access_existing(entity, context)
    
    @staticmethod
    def validate_permission_name(name: str) -> bool:
        return validate_permission_name(name)
    
    @staticmethod
    def parse_permission_name(name: str) -> Optional[PermissionName]:
        return parse_permission_name(name)
