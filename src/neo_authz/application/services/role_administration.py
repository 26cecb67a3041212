"""
Role administration guard.

Decides whether a principal may manage roles and keeps the permission
cache coherent after the administrative layer has committed a change.
Role and assignment rows themselves are written elsewhere.
"""
from typing import Iterable, Optional

from loguru import logger

from ...core.exceptions import StoreUnavailableError
from ...domain.entities.role import Role
from ...domain.protocols.store_protocols import PermissionStoreProtocol
from ...permissions.names import build_permission_name
from .permission_resolver import PermissionResolver

ROLE_ACTIONS = ("create", "read", "update", "delete", "assign")


class RoleAdministrationService:
    """Guards role management and invalidates affected cache entries."""
    
    def __init__(self, resolver: PermissionResolver, store: PermissionStoreProtocol):
        self.resolver = resolver
        self.store = store
    
    @staticmethod
    def required_permission(role: Role, action: str) -> str:
        """
        Permission needed to perform ``action`` on ``role``.
        
        Platform roles are managed through ``platform.roles.*``, tenant
        roles through ``tenant.roles.*``.
        """
        if action not in ROLE_ACTIONS:
            raise ValueError(f"Unknown role action: {action}")
        module = "platform" if role.is_platform_role else "tenant"
        return build_permission_name(module, "roles", action)
    
    async def can_manage_role(self, principal_id: str, role: Role, action: str) -> bool:
        return await self.resolver.has_permission(
            principal_id, self.required_permission(role, action)
        )
    
    async def can_assign_role(self, principal_id: str, role: Role) -> bool:
        """Assigners need the grant and a role level at least as high as the role's."""
        if not await self.can_manage_role(principal_id, role, "assign"):
            return False
        if await self.resolver.is_super_admin(principal_id):
            return True
        return await self.resolver.get_max_role_level(principal_id) >= role.level
    
    async def can_delete_role(self, principal_id: str, role: Role) -> bool:
        """
        Deletion is blocked while anyone holds the role, and system roles
        can only be deleted by a super admin.
        """
        if not await self.can_manage_role(principal_id, role, "delete"):
            return False
        
        if role.is_system and not await self.resolver.is_super_admin(principal_id):
            logger.info(f"Principal {principal_id} denied deleting system role {role.code}")
            return False
        
        try:
            holders = await self.store.count_role_holders(role.id)
        except StoreUnavailableError as e:
            logger.warning(f"Cannot count holders of role {role.code}, denying deletion: {e}")
            return False
        
        if holders > 0:
            logger.info(f"Role {role.code} still held by {holders} principal(s), deletion blocked")
            return False
        return True
    
    # Called after the change has been committed
    
    async def role_assigned(self, principal_id: str) -> bool:
        return await self.resolver.invalidate_user(principal_id)
    
    async def role_revoked(self, principal_id: str) -> bool:
        return await self.resolver.invalidate_user(principal_id)
    
    async def principal_permissions_changed(self, principal_id: str) -> bool:
        return await self.resolver.invalidate_user(principal_id)
    
    async def role_permissions_changed(self, role: Role, holder_ids: Optional[Iterable[str]] = None) -> bool:
        """
        Invalidate holders of an edited role; without the holder list every
        cached principal is invalidated.
        """
        if holder_ids is None:
            return await self.resolver.invalidate_all()
        
        ok = True
        for principal_id in holder_ids:
            ok = await self.resolver.invalidate_user(principal_id) and ok
        return ok
