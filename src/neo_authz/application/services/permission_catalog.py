"""
Permission catalog - Loads a principal's roles and effective permissions.

Pure data access over the durable store, no policy.
"""
from typing import Dict, List, Optional

from loguru import logger

from ...core.exceptions import StoreUnavailableError
from ...domain.entities.permission import Permission
from ...domain.entities.role import Role
from ...domain.protocols.store_protocols import PermissionStoreProtocol


class PermissionCatalog:
    """
    Loads roles and the effective permission set of a principal.
    
    The effective permission set is the union of the permissions of every
    held role and the directly assigned permissions, deduplicated by
    permission id (never by name).
    
    ``fetch_*`` methods raise StoreUnavailableError; ``load_*`` methods
    return an empty list instead.
    """
    
    def __init__(self, store: PermissionStoreProtocol):
        self.store = store
    
    async def fetch_roles(self, principal_id: str) -> List[Role]:
        """Roles explicitly assigned to the principal, no inheritance."""
        roles = await self.store.find_roles_for_principal(principal_id)
        
        unique_roles: Dict[str, Role] = {}
        for role in roles:
            unique_roles.setdefault(role.id, role)
        return list(unique_roles.values())
    
    async def fetch_permissions(
        self,
        principal_id: str,
        roles: Optional[List[Role]] = None
    ) -> List[Permission]:
        """
        Effective permission set of the principal.
        
        Args:
            principal_id: Principal to resolve
            roles: Roles already loaded for the principal, queried when omitted
        """
        if roles is None:
            roles = await self.store.find_roles_for_principal(principal_id)
        direct = await self.store.find_direct_permissions_for_principal(principal_id)
        
        # Deduplicate by permission ID, first occurrence wins
        unique_perms: Dict[str, Permission] = {}
        for role in roles:
            for perm in role.permissions:
                unique_perms.setdefault(perm.id, perm)
        for perm in direct:
            unique_perms.setdefault(perm.id, perm)
        
        return list(unique_perms.values())
    
    async def find_account_id(self, principal_id: str) -> Optional[str]:
        return await self.store.find_account_id_for_principal(principal_id)
    
    async def load_roles(self, principal_id: str) -> List[Role]:
        try:
            return await self.fetch_roles(principal_id)
        except StoreUnavailableError as e:
            logger.warning(f"Failed to load roles for principal {principal_id}: {e}")
            return []
    
    async def load_permissions(self, principal_id: str) -> List[Permission]:
        try:
            return await self.fetch_permissions(principal_id)
        except StoreUnavailableError as e:
            logger.warning(f"Failed to load permissions for principal {principal_id}: {e}")
            return []
