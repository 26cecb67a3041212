"""
Durable store protocol for the authorization engine.

The store is read-only from the engine's point of view; role and
permission rows are written by the administrative layer, which must
invalidate the permission cache after every committed write.
"""
from typing import Protocol, runtime_checkable, List, Optional

from ..entities.permission import Permission
from ..entities.role import Role


@runtime_checkable
class PermissionStoreProtocol(Protocol):
    """Read access to roles, permissions and principal assignments.
    
    Implementations raise StoreUnavailableError when the backend cannot
    answer. An unknown principal is not an error: it has no roles and no
    permissions.
    """
    
    async def find_roles_for_principal(self, principal_id: str) -> List[Role]:
        """Roles explicitly assigned to the principal, with their permissions."""
        ...
    
    async def find_direct_permissions_for_principal(self, principal_id: str) -> List[Permission]:
        """Permissions assigned to the principal independently of any role."""
        ...
    
    async def find_permission_by_name(self, name: str) -> Optional[Permission]:
        """
        Catalog lookup of a single permission.

        Not used by the checks themselves; the administrative layer calls it
        to resolve a name to its declared scope before granting it.
        """
        ...
    
    async def find_account_id_for_principal(self, principal_id: str) -> Optional[str]:
        """Account the principal belongs to, if any."""
        ...
    
    async def count_role_holders(self, role_id: str) -> int:
        """Number of principals currently holding the role."""
        ...
