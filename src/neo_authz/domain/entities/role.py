"""
Role entity - Named collections of permissions with a privilege level.
"""
from dataclasses import dataclass
from typing import List, Optional, Set, FrozenSet

from .permission import Permission


SUPER_ADMIN = "super_admin"
PLATFORM_ADMIN = "platform_admin"
TENANT_ADMIN = "tenant_admin"
TENANT_MANAGER = "tenant_manager"
ACCOUNT_ADMIN = "account_admin"
ACCOUNT_MANAGER = "account_manager"

# Role thresholds, each tier includes every tier above it
PLATFORM_ROLE_CODES: FrozenSet[str] = frozenset({SUPER_ADMIN, PLATFORM_ADMIN})
TENANT_ROLE_CODES: FrozenSet[str] = PLATFORM_ROLE_CODES | {TENANT_ADMIN, TENANT_MANAGER}
ACCOUNT_ROLE_CODES: FrozenSet[str] = TENANT_ROLE_CODES | {ACCOUNT_ADMIN, ACCOUNT_MANAGER}


@dataclass(frozen=True)
class Role:
    """
    Core role entity.
    
    Roles belong to at most one tenant (``tenant_id=None`` for platform
    roles). ``level`` is compared numerically for max-privilege checks.
    System roles are protected from deletion.
    """
    id: str
    code: str  # e.g., "super_admin", "tenant_admin"
    name: str = ""
    level: int = 0
    tenant_id: Optional[str] = None
    is_system: bool = False
    description: Optional[str] = None
    permissions: List[Permission] = None
    
    def __post_init__(self):
        """Initialize permissions as empty list if None."""
        if self.permissions is None:
            object.__setattr__(self, 'permissions', [])
        if not self.name:
            object.__setattr__(self, 'name', self.code)
    
    @property
    def is_super_admin(self) -> bool:
        return self.code == SUPER_ADMIN
    
    @property
    def is_platform_role(self) -> bool:
        return self.tenant_id is None
    
    def get_permission_names(self) -> Set[str]:
        """Get all permission names granted by this role."""
        return {perm.name for perm in self.permissions}
    
    def __str__(self) -> str:
        return self.name
    
    def __repr__(self) -> str:
        return f"Role(code='{self.code}', level={self.level}, permissions={len(self.permissions)})"
