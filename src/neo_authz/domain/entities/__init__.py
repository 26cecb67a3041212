"""Domain entities for authorization."""

from .permission import Permission, PermissionScope
from .role import (
    Role,
    SUPER_ADMIN,
    PLATFORM_ADMIN,
    TENANT_ADMIN,
    TENANT_MANAGER,
    ACCOUNT_ADMIN,
    ACCOUNT_MANAGER,
    PLATFORM_ROLE_CODES,
    TENANT_ROLE_CODES,
    ACCOUNT_ROLE_CODES,
)

__all__ = [
    "Permission",
    "PermissionScope",
    "Role",
    "SUPER_ADMIN",
    "PLATFORM_ADMIN",
    "TENANT_ADMIN",
    "TENANT_MANAGER",
    "ACCOUNT_ADMIN",
    "ACCOUNT_MANAGER",
    "PLATFORM_ROLE_CODES",
    "TENANT_ROLE_CODES",
    "ACCOUNT_ROLE_CODES",
]
