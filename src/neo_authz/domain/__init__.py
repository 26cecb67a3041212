"""
Authorization domain layer.

Entities, value objects and the protocols of the external collaborators
(durable store and cache store).
"""

from .entities import (
    Permission,
    PermissionScope,
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
from .value_objects import (
    Decision,
    AuthorizationResult,
    ScopeLevel,
    ScopeContext,
    EntityScope,
)
from .protocols import PermissionStoreProtocol, CacheStoreProtocol

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
    "Decision",
    "AuthorizationResult",
    "ScopeLevel",
    "ScopeContext",
    "EntityScope",
    "PermissionStoreProtocol",
    "CacheStoreProtocol",
]
