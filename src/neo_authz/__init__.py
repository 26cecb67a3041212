"""Neo-Authz - Multi-tenant authorization engine for NeoMultiTenant services.

Resolves whether a principal holds a permission, optionally on a specific
resource, across the platform, tenant, account and user tiers, with
wildcard permission patterns and cached role/permission lookups.
"""

from .__version__ import __version__

from .config import AuthorizationSettings, get_settings, setup_logging
from .core.exceptions import (
    AuthorizationError,
    StoreUnavailableError,
    CacheUnavailableError,
    InvalidScopeError,
)
from .domain import (
    Permission,
    PermissionScope,
    Role,
    Decision,
    AuthorizationResult,
    ScopeLevel,
    ScopeContext,
    EntityScope,
    PermissionStoreProtocol,
    CacheStoreProtocol,
)
from .permissions import (
    PatternMatcher,
    matches,
    PermissionName,
    parse_permission_name,
    validate_permission_name,
    build_permission_name,
)
from .application import (
    PermissionCatalog,
    PermissionCache,
    PermissionResolver,
    OwnershipRegistry,
    ScopeAuthorizer,
    ScopedRegistrationGuard,
    RoleAdministrationService,
    AuthorizationService,
)
from .factory import create_authorization_service, create_authorization_service_from_settings

__all__ = [
    "__version__",
    # Configuration
    "AuthorizationSettings",
    "get_settings",
    "setup_logging",
    # Exceptions
    "AuthorizationError",
    "StoreUnavailableError",
    "CacheUnavailableError",
    "InvalidScopeError",
    # Domain
    "Permission",
    "PermissionScope",
    "Role",
    "Decision",
    "AuthorizationResult",
    "ScopeLevel",
    "ScopeContext",
    "EntityScope",
    "PermissionStoreProtocol",
    "CacheStoreProtocol",
    # Permission names and matching
    "PatternMatcher",
    "matches",
    "PermissionName",
    "parse_permission_name",
    "validate_permission_name",
    "build_permission_name",
    # Services
    "PermissionCatalog",
    "PermissionCache",
    "PermissionResolver",
    "OwnershipRegistry",
    "ScopeAuthorizer",
    "ScopedRegistrationGuard",
    "RoleAdministrationService",
    "AuthorizationService",
    "create_authorization_service",
    "create_authorization_service_from_settings",
]
