"""
Authorization application layer - Permission resolution and scope checks.

Orchestrates domain entities and coordinates with the durable store and
the cache store.
"""

from .services.permission_catalog import PermissionCatalog
from .services.permission_cache import PermissionCache
from .services.permission_resolver import PermissionResolver
from .services.ownership import OwnershipRegistry
from .services.scope_authorizer import ScopeAuthorizer
from .services.scoped_registration_guard import ScopedRegistrationGuard
from .services.role_administration import RoleAdministrationService
from .services.authorization_service import AuthorizationService

__all__ = [
    "PermissionCatalog",
    "PermissionCache",
    "PermissionResolver",
    "OwnershipRegistry",
    "ScopeAuthorizer",
    "ScopedRegistrationGuard",
    "RoleAdministrationService",
    "AuthorizationService",
]
