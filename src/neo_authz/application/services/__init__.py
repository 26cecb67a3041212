"""Application services of the authorization engine."""

from .permission_catalog import PermissionCatalog
from .permission_cache import PermissionCache, PERMISSIONS_NAMESPACE, ROLES_NAMESPACE
from .permission_resolver import PermissionResolver
from .ownership import OwnershipRegistry, AccountOwnership, owns_user, create_default_ownership_registry
from .scope_authorizer import ScopeAuthorizer
from .scoped_registration_guard import ScopedRegistrationGuard, TAGGABLE_ENTITY_SCOPES
from .role_administration import RoleAdministrationService
from .authorization_service import AuthorizationService

__all__ = [
    "PermissionCatalog",
    "PermissionCache",
    "PERMISSIONS_NAMESPACE",
    "ROLES_NAMESPACE",
    "PermissionResolver",
    "OwnershipRegistry",
    "AccountOwnership",
    "owns_user",
    "create_default_ownership_registry",
    "ScopeAuthorizer",
    "ScopedRegistrationGuard",
    "TAGGABLE_ENTITY_SCOPES",
    "RoleAdministrationService",
    "AuthorizationService",
]
