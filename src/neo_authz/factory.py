"""
Factory functions for building the authorization service with its
collaborators wired together.
"""
from typing import Optional

from loguru import logger

from .config.settings import AuthorizationSettings, get_settings
from .domain.protocols.cache_protocols import CacheStoreProtocol
from .domain.protocols.store_protocols import PermissionStoreProtocol
from .application.services.authorization_service import AuthorizationService
from .application.services.ownership import OwnershipRegistry, create_default_ownership_registry
from .application.services.permission_cache import PermissionCache
from .application.services.permission_catalog import PermissionCatalog
from .application.services.permission_resolver import PermissionResolver
from .application.services.role_administration import RoleAdministrationService
from .application.services.scope_authorizer import ScopeAuthorizer
from .application.services.scoped_registration_guard import ScopedRegistrationGuard
from .permissions.matcher import PatternMatcher


def create_authorization_service(
    store: PermissionStoreProtocol,
    cache_store: CacheStoreProtocol,
    settings: Optional[AuthorizationSettings] = None,
    ownership: Optional[OwnershipRegistry] = None,
    registration_guard: Optional[ScopedRegistrationGuard] = None
) -> AuthorizationService:
    """
    Create an authorization service with proper dependencies.
    
    Args:
        store: Durable store of roles and permissions
        cache_store: Key/value store backing the permission cache
        settings: Engine settings, defaults to the environment
        ownership: Ownership predicates, defaults to user and account
        registration_guard: Guard for scoped entities, defaults to the tag registry
        
    Returns:
        Configured AuthorizationService instance
    """
    settings = settings or get_settings()
    
    cache = PermissionCache(
        cache_store,
        ttl=settings.permission_cache_ttl,
        key_prefix=settings.cache_key_prefix
    )
    resolver = PermissionResolver(PermissionCatalog(store), cache, PatternMatcher())
    
    return AuthorizationService(
        resolver=resolver,
        scope_authorizer=ScopeAuthorizer(resolver, ownership or create_default_ownership_registry(store)),
        registration_guard=registration_guard or ScopedRegistrationGuard(),
        role_administration=RoleAdministrationService(resolver, store)
    )


def create_authorization_service_from_settings(
    settings: Optional[AuthorizationSettings] = None
) -> AuthorizationService:
    """
    Create an authorization service backed by PostgreSQL and Redis.
    
    Falls back to an in-process cache store when no Redis URL is set.
    """
    from .infrastructure.cache.memory_cache_store import MemoryCacheStore
    from .infrastructure.cache.redis_cache_store import RedisCacheStore
    from .infrastructure.database.connection import DatabaseManager
    from .infrastructure.repositories.asyncpg_permission_store import AsyncPGPermissionStore
    
    settings = settings or get_settings()
    
    store = AsyncPGPermissionStore(DatabaseManager.from_settings(settings), schema=settings.admin_schema)
    
    if settings.redis_url:
        cache_store = RedisCacheStore.from_url(settings.redis_url)
    else:
        logger.warning("No Redis URL configured, permission cache is process-local")
        cache_store = MemoryCacheStore()
    
    return create_authorization_service(store, cache_store, settings=settings)
