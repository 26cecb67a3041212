"""
Permission resolver - Answers permission questions for a principal.

Combines the catalog, the cache and the pattern matcher. Store outages are
absorbed here and turned into fail-closed answers: False for checks, 0 for
levels, empty lists for listings.
"""
from typing import List, Optional, Sequence, Tuple

from loguru import logger

from ...core.exceptions import StoreUnavailableError
from ...domain.entities.permission import Permission
from ...domain.entities.role import Role
from ...domain.value_objects.decision import AuthorizationResult
from ...permissions.matcher import PatternMatcher
from ...permissions.names import PermissionName, parse_permission_name, validate_permission_name
from .permission_cache import PermissionCache
from .permission_catalog import PermissionCatalog


class PermissionResolver:
    """
    Resolves boolean and aggregate permission questions.
    
    Features:
    - super_admin bypass without pattern evaluation
    - Wildcard grants via PatternMatcher
    - any/all combinators
    - Cached role and permission lookups
    """
    
    def __init__(
        self,
        catalog: PermissionCatalog,
        cache: PermissionCache,
        matcher: Optional[PatternMatcher] = None
    ):
        self.catalog = catalog
        self.cache = cache
        self.matcher = matcher or PatternMatcher()
    
    # Loading
    
    async def load_roles(self, principal_id: str) -> List[Role]:
        """Roles of the principal through the cache. Raises StoreUnavailableError."""
        return await self.cache.get_roles(
            principal_id, lambda: self.catalog.fetch_roles(principal_id)
        )
    
    async def load_permissions(self, principal_id: str) -> List[Permission]:
        """Effective permissions through the cache. Raises StoreUnavailableError."""
        async def fetch() -> List[Permission]:
            # Derived from the cached role set so both entries share one snapshot
            roles = await self.load_roles(principal_id)
            return await self.catalog.fetch_permissions(principal_id, roles=roles)
        
        return await self.cache.get_permissions(principal_id, fetch)
    
    async def _load_grants(self, principal_id: str) -> Tuple[List[Role], List[Permission]]:
        roles = await self.load_roles(principal_id)
        if any(role.is_super_admin for role in roles):
            return roles, []
        return roles, await self.load_permissions(principal_id)
    
    def _evaluate(
        self,
        principal_id: str,
        permission_name: str,
        roles: Sequence[Role],
        permissions: Sequence[Permission]
    ) -> AuthorizationResult:
        if any(role.is_super_admin for role in roles):
            return AuthorizationResult.grant(
                principal_id, permission_name, reason="super_admin role"
            )
        
        pattern = self.matcher.first_match((perm.name for perm in permissions), permission_name)
        if pattern is not None:
            return AuthorizationResult.grant(
                principal_id, permission_name,
                reason=f"Granted by {pattern}", matched_pattern=pattern
            )
        
        return AuthorizationResult.deny(
            principal_id, permission_name, reason="No held permission matches"
        )
    
    def _unavailable(self, principal_id: str, permission: Optional[str], error: Exception) -> AuthorizationResult:
        logger.warning(f"Permission check for principal {principal_id} on {permission or '*'} failed closed: {error}")
        return AuthorizationResult.unavailable(principal_id, permission, reason=str(error))
    
    # Checks
    
    async def check_permission(self, principal_id: str, permission_name: str) -> AuthorizationResult:
        """Check a single permission and explain the decision."""
        try:
            roles, permissions = await self._load_grants(principal_id)
        except StoreUnavailableError as e:
            return self._unavailable(principal_id, permission_name, e)
        
        result = self._evaluate(principal_id, permission_name, roles, permissions)
        logger.debug(str(result))
        return result
    
    async def check_any_permission(self, principal_id: str, permission_names: Sequence[str]) -> AuthorizationResult:
        """Granted on the first satisfied name, denied for an empty list."""
        if not permission_names:
            return AuthorizationResult.deny(principal_id, reason="No permissions requested")
        
        try:
            roles, permissions = await self._load_grants(principal_id)
        except StoreUnavailableError as e:
            return self._unavailable(principal_id, None, e)
        
        for name in permission_names:
            result = self._evaluate(principal_id, name, roles, permissions)
            if result.granted:
                return result
        
        return AuthorizationResult.deny(
            principal_id, reason="None of the requested permissions is held"
        )
    
    async def check_all_permissions(self, principal_id: str, permission_names: Sequence[str]) -> AuthorizationResult:
        """Denied on the first unsatisfied name, vacuously granted for an empty list."""
        if not permission_names:
            return AuthorizationResult.grant(principal_id, reason="No permissions requested")
        
        try:
            roles, permissions = await self._load_grants(principal_id)
        except StoreUnavailableError as e:
            return self._unavailable(principal_id, None, e)
        
        for name in permission_names:
            result = self._evaluate(principal_id, name, roles, permissions)
            if not result.granted:
                return result
        
        return AuthorizationResult.grant(principal_id, reason="All requested permissions held")
    
    async def has_permission(self, principal_id: str, permission_name: str) -> bool:
        return (await self.check_permission(principal_id, permission_name)).granted
    
    async def has_any_permission(self, principal_id: str, permission_names: Sequence[str]) -> bool:
        return (await self.check_any_permission(principal_id, permission_names)).granted
    
    async def has_all_permissions(self, principal_id: str, permission_names: Sequence[str]) -> bool:
        return (await self.check_all_permissions(principal_id, permission_names)).granted
    
    async def is_super_admin(self, principal_id: str) -> bool:
        try:
            roles = await self.load_roles(principal_id)
        except StoreUnavailableError as e:
            self._unavailable(principal_id, None, e)
            return False
        return any(role.is_super_admin for role in roles)
    
    # Aggregates
    
    async def get_max_role_level(self, principal_id: str) -> int:
        """Highest role level held, 0 without roles."""
        roles = await self.get_user_roles(principal_id)
        return max((role.level for role in roles), default=0)
    
    async def get_user_roles(self, principal_id: str) -> List[Role]:
        try:
            return await self.load_roles(principal_id)
        except StoreUnavailableError as e:
            self._unavailable(principal_id, None, e)
            return []
    
    async def get_user_permissions(self, principal_id: str) -> List[Permission]:
        try:
            return await self.load_permissions(principal_id)
        except StoreUnavailableError as e:
            self._unavailable(principal_id, None, e)
            return []
    
    # Cache maintenance
    
    async def invalidate_user(self, principal_id: str) -> bool:
        return await self.cache.invalidate(principal_id)
    
    async def invalidate_all(self) -> bool:
        return await self.cache.invalidate_all()
    
    # Names
    
    @staticmethod
    def validate_permission_name(name: str) -> bool:
        return validate_permission_name(name)
    
    @staticmethod
    def parse_permission_name(name: str) -> Optional[PermissionName]:
        return parse_permission_name(name)
