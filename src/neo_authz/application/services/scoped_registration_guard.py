"""
Scoped registration guard - Entity access across the tenancy hierarchy.

Entities such as tags are bound to a scope level. Creating one requires
the context to carry every identifier the level needs; reading an existing
one requires the context identifiers to equal the entity's on every level
at or above the entity's scope. A missing identifier is a deny that no
role can override.
"""
from typing import Dict, FrozenSet, Mapping, Optional, Iterable

from loguru import logger

from ...domain.entities.role import PLATFORM_ROLE_CODES, TENANT_ROLE_CODES
from ...domain.value_objects.scope_context import EntityScope, ScopeContext, ScopeLevel

_T = ScopeLevel.TENANT
_A = ScopeLevel.ACCOUNT
_U = ScopeLevel.USER
_P = ScopeLevel.PLATFORM

# Which entity types may be tagged at which scope levels
TAGGABLE_ENTITY_SCOPES: Dict[str, FrozenSet[ScopeLevel]] = {
    # User & Account Entities
    "user_profile": frozenset({_T, _A, _U}),
    "account": frozenset({_T}),
    
    # Content & Configuration
    "model_schema": frozenset({_P, _T}),
    "option_set": frozenset({_P, _T}),
    "email_template": frozenset({_P, _T}),
    "industry_template": frozenset({_P, _T}),
    "form": frozenset({_T, _A}),
    "zone": frozenset({_T, _A}),
    "module": frozenset({_P, _T}),
    
    # System & Workflow
    "translation": frozenset({_P, _T}),
    "subscription": frozenset({_T}),
    "workflow": frozenset({_T, _A}),
    
    # Marketplace
    "job_posting": frozenset({_T, _A}),
    "application": frozenset({_A, _U}),
    
    # Analytics & Reporting
    "report": frozenset({_T, _A}),
    "dashboard": frozenset({_T, _A, _U}),
}

_GLOBAL_LEVELS = frozenset({ScopeLevel.PLATFORM, ScopeLevel.CONFIGURATION})
_IDENTIFIER_FIELDS = ("tenant_id", "account_id", "user_id")


def _present(value) -> bool:
    return value is not None and value != ""


def _parse_level(scope) -> Optional[ScopeLevel]:
    try:
        return ScopeLevel(scope)
    except ValueError:
        return None


class ScopedRegistrationGuard:
    """Stateless create/read/update/delete checks for scoped entities."""
    
    def __init__(self, entity_scopes: Optional[Mapping[str, Iterable[ScopeLevel]]] = None):
        scopes = TAGGABLE_ENTITY_SCOPES if entity_scopes is None else entity_scopes
        self.entity_scopes: Dict[str, FrozenSet[ScopeLevel]] = {
            entity_type: frozenset(ScopeLevel(level) for level in levels)
            for entity_type, levels in scopes.items()
        }
    
    def can_create_at_scope(self, scope, context: ScopeContext) -> bool:
        """Check whether the context may create an entity at ``scope``."""
        level = _parse_level(scope)
        if level is None:
            logger.warning(f"Unknown scope level {scope!r}, denying")
            return False
        
        if level in _GLOBAL_LEVELS:
            return context.has_any_role(PLATFORM_ROLE_CODES)
        
        if not all(_present(getattr(context, name)) for name in level.qualifying_fields):
            logger.debug(f"Context lacks identifiers for {level.value} scope")
            return False
        
        if level == ScopeLevel.TENANT:
            return context.has_any_role(TENANT_ROLE_CODES)
        
        return True
    
    def can_access_existing(self, entity: EntityScope, context: ScopeContext) -> bool:
        """Check whether the context may read an existing entity."""
        if not self.is_consistent(entity):
            logger.warning(f"Entity scope binding is inconsistent: {entity}")
            return False
        
        if entity.scope in _GLOBAL_LEVELS:
            return True
        
        for name in entity.scope.qualifying_fields:
            expected = getattr(entity, name)
            actual = getattr(context, name)
            if not _present(actual) or str(actual) != str(expected):
                return False
        return True
    
    def can_modify_existing(self, entity: EntityScope, context: ScopeContext) -> bool:
        """Update/delete check; global entities are readable by all but writable by platform roles only."""
        if not self.can_access_existing(entity, context):
            return False
        if entity.scope in _GLOBAL_LEVELS:
            return context.has_any_role(PLATFORM_ROLE_CODES)
        return True
    
    @staticmethod
    def is_consistent(entity: EntityScope) -> bool:
        """Entity carries exactly the identifiers its scope level requires."""
        required = entity.scope.qualifying_fields
        for name in _IDENTIFIER_FIELDS:
            value = getattr(entity, name)
            if name in required and not _present(value):
                return False
            if name not in required and _present(value):
                return False
        return True
    
    def is_scope_allowed(self, entity_type: str, scope) -> bool:
        """Check the registry of taggable entity types."""
        level = _parse_level(scope)
        allowed = self.entity_scopes.get(entity_type)
        return level is not None and allowed is not None and level in allowed
    
    def can_register(self, entity_type: str, scope, context: ScopeContext) -> bool:
        """Registry membership plus ``can_create_at_scope``."""
        if not self.is_scope_allowed(entity_type, scope):
            logger.debug(f"Entity type {entity_type} cannot be registered at scope {scope}")
            return False
        return self.can_create_at_scope(scope, context)
