"""
Scope-hierarchy value objects for entity-level access.

Entities such as tags are bound to one tier of the tenancy hierarchy.
ScopeContext describes the requesting principal, EntityScope describes an
existing entity.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, FrozenSet


class ScopeLevel(str, Enum):
    """Tenancy tier an entity is bound to."""
    PLATFORM = "platform"
    CONFIGURATION = "configuration"
    TENANT = "tenant"
    ACCOUNT = "account"
    USER = "user"
    
    @property
    def qualifying_fields(self) -> tuple:
        """Identifiers an entity at this level must carry."""
        return _QUALIFYING_FIELDS[self]


_QUALIFYING_FIELDS = {
    ScopeLevel.PLATFORM: (),
    ScopeLevel.CONFIGURATION: (),
    ScopeLevel.TENANT: ("tenant_id",),
    ScopeLevel.ACCOUNT: ("tenant_id", "account_id"),
    ScopeLevel.USER: ("tenant_id", "account_id", "user_id"),
}


@dataclass(frozen=True)
class ScopeContext:
    """Identifiers and role codes of the principal making a request."""
    tenant_id: Optional[str] = None
    account_id: Optional[str] = None
    user_id: Optional[str] = None
    role_codes: FrozenSet[str] = field(default_factory=frozenset)
    
    def __post_init__(self):
        if not isinstance(self.role_codes, frozenset):
            object.__setattr__(self, 'role_codes', frozenset(self.role_codes or ()))
    
    def has_any_role(self, codes) -> bool:
        return not self.role_codes.isdisjoint(codes)


@dataclass(frozen=True)
class EntityScope:
    """Scope binding of an existing entity."""
    scope: ScopeLevel
    tenant_id: Optional[str] = None
    account_id: Optional[str] = None
    user_id: Optional[str] = None
    
    def __post_init__(self):
        if not isinstance(self.scope, ScopeLevel):
            object.__setattr__(self, 'scope', ScopeLevel(self.scope))
