"""
Permission entity - Core authorization catalog data.

Permissions are named ``module.resource.action`` and carry a declared scope
that decides how a grant is checked against a concrete resource.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...core.exceptions import InvalidScopeError


class PermissionScope(str, Enum):
    """Resource breadth at which a permission grant applies."""
    PLATFORM = "platform"  # System-wide
    TENANT = "tenant"      # Any resource of a tenant
    ACCOUNT = "account"    # Any resource of an account
    OWN = "own"            # Resources owned by the principal
    PUBLIC = "public"      # Anyone holding the grant
    
    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["PermissionScope"]:
        """Return the matching scope or None for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Permission:
    """
    Immutable permission record.
    
    Examples:
        - platform.users.read
        - tenant.billing.read
        - profile.self.update
    
    ``scope`` is always a PermissionScope for records built in code. Records
    read from storage with an unrecognised scope tag are built through
    ``from_record`` and keep ``scope=None`` with the tag in ``raw_scope``.
    """
    id: str
    name: str
    scope: Optional[PermissionScope] = PermissionScope.TENANT
    description: Optional[str] = None
    module: Optional[str] = None
    resource: Optional[str] = None
    action: Optional[str] = None
    raw_scope: Optional[str] = None
    
    def __post_init__(self):
        # scope=None with a raw tag is an unrecognised stored scope
        unknown_stored = self.scope is None and self.raw_scope is not None
        if not isinstance(self.scope, PermissionScope) and not unknown_stored:
            parsed = PermissionScope.parse(self.scope)
            if parsed is None:
                raise InvalidScopeError(f"Invalid permission scope: {self.scope}", scope=self.scope)
            object.__setattr__(self, 'scope', parsed)
        if self.raw_scope is None:
            object.__setattr__(self, 'raw_scope', self.scope.value)
        
        if self.module is None:
            parts = self.name.split(".") if isinstance(self.name, str) else []
            if len(parts) == 3 and all(parts):
                object.__setattr__(self, 'module', parts[0])
                object.__setattr__(self, 'resource', parts[1])
                object.__setattr__(self, 'action', parts[2])
    
    @property
    def has_known_scope(self) -> bool:
        return self.scope is not None
    
    @classmethod
    def from_record(
        cls,
        id: str,
        name: str,
        scope: Optional[str],
        description: Optional[str] = None
    ) -> "Permission":
        """Build a permission from stored data, tolerating unknown scope tags."""
        parsed = PermissionScope.parse(scope)
        if parsed is None:
            return cls(
                id=str(id),
                name=name,
                scope=None,
                description=description,
                raw_scope=str(scope)
            )
        return cls(id=str(id), name=name, scope=parsed, description=description)
    
    def __str__(self) -> str:
        return self.name
    
    def __repr__(self) -> str:
        return f"Permission(name='{self.name}', scope='{self.raw_scope}')"
