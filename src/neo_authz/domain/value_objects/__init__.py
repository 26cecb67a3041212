"""Domain value objects for authorization."""

from .decision import Decision, AuthorizationResult
from .scope_context import ScopeLevel, ScopeContext, EntityScope

__all__ = [
    "Decision",
    "AuthorizationResult",
    "ScopeLevel",
    "ScopeContext",
    "EntityScope",
]
