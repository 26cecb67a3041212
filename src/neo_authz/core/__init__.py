"""Core building blocks shared by every layer of neo-authz."""

from .exceptions import (
    AuthorizationError,
    StoreUnavailableError,
    CacheUnavailableError,
    InvalidScopeError,
)

__all__ = [
    "AuthorizationError",
    "StoreUnavailableError",
    "CacheUnavailableError",
    "InvalidScopeError",
]
