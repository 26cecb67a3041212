"""
Authorization engine exceptions.

Exception hierarchy for the failure modes the engine distinguishes
internally:
- Durable store unavailability
- Cache backend unavailability
- Invalid scope values supplied by callers

Store and cache failures are absorbed at the resolver boundary and never
reach callers of the boolean API.
"""

from typing import Optional, Dict, Any


class AuthorizationError(Exception):
    """Base exception for all authorization engine errors"""
    
    def __init__(
        self, 
        message: str, 
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class StoreUnavailableError(AuthorizationError):
    """Durable permission store could not be reached or queried"""
    
    def __init__(
        self, 
        message: str = "Permission store unavailable",
        operation: Optional[str] = None
    ):
        super().__init__(message, "STORE_UNAVAILABLE")
        self.details["operation"] = operation


class CacheUnavailableError(AuthorizationError):
    """Cache backend could not be reached"""
    
    def __init__(
        self, 
        message: str = "Permission cache unavailable",
        key: Optional[str] = None
    ):
        super().__init__(message, "CACHE_UNAVAILABLE")
        self.details["key"] = key


class InvalidScopeError(AuthorizationError):
    """Scope value outside the closed enumeration"""
    
    def __init__(self, message: str = "Invalid scope", scope: Optional[str] = None):
        super().__init__(message, "INVALID_SCOPE")
        self.details["scope"] = scope
