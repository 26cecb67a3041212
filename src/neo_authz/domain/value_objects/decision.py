"""
Authorization decision value objects.

The public API answers with booleans; internally every check produces an
AuthorizationResult so that a denial caused by missing grants and one
caused by an unreachable store stay distinguishable in logs.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Decision(str, Enum):
    """Outcome of an authorization check."""
    GRANTED = "granted"
    DENIED = "denied"
    UNAVAILABLE = "unavailable"  # Store failure, fail-closed


@dataclass(frozen=True)
class AuthorizationResult:
    """Immutable authorization check result."""
    decision: Decision
    principal_id: str
    permission: Optional[str] = None
    reason: str = ""
    matched_pattern: Optional[str] = None
    
    @property
    def granted(self) -> bool:
        """Only an explicit grant allows access."""
        return self.decision == Decision.GRANTED
    
    @property
    def is_unavailable(self) -> bool:
        return self.decision == Decision.UNAVAILABLE
    
    @classmethod
    def grant(
        cls,
        principal_id: str,
        permission: Optional[str] = None,
        reason: str = "Permission granted",
        matched_pattern: Optional[str] = None
    ) -> "AuthorizationResult":
        return cls(
            decision=Decision.GRANTED,
            principal_id=principal_id,
            permission=permission,
            reason=reason,
            matched_pattern=matched_pattern
        )
    
    @classmethod
    def deny(
        cls,
        principal_id: str,
        permission: Optional[str] = None,
        reason: str = "Permission denied"
    ) -> "AuthorizationResult":
        return cls(
            decision=Decision.DENIED,
            principal_id=principal_id,
            permission=permission,
            reason=reason
        )
    
    @classmethod
    def unavailable(
        cls,
        principal_id: str,
        permission: Optional[str] = None,
        reason: str = "Permission store unavailable"
    ) -> "AuthorizationResult":
        return cls(
            decision=Decision.UNAVAILABLE,
            principal_id=principal_id,
            permission=permission,
            reason=reason
        )
    
    def __str__(self) -> str:
        target = self.permission or "*"
        return f"{self.decision.value.upper()}: {target} for principal {self.principal_id} ({self.reason})"
