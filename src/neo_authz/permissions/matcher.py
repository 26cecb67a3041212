"""
Wildcard Permission Matcher

Decides whether a granted permission pattern covers a requested permission
name. Supported pattern shapes:
- Exact names: "tenant.billing.read"
- Super wildcard: "*" matches anything
- Module wildcard: "platform.*" matches any name starting with "platform."
- Segment wildcards: "tenant.*.read" matches names with the same number
  of segments where every non-"*" segment is equal

The module wildcard applies only to two-segment patterns. It is not a
general suffix wildcard: "platform.*" never matches "users.platform.read",
and "a.*.c" never matches "a.b.c.d".
"""
from typing import Iterable, Optional

SUPER_WILDCARD = "*"
SEGMENT_WILDCARD = "*"


class PatternMatcher:
    """Pure, total permission pattern matcher."""
    
    def matches(self, pattern: str, permission_name: str) -> bool:
        """
        Check if a granted pattern covers a requested permission name.
        
        Args:
            pattern: Granted permission pattern (e.g., "platform.*")
            permission_name: Permission being checked (e.g., "platform.users.read")
            
        Returns:
            True if the pattern grants the permission
        """
        # Exact match
        if pattern == permission_name:
            return True
        
        if pattern == SUPER_WILDCARD:
            return True
        
        if not isinstance(pattern, str) or not isinstance(permission_name, str):
            return False
        
        pattern_parts = pattern.split(".")
        
        # Module wildcard decides on its own
        if len(pattern_parts) == 2 and pattern_parts[1] == SEGMENT_WILDCARD:
            return permission_name.startswith(pattern_parts[0] + ".")
        
        name_parts = permission_name.split(".")
        if len(pattern_parts) != len(name_parts):
            return False
        
        return all(
            granted == SEGMENT_WILDCARD or granted == requested
            for granted, requested in zip(pattern_parts, name_parts)
        )
    
    def first_match(self, patterns: Iterable[str], permission_name: str) -> Optional[str]:
        """Return the first pattern granting ``permission_name``, if any."""
        for pattern in patterns:
            if self.matches(pattern, permission_name):
                return pattern
        return None


_default_matcher = PatternMatcher()


def matches(pattern: str, permission_name: str) -> bool:
    """Module-level shortcut for ``PatternMatcher().matches``."""
    return _default_matcher.matches(pattern, permission_name)
