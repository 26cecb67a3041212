"""Permission names and wildcard pattern matching."""

from .matcher import PatternMatcher, matches, SUPER_WILDCARD
from .names import (
    PermissionName,
    parse_permission_name,
    validate_permission_name,
    build_permission_name,
)

__all__ = [
    "PatternMatcher",
    "matches",
    "SUPER_WILDCARD",
    "PermissionName",
    "parse_permission_name",
    "validate_permission_name",
    "build_permission_name",
]
