"""
Permission name helpers.

Canonical names have exactly three non-empty dot-delimited segments:
``module.resource.action``.
"""
from typing import NamedTuple, Optional


class PermissionName(NamedTuple):
    """Decomposed permission name."""
    module: str
    resource: str
    action: str
    
    def __str__(self) -> str:
        return f"{self.module}.{self.resource}.{self.action}"


def parse_permission_name(name: str) -> Optional[PermissionName]:
    """
    Split a permission name into its segments.
    
    Args:
        name: Permission name (e.g., "platform.users.read")
        
    Returns:
        PermissionName, or None when the name is malformed
    """
    if not isinstance(name, str):
        return None
    
    parts = name.split(".")
    if len(parts) != 3 or not all(parts):
        return None
    
    return PermissionName(*parts)


def validate_permission_name(name: str) -> bool:
    """Check that a name has exactly three non-empty segments."""
    return parse_permission_name(name) is not None


def build_permission_name(module: str, resource: str, action: str) -> str:
    """
    Build a canonical permission name.
    
    Raises:
        ValueError: If a segment is empty or contains a dot
    """
    for segment in (module, resource, action):
        if not segment or "." in segment:
            raise ValueError(f"Invalid permission name segment: {segment!r}")
    return f"{module}.{resource}.{action}"
