"""JSON-compatible serialization of roles and permissions for caching."""

from typing import Any, Dict, List

from ...domain.entities.permission import Permission
from ...domain.entities.role import Role


def serialize_permission(permission: Permission) -> Dict[str, Any]:
    return {
        "id": permission.id,
        "name": permission.name,
        "scope": permission.raw_scope,
        "description": permission.description,
    }


def deserialize_permission(data: Dict[str, Any]) -> Permission:
    # Stored scope tags may be unknown, keep them rather than fail
    return Permission.from_record(
        id=data["id"],
        name=data["name"],
        scope=data.get("scope"),
        description=data.get("description"),
    )


def serialize_role(role: Role) -> Dict[str, Any]:
    """Serialize role to JSON-compatible format."""
    return {
        "id": role.id,
        "code": role.code,
        "name": role.name,
        "level": role.level,
        "tenant_id": role.tenant_id,
        "is_system": role.is_system,
        "description": role.description,
        "permissions": [serialize_permission(perm) for perm in role.permissions],
    }


def deserialize_role(data: Dict[str, Any]) -> Role:
    """Deserialize role from JSON format."""
    return Role(
        id=data["id"],
        code=data["code"],
        name=data.get("name") or data["code"],
        level=int(data.get("level") or 0),
        tenant_id=data.get("tenant_id"),
        is_system=bool(data.get("is_system", False)),
        description=data.get("description"),
        permissions=[deserialize_permission(perm) for perm in data.get("permissions", [])],
    )


def serialize_permissions(permissions: List[Permission]) -> List[Dict[str, Any]]:
    return [serialize_permission(perm) for perm in permissions]


def deserialize_permissions(data: List[Dict[str, Any]]) -> List[Permission]:
    return [deserialize_permission(item) for item in data]


def serialize_roles(roles: List[Role]) -> List[Dict[str, Any]]:
    return [serialize_role(role) for role in roles]


def deserialize_roles(data: List[Dict[str, Any]]) -> List[Role]:
    return [deserialize_role(item) for item in data]
