"""Role-Based Access Control (RBAC) for SEO administration"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Set

from seopanel.core.config import settings
from seopanel.exceptions import AccessDenied


class Role(str, Enum):
    """User roles"""
    OWNER = "owner"     # Full control
    ADMIN = "admin"     # Full SEO control
    EDITOR = "editor"   # Edit SEO content, no deletes
    VIEWER = "viewer"   # Read-only


# Permission definitions
PERMISSIONS: Dict[Role, Set[str]] = {
    Role.OWNER: {
        "seo.*",
    },
    Role.ADMIN: {
        "seo.*",
    },
    Role.EDITOR: {
        "seo.read",
        "seo.write",
    },
    Role.VIEWER: {
        "seo.read",
    },
}


@dataclass(frozen=True)
class Actor:
    """Authenticated principal performing an operation"""
    id: str
    role: Role


def has_permission(role: Role, action: str) -> bool:
    """
    Check if a role has permission for an action.

    Args:
        role: User role
        action: Action to check (supports wildcards, e.g., "seo.*")

    Returns:
        True if role has permission
    """
    permissions = PERMISSIONS.get(role, set())

    # Direct match
    if action in permissions:
        return True

    # Wildcard match (e.g., "seo.*" matches "seo.write")
    for perm in permissions:
        if perm.endswith(".*"):
            prefix = perm[:-2]
            if action.startswith(prefix + ".") or action == prefix:
                return True

    return False


def require_permission(actor: Actor, resource: str, action: str) -> str:
    """
    Require that an actor has a specific permission.

    Args:
        actor: Authenticated actor (None when unauthenticated)
        resource: Resource name, e.g. "seo"
        action: One of read, write, delete

    Returns:
        The actor id if permission granted

    Raises:
        AccessDenied: If the actor is missing or lacks the permission
    """
    if actor is None:
        raise AccessDenied("Access denied: authentication required")

    required = f"{resource}.{action}"
    if not has_permission(actor.role, required):
        raise AccessDenied(
            f"Access denied: role '{actor.role.value}' does not have permission for '{required}'",
            context={
                "current_role": actor.role.value,
                "required_action": required,
                "minimum_role": get_minimum_role_for_action(required),
            },
        )
    return actor.id


def get_minimum_role_for_action(action: str) -> str:
    """
    Get the minimum role required for an action.

    Args:
        action: Action to check

    Returns:
        Minimum required role name
    """
    roles_order = [Role.VIEWER, Role.EDITOR, Role.ADMIN, Role.OWNER]

    for role in roles_order:
        if has_permission(role, action):
            return role.value

    return "owner"  # Default to most restrictive
