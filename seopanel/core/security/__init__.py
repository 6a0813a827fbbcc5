"""Security: role-based access control and content security validation"""
from seopanel.core.security.rbac import Actor, Role, has_permission, require_permission
from seopanel.core.security.content_security import (
    ContentSecurityResult,
    validate_content_security,
    validate_fields_security,
    sanitize_text,
)

__all__ = [
    "Actor",
    "Role",
    "has_permission",
    "require_permission",
    "ContentSecurityResult",
    "validate_content_security",
    "validate_fields_security",
    "sanitize_text",
]
