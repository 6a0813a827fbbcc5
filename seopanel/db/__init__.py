"""Database models and enumerations"""
from seopanel.db.enums import (
    PageCategory, AuditAction, AuditEntityType, BulkOperation,
    REDIRECT_STATUS_CODES, DEFAULT_ROBOTS,
)
from seopanel.db.models import SEOPage, Redirect, SEOAuditLog

__all__ = [
    # Enums
    "PageCategory", "AuditAction", "AuditEntityType", "BulkOperation",
    "REDIRECT_STATUS_CODES", "DEFAULT_ROBOTS",
    # Models
    "SEOPage", "Redirect", "SEOAuditLog",
]
