"""Database model enumerations"""
import enum


class PageCategory(str, enum.Enum):
    """Catalog page category"""
    MAIN = "main"
    SERVICES = "services"
    BLOG = "blog"
    ABOUT = "about"
    CONTACT = "contact"
    OTHER = "other"


class AuditAction(str, enum.Enum):
    """Audit log actions"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    RESET = "reset"
    BULK_UPDATE = "bulk_update"
    BULK_DELETE = "bulk_delete"
    BULK_RESET = "bulk_reset"
    SLUG_CHANGE = "slug_change"
    REDIRECT_CREATE = "redirect_create"


class AuditEntityType(str, enum.Enum):
    """Entity types recorded in the audit log"""
    SEO_PAGE = "seo_page"
    REDIRECT = "redirect"


class BulkOperation(str, enum.Enum):
    """Bulk operations"""
    UPDATE = "update"
    DELETE = "delete"
    RESET = "reset"
    EXPORT = "export"
    IMPORT = "import"


REDIRECT_STATUS_CODES = (301, 302, 307, 308)
DEFAULT_ROBOTS = "index,follow"
