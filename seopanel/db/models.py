"""Database models for SEO page overrides, redirects and the audit trail"""
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Boolean, JSON, Uuid,
    CheckConstraint, UniqueConstraint, Index,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func
from datetime import datetime, timezone
import uuid

from seopanel.core.database import Base
from seopanel.db.enums import DEFAULT_ROBOTS

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SEOPage(Base):
    """Per-page SEO override layered on top of the page catalog"""
    __tablename__ = "seo_pages"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    site_id = Column(String(100), nullable=False)
    path = Column(Text, nullable=False)

    slug = Column(String(200), nullable=False)
    meta_title = Column(Text, nullable=False)
    meta_description = Column(Text, nullable=False)
    robots = Column(String(200), nullable=False, default=DEFAULT_ROBOTS)
    page_category = Column(String(20), nullable=False)
    open_graph = Column(JSONType, nullable=False, default=dict)
    is_custom = Column(Boolean, nullable=False, default=True)

    created_by = Column(String(100), nullable=True)
    updated_by = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("length(trim(path)) > 0", name="chk_seo_page_path_not_empty"),
        CheckConstraint("length(trim(slug)) > 0", name="chk_seo_page_slug_not_empty"),
        UniqueConstraint("site_id", "path", name="uniq_seo_page_path_per_site"),
        UniqueConstraint("site_id", "slug", name="uniq_seo_page_slug_per_site"),
        Index("idx_seo_pages_site_id", "site_id"),
    )

    def override_fields(self) -> dict:
        """Field values that participate in overlay and audit diffing"""
        return {
            "slug": self.slug,
            "meta_title": self.meta_title,
            "meta_description": self.meta_description,
            "robots": self.robots,
            "page_category": self.page_category,
            "open_graph": dict(self.open_graph or {}),
        }


class Redirect(Base):
    """Redirect from a source path/slug to a destination"""
    __tablename__ = "redirects"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    site_id = Column(String(100), nullable=False)
    from_path = Column(Text, nullable=False)
    to_path = Column(Text, nullable=False)
    status_code = Column(Integer, nullable=False, default=301)
    created_by = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("status_code IN (301, 302, 307, 308)", name="chk_redirect_status_code"),
        CheckConstraint("from_path <> to_path", name="chk_redirect_not_self"),
        UniqueConstraint("site_id", "from_path", name="uniq_redirect_from_per_site"),
        Index("idx_redirects_site_id", "site_id"),
        Index("idx_redirects_to_path", "site_id", "to_path"),
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "site_id": self.site_id,
            "from": self.from_path,
            "to": self.to_path,
            "status_code": self.status_code,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class SEOAuditLog(Base):
    """Append-only audit trail of SEO changes"""
    __tablename__ = "seo_audit_logs"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    site_id = Column(String(100), nullable=False)
    action = Column(String(30), nullable=False)
    entity_type = Column(String(20), nullable=False)
    path = Column(Text, nullable=True)
    old_slug = Column(String(200), nullable=True)
    new_slug = Column(String(200), nullable=True)
    changes = Column(JSONType, nullable=False, default=list)
    # "metadata" is reserved on declarative classes
    details = Column("metadata", JSONType, nullable=False, default=dict)
    performed_by = Column(String(100), nullable=True)
    performed_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)

    __table_args__ = (
        Index("idx_seo_audit_logs_performed_at", "performed_at"),
        Index("idx_seo_audit_logs_path", "path"),
        Index("idx_seo_audit_logs_site_action", "site_id", "action"),
    )

    def to_dict(self) -> dict:
        return {
            "id": str(self.id),
            "site_id": self.site_id,
            "action": self.action,
            "entity_type": self.entity_type,
            "path": self.path,
            "old_slug": self.old_slug,
            "new_slug": self.new_slug,
            "changes": self.changes or [],
            "metadata": self.details or {},
            "performed_by": self.performed_by,
            "performed_at": self.performed_at.isoformat() if self.performed_at else None,
        }
