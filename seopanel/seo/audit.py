"""Append-only audit trail for SEO changes"""
import logging
import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Mapping, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.db.enums import AuditAction, AuditEntityType
from seopanel.db.models import SEOAuditLog
from seopanel.types import FieldChange

logger = logging.getLogger(__name__)

AUDITED_FIELDS = ("slug", "meta_title", "meta_description", "robots", "page_category", "open_graph")


def compute_changes(old: Optional[Mapping[str, Any]], new: Mapping[str, Any]) -> List[FieldChange]:
    """
    Field-level diff between two snapshots.

    Args:
        old: Values before the change (None for a newly created record)
        new: Values after the change

    Returns:
        One entry per audited field whose value differs
    """
    old = old or {}
    changes: List[FieldChange] = []
    for field in AUDITED_FIELDS:
        if field not in new and field not in old:
            continue
        old_value = old.get(field)
        new_value = new.get(field)
        if old_value != new_value:
            changes.append({"field": field, "old_value": old_value, "new_value": new_value})
    return changes


class SEOAuditLogger:
    """
    Audit sink for the reconciliation service.

    Entries are written after the primary change has been committed. A
    failure to write one is logged and swallowed so it never fails the
    operation being audited.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        site_id: str,
        action: AuditAction,
        entity_type: AuditEntityType = AuditEntityType.SEO_PAGE,
        path: Optional[str] = None,
        performed_by: Optional[str] = None,
        old_slug: Optional[str] = None,
        new_slug: Optional[str] = None,
        changes: Optional[List[FieldChange]] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Optional[SEOAuditLog]:
        """
        Append an audit entry.

        Returns:
            The stored entry, or None if it could not be written
        """
        entry = SEOAuditLog(
            site_id=site_id,
            action=AuditAction(action).value,
            entity_type=AuditEntityType(entity_type).value,
            path=path,
            old_slug=old_slug,
            new_slug=new_slug,
            changes=list(changes or []),
            details=dict(metadata or {}),
            performed_by=performed_by,
        )
        try:
            self.db.add(entry)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.warning(f"Failed to write audit entry {entry.action} for {path or site_id}: {e}")
            return None
        return entry

    async def get_audit_logs(
        self,
        site_id: str,
        action: Optional[str] = None,
        entity_type: Optional[str] = None,
        path: Optional[str] = None,
        performed_by: Optional[str] = None,
        date_from: Optional[datetime] = None,
        date_to: Optional[datetime] = None,
        page: int = 1,
        limit: int = 50,
    ) -> Dict[str, Any]:
        """Query audit entries newest first"""
        conditions = [SEOAuditLog.site_id == site_id]
        if action:
            conditions.append(SEOAuditLog.action == action)
        if entity_type:
            conditions.append(SEOAuditLog.entity_type == entity_type)
        if path:
            conditions.append(SEOAuditLog.path == path)
        if performed_by:
            conditions.append(SEOAuditLog.performed_by == performed_by)
        if date_from:
            conditions.append(SEOAuditLog.performed_at >= date_from)
        if date_to:
            conditions.append(SEOAuditLog.performed_at <= date_to)

        total = await self.db.scalar(select(func.count(SEOAuditLog.id)).where(*conditions))
        result = await self.db.execute(
            select(SEOAuditLog)
            .where(*conditions)
            .order_by(SEOAuditLog.performed_at.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        )
        logs = [entry.to_dict() for entry in result.scalars().all()]

        total_pages = math.ceil(total / limit) if total else 0
        return {
            "logs": logs,
            "pagination": {
                "page": page,
                "limit": limit,
                "total": total,
                "total_pages": total_pages,
                "has_next": page < total_pages,
                "has_prev": page > 1,
            },
        }

    async def get_audit_stats(self, site_id: str, days: int = 30) -> Dict[str, Any]:
        """Counts by action and actor plus the most changed paths over a window"""
        since = datetime.now(timezone.utc) - timedelta(days=days)
        result = await self.db.execute(
            select(SEOAuditLog.action, SEOAuditLog.performed_by, SEOAuditLog.path).where(
                SEOAuditLog.site_id == site_id,
                SEOAuditLog.performed_at >= since,
            )
        )
        rows = result.all()

        by_action = Counter(row.action for row in rows)
        by_user = Counter(row.performed_by or "system" for row in rows)
        by_path = Counter(row.path for row in rows if row.path)

        return {
            "period_days": days,
            "total_actions": len(rows),
            "by_action": dict(by_action),
            "by_user": dict(by_user),
            "most_changed_paths": [
                {"path": path, "count": count} for path, count in by_path.most_common(10)
            ],
        }
