"""SEO audit log routes"""
from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.api.dependencies import get_seo_service, get_site_id
from seopanel.core.auth import get_current_actor
from seopanel.core.database import get_db
from seopanel.core.security.rbac import Actor
from seopanel.services.seo_page_service import SEOReconciliationService
from seopanel.utils.responses import format_success_response

router = APIRouter(prefix="/seo-pages/audit-logs", tags=["audit-logs"])


@router.get("")
async def get_audit_logs(
    action: Optional[str] = Query(None),
    entity_type: Optional[str] = Query(None),
    path: Optional[str] = Query(None),
    performed_by: Optional[str] = Query(None),
    date_from: Optional[datetime] = Query(None),
    date_to: Optional[datetime] = Query(None),
    page: int = Query(1),
    limit: int = Query(50),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Query the audit trail newest first"""
    result = await service.get_audit_logs(
        db, actor, site_id,
        page=page,
        limit=limit,
        action=action,
        entity_type=entity_type,
        path=path,
        performed_by=performed_by,
        date_from=date_from,
        date_to=date_to,
    )
    return format_success_response(data=result)


@router.get("/stats")
async def get_audit_stats(
    days: int = Query(30, description="Look-back window in days"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Activity counts by action and actor, and the most changed paths"""
    return format_success_response(data=await service.get_audit_stats(db, actor, site_id, days))
