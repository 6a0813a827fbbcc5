"""Performance and cache administration routes"""
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.api.dependencies import get_seo_service
from seopanel.core.auth import get_current_actor
from seopanel.core.database import get_db
from seopanel.core.security.rbac import Actor
from seopanel.schemas.admin import PerformanceAction
from seopanel.services.seo_page_service import SEOReconciliationService
from seopanel.utils.responses import format_success_response

router = APIRouter(prefix="/seo-pages/performance", tags=["performance"])


@router.get("")
async def get_performance_stats(
    time_window: int = Query(60, description="Window in minutes"),
    actor: Actor = Depends(get_current_actor),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Operation timings, slow operations, recommendations and cache counters"""
    return format_success_response(data=await service.get_performance(actor, time_window))


@router.post("")
async def performance_action(
    payload: PerformanceAction,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Clear or warm the cache, or clear or export collected metrics"""
    result = await service.performance_action(db, actor, payload.action, payload.site_id)
    message = result.pop("message")
    return format_success_response(data=result or None, message=message)
