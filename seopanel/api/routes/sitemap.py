"""Sitemap routes"""
from typing import Optional

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.api.dependencies import get_seo_service, get_site_id
from seopanel.core.auth import get_current_actor
from seopanel.core.config import settings
from seopanel.core.database import get_db
from seopanel.core.security.rbac import Actor
from seopanel.schemas.admin import SitemapRequest
from seopanel.services.seo_page_service import SEOReconciliationService
from seopanel.utils.responses import format_success_response

router = APIRouter(prefix="/seo-pages/sitemap", tags=["sitemap"])


def _base_url(request: Request, override: Optional[str] = None) -> str:
    """Configured sitemap URL, else the URL the request came in on"""
    if override:
        return override
    if settings.sitemap_base_url:
        return settings.sitemap_base_url
    host = request.headers.get("host", "localhost:3000")
    protocol = request.headers.get("x-forwarded-proto", request.url.scheme)
    return f"{protocol}://{host}"


@router.get("")
async def get_sitemap_info(
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Sitemap statistics and the first entries as a preview"""
    result = await service.sitemap_stats(db, actor, site_id, base_url=_base_url(request))
    return format_success_response(data=result)


@router.post("")
async def generate_sitemap(
    payload: SitemapRequest,
    request: Request,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Every sitemap entry as JSON"""
    result = await service.sitemap_entries(db, actor, site_id, base_url=_base_url(request, payload.base_url))
    return format_success_response(data=result)
