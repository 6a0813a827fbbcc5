"""SEO page management routes"""
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.api.dependencies import get_seo_service, get_site_id
from seopanel.core.auth import get_current_actor
from seopanel.core.database import get_db
from seopanel.core.security.rbac import Actor
from seopanel.schemas.seo_pages import BulkOperationRequest, SEOPageFields, SEOPageUpsert
from seopanel.services.seo_page_service import SEOReconciliationService
from seopanel.utils.responses import format_success_response

router = APIRouter(prefix="/seo-pages", tags=["seo-pages"])


def _upsert_response(result: dict) -> dict:
    if result["created"]:
        message = "SEO page created successfully"
    else:
        message = "SEO page updated successfully"
    extra = {
        "redirect_created": result["redirect_created"],
        "old_slug": result["old_slug"],
        "warnings": result["warnings"],
    }
    if "redirect_error" in result:
        extra["redirect_error"] = result["redirect_error"]
        extra["redirect_error_code"] = result["redirect_error_code"]
    return format_success_response(data=result["page"], message=message, **extra)


@router.get("")
async def list_seo_pages(
    search: Optional[str] = Query(None, description="Match path, title, description or slug"),
    category: Optional[str] = Query(None, description="Filter by page category"),
    is_custom: Optional[bool] = Query(None, description="Only custom (true) or default (false) pages"),
    page: int = Query(1),
    limit: int = Query(20),
    bypass_cache: bool = Query(False),
    cache_control: Optional[str] = Header(None),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """
    List every catalog page with its effective SEO metadata.

    A `Cache-Control: no-cache` header or `bypass_cache=true` recomputes the
    listing instead of serving it from cache.
    """
    bypass = bypass_cache or "no-cache" in (cache_control or "").lower()
    listing = await service.list_pages(
        db, actor, site_id,
        search=search,
        category=category,
        is_custom=is_custom,
        page=page,
        limit=limit,
        bypass_cache=bypass,
    )
    return format_success_response(data=listing)


@router.post("")
async def upsert_seo_page(
    payload: SEOPageUpsert,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Create or update SEO data for the page named in the body"""
    result = await service.upsert_page(db, actor, site_id, payload.path, payload.page_fields())
    return _upsert_response(result)


@router.put("/bulk")
async def bulk_seo_operation(
    payload: BulkOperationRequest,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """
    Run update, delete, reset, export or import over several pages.

    Returns per-path results; the request only fails as a whole for
    permission, limit and path validation errors.
    """
    result = await service.bulk_apply(db, actor, site_id, payload)
    return format_success_response(
        data=result,
        message=(
            f"Bulk {result['operation']} completed: "
            f"{result['successful']} successful, {result['failed']} failed"
        ),
    )


@router.get("/page")
async def get_seo_page(
    path: str = Query(..., description="Catalog page path"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Get the effective SEO data and catalog defaults of one page"""
    return format_success_response(data=await service.get_page(db, actor, site_id, path))


@router.put("/page")
async def update_seo_page(
    payload: SEOPageFields,
    path: str = Query(..., description="Catalog page path"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Create or update SEO data for one page"""
    result = await service.upsert_page(db, actor, site_id, path, payload)
    return _upsert_response(result)


@router.delete("/page")
async def reset_seo_page(
    path: str = Query(..., description="Catalog page path"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Delete a page's custom SEO data so its defaults apply again"""
    result = await service.reset_page(db, actor, site_id, path)
    return format_success_response(data=result, message="SEO page reset to defaults successfully")
