"""Redirect management routes"""
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.api.dependencies import get_seo_service, get_site_id
from seopanel.core.auth import get_current_actor
from seopanel.core.database import get_db
from seopanel.core.security.rbac import Actor
from seopanel.exceptions import REDIRECT_ERRORS, PersistenceError
from seopanel.schemas.redirects import RedirectCreate, RedirectDelete
from seopanel.services.seo_page_service import SEOReconciliationService
from seopanel.utils.responses import format_success_response

router = APIRouter(prefix="/seo-pages/redirects", tags=["redirects"])


@router.get("")
async def list_redirects(
    page: int = Query(1),
    limit: int = Query(20),
    status_code: Optional[int] = Query(None, description="Filter by redirect status"),
    search: Optional[str] = Query(None, description="Match source or destination"),
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """List redirects newest first with per-status statistics"""
    result = await service.list_redirects(db, actor, site_id, page, limit, status_code, search)
    return format_success_response(data=result)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_redirect(
    payload: RedirectCreate,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """
    Create a redirect after loop and chain checks.

    Raises:
        RedirectLoop, RedirectChainTooLong, RedirectExists: If the redirect is unsafe
    """
    result = await service.create_redirect(
        db, actor, site_id, payload.from_path, payload.to_path, payload.status_code
    )
    if not result["success"]:
        error_class = REDIRECT_ERRORS.get(result["error_code"], PersistenceError)
        raise error_class(result["error"], context={"chain_length": result.get("chain_length", 0)})
    return format_success_response(data=result["redirect"], message="Redirect created successfully")


@router.delete("")
async def delete_redirects(
    payload: RedirectDelete,
    db: AsyncSession = Depends(get_db),
    actor: Actor = Depends(get_current_actor),
    site_id: str = Depends(get_site_id),
    service: SEOReconciliationService = Depends(get_seo_service),
):
    """Delete redirects by id (at most 50 per request)"""
    result = await service.delete_redirects(db, actor, site_id, payload.ids)
    return format_success_response(
        data=result,
        message=f"Deleted {result['deleted_count']} redirects",
    )
