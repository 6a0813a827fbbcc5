"""Pydantic schemas for performance and sitemap administration"""
from typing import Literal, Optional

from pydantic import BaseModel, Field


class PerformanceAction(BaseModel):
    """Request model for performance management actions"""
    action: Literal["clear_cache", "clear_metrics", "warmup_cache", "export_metrics"]
    site_id: Optional[str] = Field(None, description="Limit cache actions to one site")


class SitemapRequest(BaseModel):
    """Request model for full sitemap generation"""
    format: Literal["json"] = "json"
    base_url: Optional[str] = Field(None, description="Overrides the configured site base URL")
