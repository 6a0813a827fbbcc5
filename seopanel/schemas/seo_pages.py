"""Pydantic schemas for SEO page requests"""
import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from seopanel.core.config import settings
from seopanel.core.security.content_security import sanitize_text
from seopanel.db.enums import BulkOperation, PageCategory

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")
ROBOTS_TOKENS = {"index", "noindex", "follow", "nofollow", "noarchive", "nosnippet", "noimageindex"}


class OpenGraphData(BaseModel):
    """Open Graph overrides"""
    title: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = Field(None, max_length=400)
    image: Optional[str] = Field(None, max_length=1000)
    type: Optional[str] = Field(None, max_length=50)


class SEOPageFields(BaseModel):
    """Override fields accepted for a page; unset fields keep their current value"""
    model_config = ConfigDict(extra="forbid")

    slug: Optional[str] = Field(None, description="URL slug (lowercase, hyphen separated)")
    meta_title: Optional[str] = Field(None, min_length=1, max_length=settings.max_meta_title_length)
    meta_description: Optional[str] = Field(None, min_length=1, max_length=settings.max_meta_description_length)
    robots: Optional[str] = Field(None, description="Comma separated robots directives")
    page_category: Optional[PageCategory] = None
    open_graph: Optional[OpenGraphData] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v: Optional[str]) -> Optional[str]:
        """Validate slug format"""
        if v is None:
            return v
        v = v.strip()
        if not v or len(v) > settings.max_slug_length:
            raise ValueError(f"Slug must be 1-{settings.max_slug_length} characters")
        if not SLUG_PATTERN.match(v):
            raise ValueError("Slug may only contain lowercase letters, numbers and single hyphens")
        return v

    @field_validator("meta_title", "meta_description")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Field cannot be blank")
        return v

    @field_validator("robots")
    @classmethod
    def validate_robots(cls, v: Optional[str]) -> Optional[str]:
        """Normalize robots directives and reject unknown tokens"""
        if v is None:
            return v
        tokens = [token.strip().lower() for token in v.split(",") if token.strip()]
        if not tokens:
            raise ValueError("Robots directive cannot be empty")
        unknown = [token for token in tokens if token not in ROBOTS_TOKENS]
        if unknown:
            raise ValueError(f"Unknown robots directives: {', '.join(unknown)}")
        return ",".join(tokens)

    def to_updates(self) -> Dict[str, Any]:
        """Explicitly set, non-null fields as plain values"""
        return self.model_dump(mode="json", exclude_unset=True, exclude_none=True)

    def soft_limit_warnings(self) -> List[str]:
        """Length advisories measured on the text a search result would display"""
        warnings = []
        title = sanitize_text(self.meta_title)
        if len(title) > settings.meta_title_soft_limit:
            warnings.append(
                f"Meta title is {len(title)} characters; "
                f"{settings.meta_title_soft_limit} or fewer is recommended"
            )
        description = sanitize_text(self.meta_description)
        if len(description) > settings.meta_description_soft_limit:
            warnings.append(
                f"Meta description is {len(description)} characters; "
                f"{settings.meta_description_soft_limit} or fewer is recommended"
            )
        return warnings


class SEOPageUpsert(SEOPageFields):
    """Request model for creating or updating a page by path in the body"""
    path: str = Field(..., description="Catalog page path (must start with /)")

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate that path starts with /"""
        v = v.strip()
        if not v.startswith("/"):
            raise ValueError("Path must start with /")
        return v

    def page_fields(self) -> SEOPageFields:
        return SEOPageFields(**self.model_dump(exclude={"path"}, exclude_unset=True))


class ImportItem(SEOPageUpsert):
    """Single item of an import payload; export-only keys are ignored"""
    model_config = ConfigDict(extra="ignore")


class BulkOperationRequest(BaseModel):
    """Request model for bulk operations"""
    operation: BulkOperation
    paths: List[str] = Field(default_factory=list)
    data: Optional[SEOPageFields] = None
    import_data: List[Dict[str, Any]] = Field(default_factory=list)
    export_format: Literal["json", "csv"] = "json"

    @model_validator(mode="after")
    def check_payload(self) -> "BulkOperationRequest":
        if self.operation == BulkOperation.IMPORT:
            if not self.import_data:
                raise ValueError("import_data is required for import")
        elif not self.paths:
            raise ValueError(f"paths are required for {self.operation.value}")
        if self.operation == BulkOperation.UPDATE and self.data is None:
            raise ValueError("data is required for update")
        return self

    @property
    def item_count(self) -> int:
        if self.operation == BulkOperation.IMPORT:
            return len(self.import_data)
        return len(self.paths)
