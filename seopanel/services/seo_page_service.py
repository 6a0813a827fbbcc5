"""
SEO Reconciliation Service - Business logic for SEO page operations.

This service composes the page catalog with persisted override records,
validates and applies writes, coordinates slug changes with redirect
creation, and drives cache invalidation and audit emission. Routes call
service methods rather than touching the store, cache or audit log directly.
"""
import csv
import io
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from seopanel.core.config import settings
from seopanel.core.security.content_security import validate_content_security, validate_fields_security
from seopanel.core.security.rbac import Actor, get_bulk_limit, require_permission
from seopanel.db.enums import AuditAction, AuditEntityType, BulkOperation, PageCategory
from seopanel.db.models import SEOPage
from seopanel.exceptions import (
    BulkLimitExceeded,
    InvalidPath,
    NotFound,
    PersistenceError,
    SecurityValidationFailed,
    SEOError,
    SlugConflict,
    ValidationFailed,
)
from seopanel.schemas.seo_pages import BulkOperationRequest, ImportItem, SEOPageFields
from seopanel.seo.audit import SEOAuditLogger, compute_changes
from seopanel.seo.cache import SEOCache, get_cache
from seopanel.seo.catalog import PageCatalog, PredefinedPage, default_catalog
from seopanel.seo.composition import (
    compose_catalog,
    default_fields,
    filter_pages,
    merge_page,
    normalize_query,
    paginate,
    query_fingerprint,
    summarize,
)
from seopanel.seo.performance import PerformanceMonitor, performance_monitor
from seopanel.seo.redirect_manager import RedirectManager
from seopanel.seo.sitemap import SitemapGenerator
from seopanel.types import (
    BulkItemResult,
    BulkResult,
    ComposedPage,
    PageListing,
    RedirectCreationResult,
    UpsertResult,
)

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100
EXPORT_COLUMNS = [
    "path", "slug", "meta_title", "meta_description", "robots", "page_category", "is_custom", "updated_at",
]


def _validation_errors(error: ValidationError) -> List[Dict[str, Any]]:
    return [
        {"field": ".".join(str(part) for part in item["loc"]), "message": item["msg"]}
        for item in error.errors()
    ]


class SEOReconciliationService:
    """
    Service for SEO page business operations.

    This service encapsulates:
    - Composition of catalog defaults and override records
    - Validated page writes with slug uniqueness
    - Slug change to redirect coordination
    - Bulk operations with per-item fault isolation
    - Cache invalidation and audit emission
    """

    def __init__(
        self,
        catalog: Optional[PageCatalog] = None,
        cache: Optional[SEOCache] = None,
        redirect_manager: Optional[RedirectManager] = None,
        monitor: Optional[PerformanceMonitor] = None,
    ):
        """
        Initialize the reconciliation service.

        Args:
            catalog: Page catalog (default catalog if not provided)
            cache: Listing cache (configured backend if not provided)
            redirect_manager: Redirect manager (created if not provided)
            monitor: Performance monitor (process monitor if not provided)
        """
        self.catalog = catalog or default_catalog()
        self.cache = cache or get_cache()
        self.redirect_manager = redirect_manager or RedirectManager()
        self.monitor = monitor or performance_monitor

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _catalog_page(self, path: str) -> PredefinedPage:
        page = self.catalog.get_by_path(path)
        if page is None:
            raise InvalidPath(f"Invalid page path: {path}", context={"path": path})
        return page

    def _check_paths(self, paths: List[str]) -> None:
        invalid = self.catalog.invalid_paths(paths)
        if invalid:
            raise InvalidPath(
                f"Invalid paths: {', '.join(invalid)}",
                context={"invalid_paths": invalid},
            )

    @staticmethod
    def _coerce_fields(fields: Union[SEOPageFields, Mapping[str, Any]]) -> SEOPageFields:
        if isinstance(fields, SEOPageFields):
            return fields
        try:
            return SEOPageFields.model_validate(dict(fields))
        except ValidationError as e:
            raise ValidationFailed(context={"errors": _validation_errors(e)})

    @staticmethod
    def _check_security(fields: SEOPageFields) -> None:
        """Reject free text carrying injection patterns before anything is persisted"""
        text = {"meta_title": fields.meta_title, "meta_description": fields.meta_description}
        if fields.open_graph is not None:
            text["open_graph.title"] = fields.open_graph.title
            text["open_graph.description"] = fields.open_graph.description

        flagged = validate_fields_security(text)
        if flagged:
            threats: List[str] = []
            for field_threats in flagged.values():
                threats.extend(threat for threat in field_threats if threat not in threats)
            raise SecurityValidationFailed(
                threats,
                message=f"Security validation failed for {', '.join(flagged)}",
                context={"fields": flagged},
            )

    async def _get_record(self, db: AsyncSession, site_id: str, path: str) -> Optional[SEOPage]:
        result = await db.execute(
            select(SEOPage).where(SEOPage.site_id == site_id, SEOPage.path == path)
        )
        return result.scalar_one_or_none()

    async def _load_overrides(self, db: AsyncSession, site_id: str) -> Dict[str, SEOPage]:
        result = await db.execute(select(SEOPage).where(SEOPage.site_id == site_id))
        return {record.path: record for record in result.scalars().all()}

    async def _check_slug_available(self, db: AsyncSession, site_id: str, path: str, slug: str) -> None:
        """Fast-path rejection; the unique index on (site_id, slug) is the real guarantee"""
        result = await db.execute(
            select(SEOPage.path).where(
                SEOPage.site_id == site_id,
                SEOPage.slug == slug,
                SEOPage.path != path,
            )
        )
        conflicting_path = result.scalars().first()
        if conflicting_path is not None:
            raise SlugConflict(
                f"Slug '{slug}' is already used by {conflicting_path}",
                context={"slug": slug, "conflicting_path": conflicting_path},
            )

    async def _write_page(
        self,
        db: AsyncSession,
        site_id: str,
        path: str,
        fields: SEOPageFields,
        actor_id: str,
    ) -> Dict[str, Any]:
        """
        Validate and persist one page write, creating a redirect on slug change.

        Does not touch the cache or the audit log; callers do that once per
        request.

        Raises:
            InvalidPath: If the path is not in the catalog
            SecurityValidationFailed: If free text is flagged
            SlugConflict: If another page holds the slug
            PersistenceError: If the store fails
        """
        defaults = self._catalog_page(path)
        self._check_security(fields)

        updates = fields.to_updates()
        try:
            if "slug" in updates:
                await self._check_slug_available(db, site_id, path, updates["slug"])
            record = await self._get_record(db, site_id, path)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception(f"Failed to load SEO page {path} for site {site_id}")
            raise PersistenceError(f"Failed to load SEO page {path}", context={"path": path, "reason": str(e)})

        created = record is None
        before = None if created else record.override_fields()
        old_slug = None

        if created:
            values = default_fields(defaults)
            values.update(updates)
            record = SEOPage(
                site_id=site_id,
                path=path,
                is_custom=True,
                created_by=actor_id,
                updated_by=actor_id,
                **values,
            )
            db.add(record)
        else:
            if "slug" in updates and updates["slug"] != record.slug:
                old_slug = record.slug
            for name, value in updates.items():
                setattr(record, name, value)
            record.is_custom = True
            record.updated_by = actor_id

        try:
            await db.commit()
        except IntegrityError:
            await db.rollback()
            slug = updates.get("slug", defaults.default_slug)
            raise SlugConflict(
                f"Slug '{slug}' is already used by another page",
                context={"slug": slug, "path": path},
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception(f"Failed to save SEO page {path} for site {site_id}")
            raise PersistenceError(f"Failed to save SEO page {path}", context={"path": path, "reason": str(e)})

        await db.refresh(record)
        view = merge_page(defaults, record)
        after = record.override_fields()

        redirect: Optional[RedirectCreationResult] = None
        if old_slug is not None:
            redirect = await self._redirect_for_slug_change(db, site_id, old_slug, after["slug"], actor_id)

        return {
            "view": view,
            "created": created,
            "before": before,
            "after": after,
            "old_slug": old_slug,
            "new_slug": after["slug"],
            "redirect": redirect,
        }

    async def _redirect_for_slug_change(
        self,
        db: AsyncSession,
        site_id: str,
        old_slug: str,
        new_slug: str,
        actor_id: str,
    ) -> RedirectCreationResult:
        """Redirect the old slug to the new one; failures are reported, never raised"""
        try:
            return await self.redirect_manager.create_redirect_safely(
                db, site_id, old_slug, new_slug, 301, actor_id
            )
        except SQLAlchemyError as e:
            await db.rollback()
            logger.exception(f"Failed to create redirect {old_slug} -> {new_slug} for site {site_id}")
            return {
                "success": False,
                "redirect": None,
                "error": f"Failed to create redirect: {e}",
                "error_code": PersistenceError.default_error_code.code,
            }

    async def _invalidate(self, site_id: str) -> None:
        removed = await self.cache.invalidate_site(site_id)
        logger.debug(f"Cache invalidated for site {site_id} ({removed} entries)")

    # ------------------------------------------------------------------
    # Read path
    # ------------------------------------------------------------------

    async def list_pages(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        search: Optional[str] = None,
        category: Optional[str] = None,
        is_custom: Optional[bool] = None,
        page: int = 1,
        limit: int = 20,
        bypass_cache: bool = False,
    ) -> PageListing:
        """
        List the composed view of every catalog page.

        Args:
            db: Database session
            actor: Authenticated actor
            site_id: Site identifier
            search: Case-insensitive substring over path, title, description, slug
            category: Page category filter
            is_custom: Only pages with (True) or without (False) an override
            page: 1-based page number
            limit: Page size (1-100)
            bypass_cache: Recompute even if a cached listing exists

        Returns:
            Pages, pagination block and catalog-wide summary

        Raises:
            AccessDenied: If the actor cannot read
            ValidationFailed: If pagination or category are invalid
        """
        require_permission(actor, "seo", "read")
        if page < 1:
            raise ValidationFailed("Page must be 1 or greater", context={"page": page})
        if not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationFailed(f"Limit must be between 1 and {MAX_PAGE_SIZE}", context={"limit": limit})
        if category and category not in {item.value for item in PageCategory}:
            raise ValidationFailed(f"Unknown page category: {category}", context={"category": category})

        async with self.monitor.track("list_pages", "service"):
            params = normalize_query(search, category, is_custom, page, limit)
            query_hash = query_fingerprint(params)

            if not bypass_cache:
                cached = await self.cache.get(site_id, query_hash)
                if cached is not None:
                    logger.debug(f"Cache hit for site {site_id} listing {query_hash}")
                    return cached

            overrides = await self._load_overrides(db, site_id)
            composed = compose_catalog(self.catalog, overrides)
            filtered = filter_pages(composed, params["search"], params["category"], params["is_custom"])
            pages, pagination = paginate(filtered, page, limit)

            listing: PageListing = {
                "pages": pages,
                "pagination": pagination,
                "summary": summarize(composed),
            }
            await self.cache.put(site_id, query_hash, listing)
            return listing

    async def get_page(self, db: AsyncSession, actor: Actor, site_id: str, path: str) -> Dict[str, Any]:
        """
        Composed view of a single page plus its catalog defaults.

        Raises:
            AccessDenied: If the actor cannot read
            NotFound: If the path is not in the catalog
        """
        require_permission(actor, "seo", "read")
        defaults = self.catalog.get_by_path(path)
        if defaults is None:
            raise NotFound(f"Page not found: {path}", context={"path": path})

        record = await self._get_record(db, site_id, path)
        view = dict(merge_page(defaults, record))
        view["predefined_data"] = {
            "path": defaults.path,
            "default_slug": defaults.default_slug,
            "category": defaults.category.value,
            "default_title": defaults.default_title,
            "default_description": defaults.default_description,
        }
        return view

    async def compose_site(self, db: AsyncSession, site_id: str) -> List[ComposedPage]:
        """Uncached composed view of every catalog page"""
        overrides = await self._load_overrides(db, site_id)
        return compose_catalog(self.catalog, overrides)

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    async def upsert_page(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        path: str,
        fields: Union[SEOPageFields, Mapping[str, Any]],
    ) -> UpsertResult:
        """
        Create or update the override record of a page.

        A slug change on an existing record also creates a 301 redirect from
        the old slug. Redirect failures do not undo the page update; they are
        reported through `redirect_created` and `redirect_error`.

        Raises:
            AccessDenied: If the actor cannot write
            InvalidPath: If the path is not in the catalog
            ValidationFailed: If fields fail schema validation
            SecurityValidationFailed: If free text is flagged
            SlugConflict: If another page holds the slug
            PersistenceError: If the store fails
        """
        actor_id = require_permission(actor, "seo", "write")
        fields = self._coerce_fields(fields)

        async with self.monitor.track("upsert_page", "service"):
            outcome = await self._write_page(db, site_id, path, fields, actor_id)
            await self._invalidate(site_id)

            audit = SEOAuditLogger(db)
            await audit.record(
                site_id,
                AuditAction.CREATE if outcome["created"] else AuditAction.UPDATE,
                path=path,
                performed_by=actor_id,
                old_slug=outcome["old_slug"],
                new_slug=outcome["new_slug"] if outcome["old_slug"] else None,
                changes=compute_changes(outcome["before"], outcome["after"]),
            )

            redirect = outcome["redirect"]
            redirect_created = bool(redirect and redirect["success"])
            if outcome["old_slug"] is not None:
                await audit.record(
                    site_id,
                    AuditAction.SLUG_CHANGE,
                    path=path,
                    performed_by=actor_id,
                    old_slug=outcome["old_slug"],
                    new_slug=outcome["new_slug"],
                    changes=[{"field": "slug", "old_value": outcome["old_slug"], "new_value": outcome["new_slug"]}],
                    metadata={
                        "redirect_created": redirect_created,
                        "reason": None if redirect_created else redirect["error"],
                    },
                )
            if redirect_created:
                await audit.record(
                    site_id,
                    AuditAction.REDIRECT_CREATE,
                    entity_type=AuditEntityType.REDIRECT,
                    path=path,
                    performed_by=actor_id,
                    old_slug=outcome["old_slug"],
                    new_slug=outcome["new_slug"],
                    metadata={"from": outcome["old_slug"], "to": outcome["new_slug"], "status_code": 301},
                )

        result: UpsertResult = {
            "page": outcome["view"],
            "created": outcome["created"],
            "old_slug": outcome["old_slug"],
            "new_slug": outcome["new_slug"],
            "redirect_created": redirect_created,
            "warnings": fields.soft_limit_warnings(),
        }
        if redirect is not None and not redirect_created:
            result["redirect_error"] = redirect["error"]
            result["redirect_error_code"] = redirect["error_code"]
        return result

    async def reset_page(self, db: AsyncSession, actor: Actor, site_id: str, path: str) -> Dict[str, Any]:
        """
        Delete a page's override record so catalog defaults apply again.

        Raises:
            AccessDenied: If the actor cannot delete
            InvalidPath: If the path is not in the catalog
            NotFound: If the page has no override record
            PersistenceError: If the store fails
        """
        actor_id = require_permission(actor, "seo", "delete")
        defaults = self._catalog_page(path)

        async with self.monitor.track("reset_page", "service"):
            record = await self._get_record(db, site_id, path)
            if record is None:
                raise NotFound(f"No custom SEO data found for {path}", context={"path": path})

            deleted_view = merge_page(defaults, record)
            before = record.override_fields()
            try:
                await db.delete(record)
                await db.commit()
            except SQLAlchemyError as e:
                await db.rollback()
                logger.exception(f"Failed to reset SEO page {path} for site {site_id}")
                raise PersistenceError(f"Failed to reset SEO page {path}", context={"path": path, "reason": str(e)})

            await self._invalidate(site_id)
            await SEOAuditLogger(db).record(
                site_id,
                AuditAction.RESET,
                path=path,
                performed_by=actor_id,
                old_slug=before["slug"],
                new_slug=defaults.default_slug,
                changes=compute_changes(before, default_fields(defaults)),
            )

        return {
            "reset_to_defaults": merge_page(defaults),
            "deleted_custom_data": deleted_view,
        }

    # ------------------------------------------------------------------
    # Bulk operations
    # ------------------------------------------------------------------

    async def bulk_apply(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        request: Union[BulkOperationRequest, Mapping[str, Any]],
    ) -> BulkResult:
        """
        Apply one operation to many pages.

        update/delete/reset/export validate every path before touching the
        store. import validates and applies each item independently. Once
        past validation, a failing item is recorded and its siblings still run.

        Raises:
            AccessDenied: If the actor lacks the permission for the operation
            BulkLimitExceeded: If the item count exceeds the role's cap
            InvalidPath: If any update/delete/reset/export path is invalid
            SecurityValidationFailed: If shared update data is flagged
            ValidationFailed: If the request is malformed
        """
        if not isinstance(request, BulkOperationRequest):
            try:
                request = BulkOperationRequest.model_validate(dict(request))
            except ValidationError as e:
                raise ValidationFailed(context={"errors": _validation_errors(e)})

        operation = request.operation
        action = {
            BulkOperation.DELETE: "delete",
            BulkOperation.RESET: "delete",
            BulkOperation.EXPORT: "read",
        }.get(operation, "write")
        actor_id = require_permission(actor, "seo", action)

        limit = get_bulk_limit(actor.role)
        if request.item_count > limit:
            raise BulkLimitExceeded(
                f"Bulk {operation.value} is limited to {limit} items for role {actor.role.value}",
                context={"limit": limit, "requested": request.item_count, "role": actor.role.value},
            )

        async with self.monitor.track(f"bulk_{operation.value}", "service"):
            if operation == BulkOperation.EXPORT:
                self._check_paths(request.paths)
                return await self._bulk_export(db, site_id, request.paths, request.export_format)

            if operation != BulkOperation.IMPORT:
                self._check_paths(request.paths)

            try:
                if operation == BulkOperation.IMPORT:
                    results = await self._bulk_import(db, site_id, request.import_data, actor_id)
                elif operation == BulkOperation.UPDATE:
                    results = await self._bulk_update(db, site_id, request.paths, request.data, actor_id)
                else:
                    results = await self._bulk_remove(db, site_id, request.paths)
            finally:
                # Items commit one at a time, so earlier ones may be stored even if the run stopped
                await self._invalidate(site_id)

            successful = [item["path"] for item in results if item["success"]]
            if successful:
                metadata: Dict[str, Any] = {
                    "operation": operation.value,
                    "paths": successful,
                    "total": len(results),
                    "successful": len(successful),
                    "failed": len(results) - len(successful),
                }
                if operation == BulkOperation.UPDATE:
                    metadata["data"] = request.data.to_updates()
                redirects = [item["path"] for item in results if item.get("redirect_created")]
                if redirects:
                    metadata["redirects_created"] = redirects
                await SEOAuditLogger(db).record(
                    site_id,
                    {
                        BulkOperation.DELETE: AuditAction.BULK_DELETE,
                        BulkOperation.RESET: AuditAction.BULK_RESET,
                    }.get(operation, AuditAction.BULK_UPDATE),
                    performed_by=actor_id,
                    metadata=metadata,
                )

        return {
            "operation": operation.value,
            "results": results,
            "total": len(results),
            "successful": len(successful),
            "failed": len(results) - len(successful),
        }

    def _item_failure(self, path: str, error: SEOError) -> BulkItemResult:
        logger.warning(f"Bulk item {path} failed: {error.code} {error.message}")
        return {"path": path, "success": False, "error": error.message, "error_code": error.code}

    async def _store_failure(self, db: AsyncSession, site_id: str, path: str, error: SQLAlchemyError) -> BulkItemResult:
        """Roll back a failed item so the session stays usable for its siblings"""
        await db.rollback()
        logger.exception(f"Store error on bulk item {path} for site {site_id}")
        return self._item_failure(
            path, PersistenceError(f"Failed to write SEO page {path}", context={"path": path, "reason": str(error)})
        )

    async def _bulk_update(
        self,
        db: AsyncSession,
        site_id: str,
        paths: List[str],
        data: SEOPageFields,
        actor_id: str,
    ) -> List[BulkItemResult]:
        self._check_security(data)
        if data.slug is not None and len(paths) > 1:
            raise ValidationFailed(
                "A slug cannot be applied to more than one page",
                context={"slug": data.slug, "paths": paths},
            )

        results: List[BulkItemResult] = []
        for path in paths:
            try:
                outcome = await self._write_page(db, site_id, path, data, actor_id)
            except SEOError as e:
                results.append(self._item_failure(path, e))
                continue
            except SQLAlchemyError as e:
                results.append(await self._store_failure(db, site_id, path, e))
                continue
            redirect = outcome["redirect"]
            results.append({
                "path": path,
                "success": True,
                "redirect_created": bool(redirect and redirect["success"]),
            })
        return results

    async def _bulk_import(
        self,
        db: AsyncSession,
        site_id: str,
        items: List[Dict[str, Any]],
        actor_id: str,
    ) -> List[BulkItemResult]:
        results: List[BulkItemResult] = []
        for raw in items:
            path = str(raw.get("path", "")) if isinstance(raw, Mapping) else ""
            try:
                item = ImportItem.model_validate(raw)
            except ValidationError as e:
                error = ValidationFailed(context={"errors": _validation_errors(e)})
                results.append(self._item_failure(path, error))
                continue
            try:
                outcome = await self._write_page(db, site_id, item.path, item.page_fields(), actor_id)
            except SEOError as e:
                results.append(self._item_failure(item.path, e))
                continue
            except SQLAlchemyError as e:
                results.append(await self._store_failure(db, site_id, item.path, e))
                continue
            redirect = outcome["redirect"]
            results.append({
                "path": item.path,
                "success": True,
                "redirect_created": bool(redirect and redirect["success"]),
            })
        return results

    async def _bulk_remove(self, db: AsyncSession, site_id: str, paths: List[str]) -> List[BulkItemResult]:
        results: List[BulkItemResult] = []
        for path in paths:
            try:
                record = await self._get_record(db, site_id, path)
                if record is not None:
                    await db.delete(record)
                    await db.commit()
            except SQLAlchemyError as e:
                results.append(await self._store_failure(db, site_id, path, e))
                continue
            results.append({"path": path, "success": True, "had_custom_data": record is not None})
        return results

    async def _bulk_export(
        self,
        db: AsyncSession,
        site_id: str,
        paths: List[str],
        export_format: str,
    ) -> BulkResult:
        overrides = await self._load_overrides(db, site_id)
        rows = []
        for path in paths:
            view = merge_page(self.catalog.get_by_path(path), overrides.get(path))
            rows.append({
                "path": view["path"],
                "slug": view["slug"],
                "meta_title": view["meta_title"],
                "meta_description": view["meta_description"],
                "robots": view["robots"],
                "page_category": view["page_category"],
                "is_custom": view["is_custom"],
                "open_graph": view["open_graph"],
                "updated_at": view["updated_at"],
            })

        data: Any = rows
        if export_format == "csv":
            buffer = io.StringIO()
            writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
            writer.writerow(EXPORT_COLUMNS)
            for row in rows:
                writer.writerow([
                    "" if row[column] is None else str(row[column]).lower() if column == "is_custom" else row[column]
                    for column in EXPORT_COLUMNS
                ])
            data = buffer.getvalue()

        return {
            "operation": BulkOperation.EXPORT.value,
            "results": [{"path": row["path"], "success": True} for row in rows],
            "total": len(rows),
            "successful": len(rows),
            "failed": 0,
            "data": data,
            "format": export_format,
        }

    # ------------------------------------------------------------------
    # Redirects
    # ------------------------------------------------------------------

    async def create_redirect(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        from_path: str,
        to_path: str,
        status_code: int = 301,
    ) -> RedirectCreationResult:
        """
        Explicitly create a redirect.

        Loop, chain and uniqueness failures come back as a result with
        `success` False.

        Raises:
            AccessDenied: If the actor cannot write
            SecurityValidationFailed: If either path is flagged
        """
        actor_id = require_permission(actor, "seo", "write")
        threats: List[str] = []
        for value in (from_path, to_path):
            for threat in validate_content_security(value).threats:
                if threat not in threats:
                    threats.append(threat)
        if threats:
            raise SecurityValidationFailed(threats, message="Security validation failed for redirect paths")

        async with self.monitor.track("create_redirect", "service"):
            result = await self.redirect_manager.create_redirect_safely(
                db, site_id, from_path, to_path, status_code, actor_id
            )
            if result["success"]:
                await SEOAuditLogger(db).record(
                    site_id,
                    AuditAction.REDIRECT_CREATE,
                    entity_type=AuditEntityType.REDIRECT,
                    path=from_path,
                    performed_by=actor_id,
                    metadata={"from": from_path, "to": to_path, "status_code": status_code},
                )
        return result

    async def list_redirects(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        page: int = 1,
        limit: int = 20,
        status_code: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Dict[str, Any]:
        require_permission(actor, "seo", "read")
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationFailed(
                f"Page must be 1 or greater and limit between 1 and {MAX_PAGE_SIZE}",
                context={"page": page, "limit": limit},
            )
        return await self.redirect_manager.list_redirects(db, site_id, page, limit, status_code, search)

    async def delete_redirects(self, db: AsyncSession, actor: Actor, site_id: str, ids: List[str]) -> Dict[str, Any]:
        """
        Delete up to the configured number of redirects at once.

        Raises:
            AccessDenied: If the actor cannot delete
            ValidationFailed: If no ids are given
            BulkLimitExceeded: If too many ids are given
        """
        actor_id = require_permission(actor, "seo", "delete")
        deleted = await self.redirect_manager.delete_redirects(db, site_id, ids)
        if deleted:
            await SEOAuditLogger(db).record(
                site_id,
                AuditAction.DELETE,
                entity_type=AuditEntityType.REDIRECT,
                performed_by=actor_id,
                metadata={
                    "ids": [item["id"] for item in deleted],
                    "redirects": [{"from": item["from"], "to": item["to"]} for item in deleted],
                },
            )
        return {"deleted_count": len(deleted), "deleted": deleted}

    # ------------------------------------------------------------------
    # Audit, cache, performance and sitemap
    # ------------------------------------------------------------------

    async def get_audit_logs(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        page: int = 1,
        limit: int = 50,
        **filters,
    ) -> Dict[str, Any]:
        require_permission(actor, "seo", "read")
        if page < 1 or not 1 <= limit <= MAX_PAGE_SIZE:
            raise ValidationFailed(
                f"Page must be 1 or greater and limit between 1 and {MAX_PAGE_SIZE}",
                context={"page": page, "limit": limit},
            )
        return await SEOAuditLogger(db).get_audit_logs(site_id, page=page, limit=limit, **filters)

    async def get_audit_stats(self, db: AsyncSession, actor: Actor, site_id: str, days: int = 30) -> Dict[str, Any]:
        require_permission(actor, "seo", "read")
        if days < 1:
            raise ValidationFailed("Days must be 1 or greater", context={"days": days})
        return await SEOAuditLogger(db).get_audit_stats(site_id, days)

    async def clear_cache(self, actor: Actor, site_id: Optional[str] = None) -> int:
        require_permission(actor, "seo", "write")
        if site_id:
            return await self.cache.invalidate_site(site_id)
        return await self.cache.clear_all()

    async def warmup_cache(self, db: AsyncSession, actor: Actor, site_id: str) -> Dict[str, Any]:
        """Pre-compute the default listing of a site"""
        require_permission(actor, "seo", "write")
        listing = await self.list_pages(db, actor, site_id, bypass_cache=True)
        return {"site_id": site_id, "pages_cached": len(listing["pages"])}

    async def get_performance(self, actor: Actor, window_minutes: int = 60) -> Dict[str, Any]:
        require_permission(actor, "seo", "read")
        cache_stats = await self.cache.stats()
        return {
            "time_window": window_minutes,
            "performance": self.monitor.get_stats(window_minutes),
            "slow_operations": self.monitor.get_slow_operations(limit=10),
            "recommendations": self.monitor.get_recommendations(cache_hit_rate=cache_stats["hit_rate"]),
            "cache": cache_stats,
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }

    async def performance_action(
        self,
        db: AsyncSession,
        actor: Actor,
        action: str,
        site_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Run a cache or metrics management action.

        Raises:
            ValidationFailed: If the action is unknown or warmup has no site
        """
        require_permission(actor, "seo", "write")
        if action == "clear_cache":
            removed = await self.clear_cache(actor, site_id)
            return {"message": "Cache cleared successfully", "entries_removed": removed}
        if action == "clear_metrics":
            self.monitor.clear()
            return {"message": "Performance metrics cleared successfully"}
        if action == "warmup_cache":
            if not site_id:
                raise ValidationFailed("Site ID is required for cache warmup")
            warmed = await self.warmup_cache(db, actor, site_id)
            return {"message": "Cache warmup completed", **warmed}
        if action == "export_metrics":
            return {"message": "Performance metrics exported", "data": self.monitor.export_data()}
        raise ValidationFailed(f"Invalid action: {action}", context={"action": action})

    async def sitemap_entries(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        base_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Sitemap entries for every indexable page"""
        require_permission(actor, "seo", "read")
        generator = SitemapGenerator(base_url or settings.sitemap_base_url or settings.site_base_url)
        async with self.monitor.track("sitemap_entries", "service"):
            pages = await self.compose_site(db, site_id)
            entries = generator.generate_entries(pages)
        return {
            "sitemap": entries,
            "total_entries": len(entries),
            "generated_at": datetime.now(timezone.utc).isoformat(),
        }

    async def sitemap_stats(
        self,
        db: AsyncSession,
        actor: Actor,
        site_id: str,
        base_url: Optional[str] = None,
        preview: int = 10,
    ) -> Dict[str, Any]:
        require_permission(actor, "seo", "read")
        generator = SitemapGenerator(base_url or settings.sitemap_base_url or settings.site_base_url)
        pages = await self.compose_site(db, site_id)
        entries = generator.generate_entries(pages)
        return {
            "stats": generator.get_stats(pages),
            "preview_entries": entries[:preview],
            "sitemap_info": generator.sitemap_info(len(entries)),
        }
