"""Unit tests for SEO reconciliation service"""
import csv
import io
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy import select, func
from sqlalchemy.exc import OperationalError

from seopanel.db.models import Redirect, SEOAuditLog, SEOPage
from seopanel.exceptions import (
    AccessDenied,
    BulkLimitExceeded,
    InvalidPath,
    NotFound,
    SecurityValidationFailed,
    SlugConflict,
    ValidationFailed,
)


async def count(db, model):
    return await db.scalar(select(func.count(model.id)))


async def audit_actions(db):
    result = await db.execute(select(SEOAuditLog.action).order_by(SEOAuditLog.performed_at))
    return [row[0] for row in result.all()]


class TestListPages:
    """Tests for the composed listing"""

    @pytest.mark.asyncio
    async def test_lists_every_catalog_page_with_defaults(self, test_db_session, seo_service, viewer_actor, site_id, catalog):
        """Without overrides every page shows its catalog defaults"""
        listing = await seo_service.list_pages(test_db_session, viewer_actor, site_id, limit=100)

        assert listing["pagination"]["total"] == len(catalog)
        assert listing["summary"] == {
            "total_predefined": len(catalog),
            "total_custom": 0,
            "total_default": len(catalog),
        }
        paths = [page["path"] for page in listing["pages"]]
        assert paths == sorted(paths)
        about = next(page for page in listing["pages"] if page["path"] == "/about")
        assert about["slug"] == "about-us"
        assert about["is_custom"] is False

    @pytest.mark.asyncio
    async def test_override_is_overlaid(self, test_db_session, seo_service, editor_actor, site_id):
        """A stored override wins field by field"""
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"meta_title": "Our Story"})

        listing = await seo_service.list_pages(test_db_session, editor_actor, site_id, search="our story")
        assert [page["path"] for page in listing["pages"]] == ["/about"]
        page = listing["pages"][0]
        assert page["meta_title"] == "Our Story"
        assert page["slug"] == "about-us"
        assert page["is_custom"] is True
        assert listing["summary"]["total_custom"] == 1

    @pytest.mark.asyncio
    async def test_repeat_query_is_served_from_cache(self, test_db_session, seo_service, viewer_actor, site_id, memory_cache):
        """Identical queries return identical results, the second from cache"""
        first = await seo_service.list_pages(test_db_session, viewer_actor, site_id, category="services")
        second = await seo_service.list_pages(test_db_session, viewer_actor, site_id, category="services")

        assert first == second
        assert memory_cache.hits == 1

    @pytest.mark.asyncio
    async def test_write_invalidates_cached_listing(self, test_db_session, seo_service, editor_actor, site_id):
        """A listing read after a write reflects the write"""
        before = await seo_service.list_pages(test_db_session, editor_actor, site_id, is_custom=True)
        assert before["pages"] == []

        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/blog", {"meta_title": "Insights"})

        after = await seo_service.list_pages(test_db_session, editor_actor, site_id, is_custom=True)
        assert [page["path"] for page in after["pages"]] == ["/blog"]

    @pytest.mark.asyncio
    async def test_bypass_cache(self, test_db_session, seo_service, viewer_actor, site_id, memory_cache):
        await seo_service.list_pages(test_db_session, viewer_actor, site_id)
        await seo_service.list_pages(test_db_session, viewer_actor, site_id, bypass_cache=True)
        assert memory_cache.hits == 0

    @pytest.mark.asyncio
    async def test_invalid_parameters(self, test_db_session, seo_service, viewer_actor, site_id):
        with pytest.raises(ValidationFailed):
            await seo_service.list_pages(test_db_session, viewer_actor, site_id, page=0)
        with pytest.raises(ValidationFailed):
            await seo_service.list_pages(test_db_session, viewer_actor, site_id, limit=101)
        with pytest.raises(ValidationFailed):
            await seo_service.list_pages(test_db_session, viewer_actor, site_id, category="landing")

    @pytest.mark.asyncio
    async def test_requires_actor(self, test_db_session, seo_service, site_id):
        with pytest.raises(AccessDenied):
            await seo_service.list_pages(test_db_session, None, site_id)


class TestGetPage:
    """Tests for single page lookup"""

    @pytest.mark.asyncio
    async def test_includes_predefined_data(self, test_db_session, seo_service, viewer_actor, site_id):
        page = await seo_service.get_page(test_db_session, viewer_actor, site_id, "/contact")
        assert page["slug"] == "contact-us"
        assert page["predefined_data"]["category"] == "contact"

    @pytest.mark.asyncio
    async def test_unknown_path(self, test_db_session, seo_service, viewer_actor, site_id):
        with pytest.raises(NotFound):
            await seo_service.get_page(test_db_session, viewer_actor, site_id, "/nope")


class TestUpsertPage:
    """Tests for page writes"""

    @pytest.mark.asyncio
    async def test_first_write_creates_record(self, test_db_session, seo_service, editor_actor, site_id):
        """First write creates a record seeded from catalog defaults"""
        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"meta_description": "Who we really are"}
        )

        assert result["created"] is True
        assert result["old_slug"] is None
        assert result["redirect_created"] is False
        assert result["page"]["meta_description"] == "Who we really are"
        assert result["page"]["slug"] == "about-us"

        record = (await test_db_session.execute(select(SEOPage))).scalar_one()
        assert record.created_by == "editor-1"
        assert record.is_custom is True
        assert await audit_actions(test_db_session) == ["create"]

    @pytest.mark.asyncio
    async def test_invalid_path_rejected(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(InvalidPath):
            await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/nope", {"meta_title": "X"})
        assert await count(test_db_session, SEOPage) == 0

    @pytest.mark.asyncio
    async def test_viewer_cannot_write(self, test_db_session, seo_service, viewer_actor, site_id):
        """Permission is checked before path validation"""
        with pytest.raises(AccessDenied):
            await seo_service.upsert_page(test_db_session, viewer_actor, site_id, "/nope", {"meta_title": "X"})

    @pytest.mark.asyncio
    async def test_schema_errors(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(ValidationFailed):
            await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"slug": "Not A Slug"})
        with pytest.raises(ValidationFailed):
            await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"unknown": "x"})

    @pytest.mark.asyncio
    async def test_security_rejection_persists_nothing(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(SecurityValidationFailed) as exc_info:
            await seo_service.upsert_page(
                test_db_session, editor_actor, site_id, "/about", {"meta_title": "<script>alert(1)</script>"}
            )
        assert "script_injection" in exc_info.value.threats
        assert await count(test_db_session, SEOPage) == 0

    @pytest.mark.asyncio
    async def test_slug_conflict(self, test_db_session, seo_service, editor_actor, site_id):
        """A slug held by another page is rejected"""
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"slug": "company"})

        with pytest.raises(SlugConflict):
            await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/contact", {"slug": "company"})
        assert await count(test_db_session, SEOPage) == 1

    @pytest.mark.asyncio
    async def test_unique_constraint_backstops_slug_check(self, test_db_session, seo_service, editor_actor, site_id):
        """A slug collision caught only by the store still surfaces as a conflict"""
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"slug": "company"})

        with patch.object(seo_service, "_check_slug_available", AsyncMock(return_value=None)):
            with pytest.raises(SlugConflict) as exc_info:
                await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/contact", {"slug": "company"})
        assert exc_info.value.context["slug"] == "company"

        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/contact", {"meta_title": "Contact"}
        )
        assert result["created"] is True
        assert result["page"]["slug"] == "contact-us"
        assert await count(test_db_session, SEOPage) == 2

    @pytest.mark.asyncio
    async def test_page_may_keep_its_own_slug(self, test_db_session, seo_service, editor_actor, site_id):
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"slug": "company"})

        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"slug": "company", "meta_title": "Company"}
        )
        assert result["created"] is False
        assert result["old_slug"] is None
        assert await count(test_db_session, Redirect) == 0

    @pytest.mark.asyncio
    async def test_slug_change_creates_redirect(self, test_db_session, seo_service, editor_actor, site_id):
        """Changing the slug of an existing record redirects the old slug"""
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"meta_title": "About"})

        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"slug": "about-us-new"}
        )

        assert result["old_slug"] == "about-us"
        assert result["new_slug"] == "about-us-new"
        assert result["redirect_created"] is True
        redirect = (await test_db_session.execute(select(Redirect))).scalar_one()
        assert (redirect.from_path, redirect.to_path, redirect.status_code) == ("about-us", "about-us-new", 301)
        assert await audit_actions(test_db_session) == ["create", "update", "slug_change", "redirect_create"]

    @pytest.mark.asyncio
    async def test_redirect_failure_is_not_fatal(self, test_db_session, seo_service, editor_actor, site_id):
        """A rejected redirect leaves the slug update in place"""
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"meta_title": "About"})
        await seo_service.create_redirect(test_db_session, editor_actor, site_id, "about-us-new", "about-us")

        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"slug": "about-us-new"}
        )

        assert result["redirect_created"] is False
        assert result["redirect_error_code"] == "REDIRECT_LOOP"
        assert result["page"]["slug"] == "about-us-new"
        record = (await test_db_session.execute(select(SEOPage))).scalar_one()
        assert record.slug == "about-us-new"
        assert await count(test_db_session, Redirect) == 1

    @pytest.mark.asyncio
    async def test_soft_limit_warnings(self, test_db_session, seo_service, editor_actor, site_id):
        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"meta_title": "A" * 70}
        )
        assert len(result["warnings"]) == 1

    @pytest.mark.asyncio
    async def test_soft_limit_counts_visible_text(self, test_db_session, seo_service, editor_actor, site_id):
        """Markup does not count toward the recommended length"""
        title = "<b>" + "A" * 58 + "</b>"
        result = await seo_service.upsert_page(
            test_db_session, editor_actor, site_id, "/about", {"meta_title": title}
        )
        assert result["warnings"] == []
        assert result["page"]["meta_title"] == title


class TestResetPage:
    """Tests for reset to defaults"""

    @pytest.mark.asyncio
    async def test_reset_without_record(self, test_db_session, seo_service, admin_actor, site_id):
        with pytest.raises(NotFound):
            await seo_service.reset_page(test_db_session, admin_actor, site_id, "/about")

    @pytest.mark.asyncio
    async def test_reset_restores_defaults(self, test_db_session, seo_service, admin_actor, site_id):
        await seo_service.upsert_page(test_db_session, admin_actor, site_id, "/about", {"meta_title": "Custom"})

        result = await seo_service.reset_page(test_db_session, admin_actor, site_id, "/about")
        assert result["deleted_custom_data"]["meta_title"] == "Custom"
        assert result["reset_to_defaults"]["is_custom"] is False

        page = await seo_service.get_page(test_db_session, admin_actor, site_id, "/about")
        assert page["is_custom"] is False
        with pytest.raises(NotFound):
            await seo_service.reset_page(test_db_session, admin_actor, site_id, "/about")

    @pytest.mark.asyncio
    async def test_reset_invalid_path(self, test_db_session, seo_service, admin_actor, site_id):
        with pytest.raises(InvalidPath):
            await seo_service.reset_page(test_db_session, admin_actor, site_id, "/nope")

    @pytest.mark.asyncio
    async def test_editor_cannot_reset(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(AccessDenied):
            await seo_service.reset_page(test_db_session, editor_actor, site_id, "/about")


class TestBulkApply:
    """Tests for bulk operations"""

    @pytest.mark.asyncio
    async def test_bulk_update(self, test_db_session, seo_service, editor_actor, site_id):
        result = await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
            "operation": "update",
            "paths": ["/about", "/contact"],
            "data": {"robots": "noindex, follow"},
        })

        assert result["successful"] == 2
        assert result["failed"] == 0
        records = (await test_db_session.execute(select(SEOPage))).scalars().all()
        assert {record.robots for record in records} == {"noindex,follow"}
        assert await audit_actions(test_db_session) == ["bulk_update"]

    @pytest.mark.asyncio
    async def test_invalid_path_aborts_before_any_write(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(InvalidPath) as exc_info:
            await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "update",
                "paths": ["/about", "/nope"],
                "data": {"meta_title": "X"},
            })
        assert exc_info.value.context["invalid_paths"] == ["/nope"]
        assert await count(test_db_session, SEOPage) == 0

    @pytest.mark.asyncio
    async def test_slug_for_many_paths_rejected(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(ValidationFailed):
            await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "update",
                "paths": ["/about", "/contact"],
                "data": {"slug": "same"},
            })

    @pytest.mark.asyncio
    async def test_import_isolates_failures(self, test_db_session, seo_service, editor_actor, site_id):
        """One bad import item does not stop its siblings"""
        result = await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
            "operation": "import",
            "import_data": [
                {"path": "/about", "meta_title": "About", "is_custom": True},
                {"path": "/nope", "meta_title": "Missing"},
                {"path": "/contact", "slug": "Bad Slug"},
                {"path": "/blog", "meta_description": "Our writing"},
            ],
        })

        assert result["total"] == 4
        assert result["successful"] == 2
        failures = {item["path"]: item["error_code"] for item in result["results"] if not item["success"]}
        assert failures == {"/nope": "INVALID_PATH", "/contact": "VALIDATION_FAILED"}
        assert await count(test_db_session, SEOPage) == 2

    @pytest.mark.asyncio
    async def test_store_read_failure_isolated_to_its_item(self, test_db_session, seo_service, editor_actor, site_id):
        """A store error on one path fails that item; its siblings are written and the listing refreshed"""
        original_get_record = seo_service._get_record

        async def flaky_get_record(db, record_site_id, path):
            if path == "/contact":
                raise OperationalError("SELECT", {}, Exception("connection reset"))
            return await original_get_record(db, record_site_id, path)

        await seo_service.list_pages(test_db_session, editor_actor, site_id)

        with patch.object(seo_service, "_get_record", flaky_get_record):
            result = await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "update",
                "paths": ["/about", "/contact"],
                "data": {"robots": "noindex,follow"},
            })

        assert result["successful"] == 1
        assert result["failed"] == 1
        failure = next(item for item in result["results"] if not item["success"])
        assert failure["path"] == "/contact"
        assert failure["error_code"] == "PERSISTENCE_ERROR"

        listing = await seo_service.list_pages(test_db_session, editor_actor, site_id)
        about = next(page for page in listing["pages"] if page["path"] == "/about")
        assert about["robots"] == "noindex,follow"
        assert listing["summary"]["total_custom"] == 1
        assert await audit_actions(test_db_session) == ["bulk_update"]

    @pytest.mark.asyncio
    async def test_import_continues_after_raw_store_error(self, test_db_session, seo_service, editor_actor, site_id):
        """An unexpected store error mid-import rolls back and moves on to the next item"""
        original_refresh = test_db_session.refresh

        async def flaky_refresh(instance, *args, **kwargs):
            if isinstance(instance, SEOPage) and instance.path == "/contact":
                raise OperationalError("SELECT", {}, Exception("connection reset"))
            return await original_refresh(instance, *args, **kwargs)

        await seo_service.list_pages(test_db_session, editor_actor, site_id, is_custom=True)

        with patch.object(test_db_session, "refresh", flaky_refresh):
            result = await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "import",
                "import_data": [
                    {"path": "/contact", "meta_title": "Reach Us"},
                    {"path": "/blog", "meta_title": "Insights"},
                ],
            })

        assert result["successful"] == 1
        failures = {item["path"]: item["error_code"] for item in result["results"] if not item["success"]}
        assert failures == {"/contact": "PERSISTENCE_ERROR"}

        listing = await seo_service.list_pages(test_db_session, editor_actor, site_id, is_custom=True)
        assert "/blog" in [page["path"] for page in listing["pages"]]
        assert (await audit_actions(test_db_session))[-1] == "bulk_update"

    @pytest.mark.asyncio
    async def test_bulk_reset(self, test_db_session, seo_service, admin_actor, site_id):
        await seo_service.upsert_page(test_db_session, admin_actor, site_id, "/about", {"meta_title": "Custom"})

        result = await seo_service.bulk_apply(test_db_session, admin_actor, site_id, {
            "operation": "reset",
            "paths": ["/about", "/contact"],
        })

        assert result["successful"] == 2
        had_data = {item["path"]: item["had_custom_data"] for item in result["results"]}
        assert had_data == {"/about": True, "/contact": False}
        assert await count(test_db_session, SEOPage) == 0
        assert (await audit_actions(test_db_session))[-1] == "bulk_reset"

    @pytest.mark.asyncio
    async def test_bulk_limit(self, test_db_session, seo_service, editor_actor, site_id, catalog):
        with pytest.raises(BulkLimitExceeded):
            await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "update",
                "paths": catalog.paths()[:26],
                "data": {"meta_title": "X"},
            })

    @pytest.mark.asyncio
    async def test_viewer_cannot_bulk_update(self, test_db_session, seo_service, viewer_actor, site_id):
        with pytest.raises(AccessDenied):
            await seo_service.bulk_apply(test_db_session, viewer_actor, site_id, {
                "operation": "update",
                "paths": ["/about"],
                "data": {"meta_title": "X"},
            })

    @pytest.mark.asyncio
    async def test_editor_cannot_bulk_delete(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(AccessDenied):
            await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {
                "operation": "delete",
                "paths": ["/about"],
            })

    @pytest.mark.asyncio
    async def test_export_csv(self, test_db_session, seo_service, admin_actor, site_id):
        await seo_service.upsert_page(test_db_session, admin_actor, site_id, "/about", {"meta_title": "About, Us"})

        result = await seo_service.bulk_apply(test_db_session, admin_actor, site_id, {
            "operation": "export",
            "paths": ["/about", "/contact"],
            "export_format": "csv",
        })

        rows = list(csv.reader(io.StringIO(result["data"])))
        assert rows[0][:3] == ["path", "slug", "meta_title"]
        assert rows[1][:3] == ["/about", "about-us", "About, Us"]
        assert rows[1][6] == "true"
        assert rows[2][6] == "false"
        assert '"About, Us"' in result["data"]

    @pytest.mark.asyncio
    async def test_export_json_is_not_audited(self, test_db_session, seo_service, viewer_actor, site_id):
        result = await seo_service.bulk_apply(test_db_session, viewer_actor, site_id, {
            "operation": "export",
            "paths": ["/"],
        })
        assert result["format"] == "json"
        assert result["data"][0]["slug"] == "home"
        assert await count(test_db_session, SEOAuditLog) == 0

    @pytest.mark.asyncio
    async def test_malformed_request(self, test_db_session, seo_service, editor_actor, site_id):
        with pytest.raises(ValidationFailed):
            await seo_service.bulk_apply(test_db_session, editor_actor, site_id, {"operation": "update", "paths": []})


class TestRedirectsAndAdmin:
    """Tests for explicit redirects, audit queries and admin actions"""

    @pytest.mark.asyncio
    async def test_create_and_delete_redirect(self, test_db_session, seo_service, admin_actor, site_id):
        created = await seo_service.create_redirect(test_db_session, admin_actor, site_id, "/old", "/new")
        assert created["success"] is True

        listing = await seo_service.list_redirects(test_db_session, admin_actor, site_id)
        assert listing["statistics"]["total"] == 1

        deleted = await seo_service.delete_redirects(test_db_session, admin_actor, site_id, [created["redirect"]["id"]])
        assert deleted["deleted_count"] == 1
        assert await audit_actions(test_db_session) == ["redirect_create", "delete"]

    @pytest.mark.asyncio
    async def test_redirect_paths_are_screened(self, test_db_session, seo_service, admin_actor, site_id):
        with pytest.raises(SecurityValidationFailed):
            await seo_service.create_redirect(test_db_session, admin_actor, site_id, "/old", "javascript:alert(1)")

    @pytest.mark.asyncio
    async def test_audit_queries(self, test_db_session, seo_service, editor_actor, site_id):
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"meta_title": "A"})
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/about", {"meta_title": "B"})

        logs = await seo_service.get_audit_logs(test_db_session, editor_actor, site_id, action="update")
        assert logs["pagination"]["total"] == 1
        assert logs["logs"][0]["changes"] == [{"field": "meta_title", "old_value": "A", "new_value": "B"}]

        stats = await seo_service.get_audit_stats(test_db_session, editor_actor, site_id, days=1)
        assert stats["by_action"] == {"create": 1, "update": 1}

    @pytest.mark.asyncio
    async def test_warmup_and_clear_cache(self, test_db_session, seo_service, admin_actor, site_id, memory_cache):
        warmed = await seo_service.performance_action(test_db_session, admin_actor, "warmup_cache", site_id)
        assert warmed["pages_cached"] == 20
        assert await memory_cache.count() == 1

        cleared = await seo_service.performance_action(test_db_session, admin_actor, "clear_cache")
        assert cleared["entries_removed"] == 1

    @pytest.mark.asyncio
    async def test_unknown_performance_action(self, test_db_session, seo_service, admin_actor):
        with pytest.raises(ValidationFailed):
            await seo_service.performance_action(test_db_session, admin_actor, "reboot")

    @pytest.mark.asyncio
    async def test_performance_report(self, test_db_session, seo_service, viewer_actor, site_id):
        await seo_service.list_pages(test_db_session, viewer_actor, site_id)

        report = await seo_service.get_performance(viewer_actor)
        assert report["performance"]["by_operation"]["list_pages"]["count"] == 1
        assert report["cache"]["backend"] == "memory"

    @pytest.mark.asyncio
    async def test_sitemap_skips_noindex(self, test_db_session, seo_service, editor_actor, site_id, catalog):
        await seo_service.upsert_page(test_db_session, editor_actor, site_id, "/contact", {"robots": "noindex"})

        result = await seo_service.sitemap_entries(test_db_session, editor_actor, site_id, "https://example.com")
        assert result["total_entries"] == len(catalog) - 1
        assert "https://example.com/contact" not in [entry["url"] for entry in result["sitemap"]]
