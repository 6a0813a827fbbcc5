"""Unit tests for the SEO audit trail"""
from unittest.mock import AsyncMock, patch

from sqlalchemy.exc import OperationalError

from seopanel.db.enums import AuditAction, AuditEntityType
from seopanel.seo.audit import SEOAuditLogger, compute_changes


class TestComputeChanges:
    """Tests for compute_changes"""

    def test_only_changed_fields(self):
        old = {"slug": "about-us", "meta_title": "About", "robots": "index,follow"}
        new = {"slug": "about-us-new", "meta_title": "About", "robots": "index,follow"}
        assert compute_changes(old, new) == [
            {"field": "slug", "old_value": "about-us", "new_value": "about-us-new"}
        ]

    def test_creation_diffs_against_nothing(self):
        changes = compute_changes(None, {"slug": "x", "meta_title": "X"})
        assert {change["field"] for change in changes} == {"slug", "meta_title"}
        assert all(change["old_value"] is None for change in changes)

    def test_ignores_unaudited_fields(self):
        assert compute_changes({"updated_by": "a"}, {"updated_by": "b"}) == []


class TestSEOAuditLogger:
    """Tests for SEOAuditLogger"""

    async def test_record_and_query(self, test_db_session, site_id):
        audit = SEOAuditLogger(test_db_session)
        entry = await audit.record(
            site_id,
            AuditAction.SLUG_CHANGE,
            path="/about",
            performed_by="editor-1",
            old_slug="about-us",
            new_slug="about-us-new",
            changes=[{"field": "slug", "old_value": "about-us", "new_value": "about-us-new"}],
            metadata={"redirect_created": True},
        )
        assert entry is not None

        result = await audit.get_audit_logs(site_id, path="/about")
        assert result["pagination"]["total"] == 1
        log = result["logs"][0]
        assert log["action"] == "slug_change"
        assert log["entity_type"] == "seo_page"
        assert log["old_slug"] == "about-us"
        assert log["metadata"] == {"redirect_created": True}

    async def test_filters(self, test_db_session, site_id):
        audit = SEOAuditLogger(test_db_session)
        await audit.record(site_id, AuditAction.CREATE, path="/about", performed_by="a")
        await audit.record(site_id, AuditAction.UPDATE, path="/about", performed_by="b")
        await audit.record(
            site_id, AuditAction.REDIRECT_CREATE, entity_type=AuditEntityType.REDIRECT, performed_by="a"
        )
        await audit.record("other-site", AuditAction.CREATE, path="/about")

        assert (await audit.get_audit_logs(site_id))["pagination"]["total"] == 3
        assert (await audit.get_audit_logs(site_id, action="update"))["pagination"]["total"] == 1
        assert (await audit.get_audit_logs(site_id, performed_by="a"))["pagination"]["total"] == 2
        assert (await audit.get_audit_logs(site_id, entity_type="redirect"))["pagination"]["total"] == 1

    async def test_stats(self, test_db_session, site_id):
        audit = SEOAuditLogger(test_db_session)
        await audit.record(site_id, AuditAction.CREATE, path="/about", performed_by="a")
        await audit.record(site_id, AuditAction.UPDATE, path="/about", performed_by="a")
        await audit.record(site_id, AuditAction.UPDATE, path="/blog")

        stats = await audit.get_audit_stats(site_id, days=7)
        assert stats["period_days"] == 7
        assert stats["total_actions"] == 3
        assert stats["by_action"] == {"create": 1, "update": 2}
        assert stats["by_user"] == {"a": 2, "system": 1}
        assert stats["most_changed_paths"][0] == {"path": "/about", "count": 2}

    async def test_write_failure_is_swallowed(self, test_db_session, site_id):
        audit = SEOAuditLogger(test_db_session)
        failure = OperationalError("INSERT", {}, Exception("disk full"))
        with patch.object(test_db_session, "commit", AsyncMock(side_effect=failure)):
            entry = await audit.record(site_id, AuditAction.CREATE, path="/about")

        assert entry is None
        assert (await audit.get_audit_logs(site_id))["pagination"]["total"] == 0
