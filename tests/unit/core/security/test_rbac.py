"""Unit tests for RBAC module"""
import pytest
from seopanel.core.security.rbac import (
    Actor,
    Role,
    has_permission,
    require_permission,
    get_minimum_role_for_action,
    get_bulk_limit,
)
from seopanel.exceptions import AccessDenied


class TestRoleEnum:
    """Tests for Role enum"""

    def test_role_values(self):
        """Test that Role enum has correct values"""
        assert Role.OWNER.value == "owner"
        assert Role.ADMIN.value == "admin"
        assert Role.EDITOR.value == "editor"
        assert Role.VIEWER.value == "viewer"


class TestHasPermission:
    """Tests for has_permission"""

    def test_wildcard_grants_every_seo_action(self):
        """Test that seo.* covers read, write and delete"""
        for action in ("seo.read", "seo.write", "seo.delete"):
            assert has_permission(Role.OWNER, action) is True
            assert has_permission(Role.ADMIN, action) is True

    def test_editor_cannot_delete(self):
        """Test that editors can read and write but not delete"""
        assert has_permission(Role.EDITOR, "seo.read") is True
        assert has_permission(Role.EDITOR, "seo.write") is True
        assert has_permission(Role.EDITOR, "seo.delete") is False

    def test_viewer_is_read_only(self):
        """Test that viewers can only read"""
        assert has_permission(Role.VIEWER, "seo.read") is True
        assert has_permission(Role.VIEWER, "seo.write") is False

    def test_wildcard_does_not_match_other_resources(self):
        """Test that seo.* does not leak into other prefixes"""
        assert has_permission(Role.ADMIN, "seoextra.write") is False


class TestRequirePermission:
    """Tests for require_permission"""

    def test_returns_actor_id(self):
        """Test that a permitted actor's id is returned"""
        actor = Actor(id="user-1", role=Role.EDITOR)
        assert require_permission(actor, "seo", "write") == "user-1"

    def test_denies_missing_actor(self):
        """Test that an unauthenticated call is denied"""
        with pytest.raises(AccessDenied):
            require_permission(None, "seo", "read")

    def test_denial_carries_role_context(self):
        """Test that the denial names the required action and minimum role"""
        actor = Actor(id="user-2", role=Role.VIEWER)
        with pytest.raises(AccessDenied) as exc_info:
            require_permission(actor, "seo", "delete")

        context = exc_info.value.context
        assert context["current_role"] == "viewer"
        assert context["required_action"] == "seo.delete"
        assert context["minimum_role"] == "admin"
        assert exc_info.value.http_status == 403


class TestRoleHelpers:
    """Tests for role helper functions"""

    def test_minimum_role_for_write(self):
        assert get_minimum_role_for_action("seo.write") == "editor"

    def test_minimum_role_for_unknown_action(self):
        assert get_minimum_role_for_action("billing.write") == "owner"

    def test_bulk_limits_by_role(self):
        """Test that bulk caps decrease with role"""
        assert get_bulk_limit(Role.OWNER) == 200
        assert get_bulk_limit(Role.ADMIN) == 100
        assert get_bulk_limit(Role.EDITOR) == 25
        assert get_bulk_limit(Role.VIEWER) == 0
