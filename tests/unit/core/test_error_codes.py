"""Unit tests for error codes and exceptions"""
from seopanel.error_codes import ErrorCodeDictionary
from seopanel.exceptions import (
    REDIRECT_ERRORS,
    RedirectLoop,
    SecurityValidationFailed,
    SlugConflict,
)


class TestErrorCodeDictionary:
    """Tests for the error code registry"""

    def test_every_taxonomy_member_registered(self):
        codes = {error.code for error in ErrorCodeDictionary.get_all_errors()}
        assert codes == {
            "ACCESS_DENIED", "INVALID_PATH", "SLUG_CONFLICT", "SECURITY_VALIDATION_FAILED",
            "REDIRECT_LOOP", "REDIRECT_CHAIN_TOO_LONG", "REDIRECT_EXISTS", "BULK_LIMIT_EXCEEDED",
            "NOT_FOUND", "VALIDATION_FAILED", "PERSISTENCE_ERROR",
        }

    def test_get_error(self):
        assert ErrorCodeDictionary.get_error("SLUG_CONFLICT").http_status == 409
        assert ErrorCodeDictionary.get_error("UNKNOWN") is None


class TestSEOErrors:
    """Tests for SEOError subclasses"""

    def test_default_message_and_code(self):
        error = SlugConflict()
        assert error.code == "SLUG_CONFLICT"
        assert error.message == ErrorCodeDictionary.SLUG_CONFLICT.message

    def test_to_dict(self):
        error = SlugConflict("Slug taken", context={"slug": "about-us"})
        data = error.to_dict()
        assert data["code"] == "SLUG_CONFLICT"
        assert data["message"] == "Slug taken"
        assert data["context"] == {"slug": "about-us"}
        assert data["remediation_steps"]

    def test_security_error_carries_threats(self):
        error = SecurityValidationFailed(["script_injection"])
        assert error.threats == ["script_injection"]
        assert error.context["threats"] == ["script_injection"]

    def test_redirect_errors_map(self):
        assert REDIRECT_ERRORS["REDIRECT_LOOP"] is RedirectLoop
        assert set(REDIRECT_ERRORS) == {"REDIRECT_LOOP", "REDIRECT_CHAIN_TOO_LONG", "REDIRECT_EXISTS"}
