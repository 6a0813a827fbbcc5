"""Custom exceptions for the SEO administration core"""
from typing import Optional, Dict, Any

from seopanel.error_codes import ErrorCode, ErrorCodeDictionary


class SEOError(Exception):
    """Base exception for SEO core errors"""

    default_error_code: ErrorCode = ErrorCodeDictionary.PERSISTENCE_ERROR

    def __init__(
        self,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        error_code: Optional[ErrorCode] = None,
    ):
        self.error_code = error_code or self.default_error_code
        self.message = message or self.error_code.message
        self.context = context or {}
        super().__init__(self.message)

    @property
    def code(self) -> str:
        return self.error_code.code

    @property
    def http_status(self) -> int:
        return self.error_code.http_status

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses"""
        return {
            "code": self.error_code.code,
            "message": self.message,
            "remediation_steps": self.error_code.remediation_steps,
            "context": self.context,
        }


class AccessDenied(SEOError):
    """Exception raised when the actor lacks the required permission"""
    default_error_code = ErrorCodeDictionary.ACCESS_DENIED


class InvalidPath(SEOError):
    """Exception raised when a path is not part of the page catalog"""
    default_error_code = ErrorCodeDictionary.INVALID_PATH


class SlugConflict(SEOError):
    """Exception raised when a slug is already claimed by another page"""
    default_error_code = ErrorCodeDictionary.SLUG_CONFLICT


class SecurityValidationFailed(SEOError):
    """Exception raised when free text contains injection patterns"""
    default_error_code = ErrorCodeDictionary.SECURITY_VALIDATION_FAILED

    def __init__(self, threats, message: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
        self.threats = list(threats)
        merged = {"threats": self.threats}
        merged.update(context or {})
        super().__init__(message=message, context=merged)


class RedirectLoop(SEOError):
    """Exception raised when a redirect would close a cycle"""
    default_error_code = ErrorCodeDictionary.REDIRECT_LOOP


class RedirectChainTooLong(SEOError):
    """Exception raised when a redirect would make a chain too long"""
    default_error_code = ErrorCodeDictionary.REDIRECT_CHAIN_TOO_LONG


class RedirectExists(SEOError):
    """Exception raised when the source path already redirects"""
    default_error_code = ErrorCodeDictionary.REDIRECT_EXISTS


class BulkLimitExceeded(SEOError):
    """Exception raised when a bulk request affects too many items"""
    default_error_code = ErrorCodeDictionary.BULK_LIMIT_EXCEEDED


class NotFound(SEOError):
    """Exception raised when a requested resource does not exist"""
    default_error_code = ErrorCodeDictionary.NOT_FOUND


class ValidationFailed(SEOError):
    """Exception raised when schema-level field validation fails"""
    default_error_code = ErrorCodeDictionary.VALIDATION_FAILED


class PersistenceError(SEOError):
    """Exception raised when the store fails unexpectedly"""
    default_error_code = ErrorCodeDictionary.PERSISTENCE_ERROR


# Redirect failures are reported as result dicts; this maps their codes back to exceptions
REDIRECT_ERRORS = {
    ErrorCodeDictionary.REDIRECT_LOOP.code: RedirectLoop,
    ErrorCodeDictionary.REDIRECT_CHAIN_TOO_LONG.code: RedirectChainTooLong,
    ErrorCodeDictionary.REDIRECT_EXISTS.code: RedirectExists,
}
