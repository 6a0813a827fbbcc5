"""Error Code Dictionary - Standardized error responses for SEO administration."""
from dataclasses import dataclass, field
from typing import ClassVar, Dict, List, Optional


@dataclass(frozen=True)
class ErrorCode:
    """
    Standardized error code with HTTP mapping and remediation.

    Attributes:
        code: Unique error code identifier (e.g., SLUG_CONFLICT)
        message: Human-readable error message
        http_status: HTTP status used when the error reaches the API layer
        remediation_steps: List of steps to resolve the error
    """

    code: str
    message: str
    http_status: int = 400
    remediation_steps: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, object]:
        """Convert error code to dictionary for API responses."""
        return {
            "code": self.code,
            "message": self.message,
            "http_status": self.http_status,
            "remediation_steps": self.remediation_steps,
        }


class ErrorCodeDictionary:
    """
    Catalog of every failure the SEO core can report.
    """

    ACCESS_DENIED: ClassVar[ErrorCode] = ErrorCode(
        code="ACCESS_DENIED",
        message="Access denied: insufficient permissions for this SEO operation",
        http_status=403,
        remediation_steps=[
            "Sign in with an account that has the required SEO permission",
            "Contact your administrator to request access",
        ],
    )

    INVALID_PATH: ClassVar[ErrorCode] = ErrorCode(
        code="INVALID_PATH",
        message="Invalid page path. Path must be one of the predefined website pages.",
        http_status=400,
        remediation_steps=[
            "Check the path against the page catalog",
            "Paths are case-sensitive and start with '/'",
        ],
    )

    SLUG_CONFLICT: ClassVar[ErrorCode] = ErrorCode(
        code="SLUG_CONFLICT",
        message="Slug already exists for another page",
        http_status=409,
        remediation_steps=[
            "Choose a slug that no other page on this site uses",
            "Reset or change the page currently holding the slug",
        ],
    )

    SECURITY_VALIDATION_FAILED: ClassVar[ErrorCode] = ErrorCode(
        code="SECURITY_VALIDATION_FAILED",
        message="Content security validation failed",
        http_status=400,
        remediation_steps=[
            "Remove markup, scripts and query fragments from the text",
            "Use plain text for titles, descriptions and redirect paths",
        ],
    )

    REDIRECT_LOOP: ClassVar[ErrorCode] = ErrorCode(
        code="REDIRECT_LOOP",
        message="Redirect would create an infinite loop",
        http_status=400,
        remediation_steps=[
            "Point the redirect at a destination that does not lead back to the source",
            "Delete the redirect that closes the loop first",
        ],
    )

    REDIRECT_CHAIN_TOO_LONG: ClassVar[ErrorCode] = ErrorCode(
        code="REDIRECT_CHAIN_TOO_LONG",
        message="Redirect chain too long",
        http_status=400,
        remediation_steps=[
            "Redirect directly to the final destination",
            "Collapse existing intermediate redirects",
        ],
    )

    REDIRECT_EXISTS: ClassVar[ErrorCode] = ErrorCode(
        code="REDIRECT_EXISTS",
        message="Redirect already exists for this source path",
        http_status=409,
        remediation_steps=[
            "Delete the existing redirect before creating a new one",
        ],
    )

    BULK_LIMIT_EXCEEDED: ClassVar[ErrorCode] = ErrorCode(
        code="BULK_LIMIT_EXCEEDED",
        message="Bulk operation exceeds the allowed number of items",
        http_status=400,
        remediation_steps=[
            "Split the operation into smaller batches",
        ],
    )

    NOT_FOUND: ClassVar[ErrorCode] = ErrorCode(
        code="NOT_FOUND",
        message="Resource not found",
        http_status=404,
    )

    VALIDATION_FAILED: ClassVar[ErrorCode] = ErrorCode(
        code="VALIDATION_FAILED",
        message="Validation failed",
        http_status=422,
        remediation_steps=[
            "Correct the listed fields and retry",
        ],
    )

    PERSISTENCE_ERROR: ClassVar[ErrorCode] = ErrorCode(
        code="PERSISTENCE_ERROR",
        message="Failed to persist changes",
        http_status=500,
        remediation_steps=[
            "Retry the operation",
            "Contact support if the problem persists",
        ],
    )

    # Error code registry for efficient lookup
    _ERROR_REGISTRY: ClassVar[Dict[str, ErrorCode]] = {}

    @classmethod
    def _build_registry(cls) -> Dict[str, ErrorCode]:
        """Build error code registry from class attributes."""
        if not cls._ERROR_REGISTRY:
            for attr_name in dir(cls):
                if not attr_name.startswith("_"):
                    attr = getattr(cls, attr_name)
                    if isinstance(attr, ErrorCode):
                        cls._ERROR_REGISTRY[attr.code] = attr
        return cls._ERROR_REGISTRY

    @classmethod
    def get_error(cls, code: str) -> Optional[ErrorCode]:
        """
        Get error code by code string.

        Args:
            code: Error code identifier (e.g., "SLUG_CONFLICT")

        Returns:
            ErrorCode if found, None otherwise
        """
        registry = cls._build_registry()
        return registry.get(code)

    @classmethod
    def get_all_errors(cls) -> List[ErrorCode]:
        """Get all error codes in the dictionary."""
        registry = cls._build_registry()
        return list(registry.values())
