"""Response formatting utilities"""
from typing import Any, Optional


def format_error_response(message: str, error_code: Optional[str] = None, **kwargs) -> dict:
    """
    Format a standardized failure envelope

    Args:
        message: Error message
        error_code: Optional error code
        **kwargs: Additional fields to include in response (e.g. threats, limit)

    Returns:
        Dict with success False and error details

    Example:
        return format_error_response(
            "Slug 'about-us' is already used by /about",
            error_code="SLUG_CONFLICT",
            slug="about-us"
        )
    """
    response = {"success": False, "error": message}
    if error_code:
        response["error_code"] = error_code
    response.update(kwargs)
    return response


def format_success_response(data: Any = None, message: Optional[str] = None, **kwargs) -> dict:
    """
    Format a standardized success envelope

    Args:
        data: Optional data payload
        message: Optional success message
        **kwargs: Operation-specific metadata (e.g. redirect_created, warnings)

    Returns:
        Dict with success True and the payload

    Example:
        return format_success_response(
            data=result["page"],
            message="SEO page updated successfully",
            redirect_created=True
        )
    """
    response = {"success": True}
    if data is not None:
        response["data"] = data
    if message:
        response["message"] = message
    response.update(kwargs)
    return response
