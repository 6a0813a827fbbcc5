"""Exception handlers for FastAPI application"""
import logging

from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError

from seopanel.error_codes import ErrorCodeDictionary
from seopanel.exceptions import SEOError
from seopanel.utils.responses import format_error_response

logger = logging.getLogger(__name__)


async def seo_error_handler(request: Request, exc: SEOError) -> JSONResponse:
    """Render any SEO core error with its code's HTTP status"""
    if exc.http_status >= 500:
        logger.error(f"{exc.code} on {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content=jsonable_encoder(
            format_error_response(
                exc.message,
                error_code=exc.code,
                remediation_steps=exc.error_code.remediation_steps,
                **exc.context,
            )
        ),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle Pydantic validation errors"""
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=jsonable_encoder(
            format_error_response(
                "Validation failed",
                error_code=ErrorCodeDictionary.VALIDATION_FAILED.code,
                details=exc.errors(),
                path=str(request.url.path),
            )
        ),
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Handle database integrity errors that escaped the service layer"""
    error_message = str(exc.orig) if hasattr(exc, "orig") else str(exc)
    logger.warning(f"Integrity error on {request.url.path}: {error_message}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=format_error_response(
            "A record with this value already exists",
            error_code="UNIQUE_CONSTRAINT_VIOLATION",
            path=str(request.url.path),
        ),
    )
