"""
Global Exception Handlers

Implements exception handling with consistent error responses and
proper logging for HTTP, validation and triage engine errors.

Design Considerations:
- Standardized error response format
- Engine error types mapped to fixed status codes
- Live endpoint failures reported without internal detail
"""

import json
import logging
import traceback
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse as StarletteJSONResponse

from api.models.errors import ErrorResponse, ValidationErrorResponse, ValidationErrorItem
from src.email_triage.errors import (
    ConfigurationError,
    DataError,
    NetworkError,
    TriageError,
    UpstreamError,
)

# Configure logging
logger = logging.getLogger(__name__)

# Engine error type -> (HTTP status, error code)
TRIAGE_ERROR_STATUS = {
    ConfigurationError: (status.HTTP_400_BAD_REQUEST, "CONFIGURATION_ERROR"),
    UpstreamError: (status.HTTP_502_BAD_GATEWAY, "UPSTREAM_ERROR"),
    NetworkError: (status.HTTP_503_SERVICE_UNAVAILABLE, "NETWORK_ERROR"),
    DataError: (status.HTTP_500_INTERNAL_SERVER_ERROR, "DATA_ERROR"),
}


class DateTimeEncoder(json.JSONEncoder):
    """Custom JSON encoder that handles datetime objects."""
    def default(self, obj):
        if isinstance(obj, datetime):
            return obj.isoformat()
        return super().default(obj)


class JSONResponse(StarletteJSONResponse):
    """JSONResponse that handles datetime serialization."""
    def render(self, content):
        return json.dumps(content, cls=DateTimeEncoder).encode("utf-8")


def add_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(TriageError, triage_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle HTTP exceptions with standardized format."""
    log_exception(request, exc, exc.status_code)

    error_response = ErrorResponse(
        message=str(exc.detail),
        error_code=f"HTTP_{exc.status_code}",
    )
    return JSONResponse(status_code=exc.status_code, content=error_response.model_dump())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request validation errors with detailed field information.

    Args:
        request: Request that caused exception
        exc: Validation exception

    Returns:
        Detailed validation error response
    """
    log_exception(request, exc, status.HTTP_422_UNPROCESSABLE_ENTITY)

    validation_errors = [
        ValidationErrorItem(
            loc=[str(loc_item) for loc_item in error["loc"]],
            msg=error["msg"],
            type=error["type"]
        )
        for error in exc.errors()
    ]

    error_response = ValidationErrorResponse(
        message="Request validation error",
        error_code="VALIDATION_ERROR",
        validation_errors=validation_errors,
    )
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump()
    )


async def triage_exception_handler(request: Request, exc: TriageError) -> JSONResponse:
    """
    Translate engine errors into error responses.

    Upstream errors carry the live endpoint's status; data errors are
    logged with a traceback since they indicate a broken deployment.

    Args:
        request: Request that caused exception
        exc: Triage engine error

    Returns:
        Error response with the mapped status code
    """
    status_code, error_code = TRIAGE_ERROR_STATUS.get(
        type(exc), (status.HTTP_500_INTERNAL_SERVER_ERROR, "TRIAGE_ERROR")
    )
    log_exception(request, exc, status_code, include_traceback=isinstance(exc, DataError))

    details = None
    if isinstance(exc, UpstreamError):
        details = {"upstream_status": exc.status_code, "upstream_status_text": exc.status_text}

    error_response = ErrorResponse(
        message=str(exc) if not isinstance(exc, DataError) else "Scenario library unavailable",
        error_code=error_code,
        details=details,
    )
    return JSONResponse(status_code=status_code, content=error_response.model_dump())


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all unhandled exceptions with a sanitized error response."""
    log_exception(request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, include_traceback=True)

    error_response = ErrorResponse(
        message="An unexpected error occurred",
        error_code="INTERNAL_SERVER_ERROR",
        details={"type": exc.__class__.__name__},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump()
    )


def log_exception(
    request: Request,
    exc: Exception,
    status_code: int,
    include_traceback: bool = False
) -> None:
    """
    Log exception with request context and appropriate severity.

    Args:
        request: Request that caused exception
        exc: Exception instance
        status_code: HTTP status code
        include_traceback: Whether to include full traceback
    """
    if status_code >= 500:
        log_level = logging.ERROR
    elif status_code >= 400:
        log_level = logging.WARNING
    else:
        log_level = logging.INFO

    error_details = {
        "status_code": status_code,
        "error_type": exc.__class__.__name__,
        "error_message": str(exc),
        "client_host": request.client.host if request.client else "unknown"
    }
    if include_traceback:
        error_details["traceback"] = traceback.format_exc()

    logger.log(
        log_level,
        f"Exception during request to {request.method} {request.url.path}",
        extra={"error_details": error_details}
    )
