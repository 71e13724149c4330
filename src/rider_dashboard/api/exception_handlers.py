"""
Exception handlers for the FastAPI application.

This module registers exception handlers that convert application
exceptions to appropriate HTTP responses with consistent formatting.
"""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..exceptions import ErrorCode, RiderDashboardError, UpstreamServiceError

logger = logging.getLogger(__name__)


def create_error_response(
    status_code: int,
    code: str,
    message: str,
    details: Dict[str, Any] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: Dict[str, Any] = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        content["error"]["details"] = details
    return JSONResponse(status_code=status_code, content=content)


async def rider_dashboard_error_handler(
    request: Request,
    exc: RiderDashboardError,
) -> JSONResponse:
    """Handle all RiderDashboardError exceptions."""
    if isinstance(exc, UpstreamServiceError):
        logger.warning(f"{request.url.path}: {exc.message} (upstream status {exc.upstream_status})")
    elif exc.status_code >= 500:
        logger.error(f"{request.url.path}: {exc!r}")

    return create_error_response(
        status_code=exc.status_code,
        code=exc.code.value,
        message=exc.message,
        details=exc.details if exc.details else None,
    )


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Handle request body/query validation errors."""
    errors = []
    for error in exc.errors():
        loc = ".".join(str(x) for x in error["loc"])
        errors.append({
            "field": loc,
            "message": error["msg"],
            "type": error["type"],
        })

    return create_error_response(
        status_code=422,
        code=ErrorCode.VALIDATION_ERROR.value,
        message="Request validation failed",
        details={"errors": errors},
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception on {request.url.path}: {exc}")

    return create_error_response(
        status_code=500,
        code=ErrorCode.INTERNAL_ERROR.value,
        message="An unexpected error occurred",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(RiderDashboardError, rider_dashboard_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)

    # Catch-all; must be registered last
    app.add_exception_handler(Exception, generic_exception_handler)
