"""
Error handling middleware for the API

Converts every per-request failure into the uniform envelope
{success: false, message, error, error_id}.
"""

from fastapi import Request, status, FastAPI
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from typing import Optional
import logging
import uuid

from sales_api.core.errors import SalesApiError

# Configure logging
logger = logging.getLogger(__name__)


def error_envelope(status_code: int, message: str, error: Optional[str], error_id: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "success": False,
            "message": message,
            "error": error,
            "error_id": error_id,
        },
        headers=headers
    )


async def sales_api_exception_handler(request: Request, exc: SalesApiError):
    """
    Handle validation and infrastructure errors raised by the query path
    """
    error_id = str(uuid.uuid4())

    if exc.status_code >= 500:
        logger.error(f"Server error {error_id}: {exc.message} ({exc.detail}) - URL: {request.url}")
    else:
        logger.warning(f"Client error {error_id}: {exc.message} - URL: {request.url}")

    return error_envelope(exc.status_code, exc.message, exc.detail, error_id)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handle request validation errors in a user-friendly way
    """
    error_id = str(uuid.uuid4())
    errors = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )

    logger.warning(f"Validation error {error_id}: {errors} - URL: {request.url}")

    return error_envelope(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "Request validation failed",
        errors,
        error_id
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """
    Handle HTTP exceptions with consistent response format
    """
    error_id = str(uuid.uuid4())

    if exc.status_code >= 500:
        logger.error(f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}")
    else:
        logger.warning(f"HTTP error {error_id}: {exc.status_code} {exc.detail} - URL: {request.url}")

    return error_envelope(
        exc.status_code,
        str(exc.detail),
        str(exc.detail),
        error_id,
        headers=getattr(exc, "headers", None)
    )


async def general_exception_handler(request: Request, exc: Exception):
    """
    Catch-all exception handler for unhandled exceptions
    """
    error_id = str(uuid.uuid4())

    logger.exception(f"Unhandled exception {error_id}: {str(exc)} - URL: {request.url}")

    return error_envelope(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Internal server error",
        str(exc),
        error_id
    )


def add_exception_handlers(app: FastAPI):
    """
    Add all exception handlers to the FastAPI app

    Args:
        app: FastAPI application
    """
    app.add_exception_handler(SalesApiError, sales_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
