"""
Error types for the sales query path

Validation failures are correctable by the client and map to 4xx responses;
infrastructure failures are not and map to 5xx responses.
"""

from typing import Optional


class SalesApiError(Exception):
    """Base class for errors raised by the sales query path."""

    status_code = 500

    def __init__(self, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail if detail is not None else message


class FilterValidationError(SalesApiError):
    """Malformed filter combination detected before any query runs."""

    status_code = 400


class InfrastructureError(SalesApiError):
    """Database connection or query failure."""

    status_code = 500
