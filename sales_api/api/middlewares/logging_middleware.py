"""
Request logging middleware for the API

Provides request/response logging for monitoring and debugging.
"""

import time
import uuid
import logging
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

# Configure logging
logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging requests and responses
    """

    async def dispatch(self, request: Request, call_next):
        """
        Log request and response information

        Args:
            request: Incoming request
            call_next: Next middleware in the chain

        Returns:
            Response from downstream middleware
        """
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        client_host = request.client.host if request.client else "unknown"
        start_time = time.time()

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path} from {client_host}"
        )

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                f"Request {request_id} failed: {str(e)} in {process_time:.3f}s"
            )
            raise

        process_time = time.time() - start_time
        logger.info(
            f"Request {request_id} completed: {response.status_code} in {process_time:.3f}s"
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        return response
