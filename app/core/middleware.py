"""
Custom middleware for request logging
"""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with its payload size and timing"""

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        client_host = request.client.host if request.client is not None else "unknown"
        content_length = request.headers.get("content-length", "0")
        logger.info(
            "Request: %s %s from %s (%s bytes)",
            request.method,
            request.url.path,
            client_host,
            content_length,
        )

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            "Response: %d for %s in %.3fs",
            response.status_code,
            request.url.path,
            process_time,
        )

        return response
