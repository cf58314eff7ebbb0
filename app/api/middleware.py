"""
Request timing and logging middleware
"""
import logging
import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log request timing and status for performance monitoring
    """
    async def dispatch(self, request: Request, call_next):
        start_time = time.time()

        # Process request
        response = await call_next(request)

        # Calculate duration
        duration_ms = (time.time() - start_time) * 1000

        logger.info(
            "%s %s | duration=%.2fms | status=%s",
            request.method, request.url.path, duration_ms, response.status_code,
        )
        response.headers["X-Process-Time-Ms"] = f"{duration_ms:.2f}"
        return response
