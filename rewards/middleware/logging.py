"""
Logging middleware for request/response tracking.

Logs every HTTP request with method, path, status code, latency and the
correlation ID. Must be registered after RequestIDMiddleware (so it runs
inside it) to see request.state.request_id.
"""

import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from rewards.core.logging_config import get_logger


logger = get_logger(__name__)


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log all HTTP requests and responses.

    Log output (JSON):
        {
            "timestamp": "2026-10-19T10:30:00.123456+00:00",
            "level": "INFO",
            "message": "Request completed",
            "method": "POST",
            "path": "/api/v1/rewards",
            "status_code": 200,
            "latency_ms": 12.5,
            "request_id": "abc-123"
        }
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        method = request.method
        path = request.url.path
        request_id = getattr(request.state, "request_id", None)

        logger.debug(
            "Request started",
            extra={"method": method, "path": path, "request_id": request_id},
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            latency_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"Request failed: {exc}",
                extra={
                    "method": method,
                    "path": path,
                    "latency_ms": round(latency_ms, 2),
                    "request_id": request_id,
                    "exception_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise

        latency_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "method": method,
                "path": path,
                "status_code": response.status_code,
                "latency_ms": round(latency_ms, 2),
                "request_id": request_id,
            },
        )
        return response
