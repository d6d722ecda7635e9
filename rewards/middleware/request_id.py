"""
Request ID middleware for correlation tracking.

Every request gets a correlation ID:
- Read from the X-Request-ID header when the client sends one
- Generated as a UUID otherwise
- Stored in request.state and in the logging context variable
- Echoed back in the X-Request-ID response header

Log records emitted while the request is handled carry the ID without
callers passing it explicitly.
"""

import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from rewards.core.logging_config import request_id_var

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add request ID correlation to all requests.

    Example:
        app.add_middleware(RequestIDMiddleware)

    Usage in routes:
        @app.get("/example")
        async def example(request: Request):
            return {"request_id": request.state.request_id}
    """

    async def dispatch(
        self, request: Request, call_next: Callable
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())

        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
