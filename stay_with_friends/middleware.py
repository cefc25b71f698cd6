"""
FastAPI middleware for request tracing and correlation.

Each request gets a unique id that is bound into structlog's context, so every
log line emitted while serving the request carries it.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add unique request IDs to each HTTP request.

    This middleware generates a UUID for each incoming request and:
    1. Stores it in request.state.request_id for access in route handlers
    2. Binds it to structlog contextvars for log correlation
    3. Adds it to the response as X-Request-ID header
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        response.headers["X-Request-ID"] = request_id
        return response
