# app/core/middleware.py
"""
Core middleware registration for the FastAPI application.

Request tracking, timing and error logging.
"""
from __future__ import annotations

import time
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging import get_logger, request_id as request_id_var
from app.core.utils import IDGenerator

logger = get_logger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds a unique request ID to each incoming request.

    The request ID is:
    - Stored in request.state.request_id and the logging context
    - Added to response headers as X-Request-ID
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        # Reuse an upstream request ID when present
        request_id = request.headers.get(self.header_name) or IDGenerator.generate_uuid()
        request.state.request_id = request_id
        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that measures and logs request processing time.

    Adds X-Process-Time header to responses with the processing duration in seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "Request completed",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": f"{process_time:.4f}s",
            },
        )
        return response


def register_middlewares(app: FastAPI) -> None:
    """
    Register core middlewares on the application.

    The last middleware added is the outermost, so the request ID is
    assigned before timing starts.
    """
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def get_request_id(request: Request) -> Optional[str]:
    """Retrieve the request ID assigned to the current request."""
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "register_middlewares",
    "get_request_id",
]
