"""
Access Logging Middleware

Tags every request with an id and logs method, path, status and duration.
"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from app.core.logging import get_logger

logger = get_logger("access")


class AccessLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log API access.

    Reuses an incoming X-Request-ID header when present so ids can be
    followed across services, and returns it on the response.
    """

    def __init__(self, app: ASGIApp, enabled: bool = True):
        """
        Args:
            app: FastAPI application
            enabled: Whether logging is enabled (the request id is always set)
        """
        super().__init__(app)
        self.enabled = enabled

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(f"[{request_id}] {request.method} {request.url.path} -> unhandled error after {duration_ms}ms")
            raise
        duration_ms = int((time.perf_counter() - start_time) * 1000)

        if self.enabled and request.url.path not in ("/", "/health"):
            logger.info(
                f"[{request_id}] {request.method} {request.url.path} -> {response.status_code} "
                f"({duration_ms}ms) client={self._get_client_ip(request)}"
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_client_ip(self, request: Request) -> str:
        """
        Client IP, taking the first hop of X-Forwarded-For when proxied.
        """
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        if request.client:
            return request.client.host

        return "unknown"
