"""
Request logging middleware.

Every request gets a correlation id (taken from X-Correlation-ID when the
caller sends one) that is echoed back on the response.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, status and duration of each request.

    Responses slower than ``slow_request_ms`` are logged at WARNING.
    """

    EXCLUDE_PATHS: tuple[str, ...] = (
        "/health",
        "/favicon.ico",
    )

    def __init__(self, app: ASGIApp, slow_request_ms: float = 2000.0) -> None:
        super().__init__(app)
        self._slow_request_ms = slow_request_ms

    def _should_log(self, path: str) -> bool:
        return not any(path.startswith(exclude) for exclude in self.EXCLUDE_PATHS)

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or uuid.uuid4().hex[:8]
        request.state.correlation_id = correlation_id

        if not self._should_log(request.url.path):
            response = await call_next(request)
            response.headers[CORRELATION_HEADER] = correlation_id
            return response

        start_time = time.perf_counter()
        logger.info(f"[{correlation_id}] --> {request.method} {request.url.path} from {self._get_client_ip(request)}")

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error(f"[{correlation_id}] <-- {request.method} {request.url.path} ERROR in {duration_ms:.2f}ms: {e}")
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        if response.status_code >= 400 or duration_ms > self._slow_request_ms:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO
        logger.log(
            log_level,
            f"[{correlation_id}] <-- {request.method} {request.url.path} {response.status_code} in {duration_ms:.2f}ms",
        )

        response.headers[CORRELATION_HEADER] = correlation_id
        response.headers["X-Response-Time-Ms"] = f"{duration_ms:.2f}"
        return response

    def _get_client_ip(self, request: Request) -> str:
        # First hop of X-Forwarded-For is the original client
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
        return request.client.host if request.client else "unknown"
