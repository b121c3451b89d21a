"""
Request logging middleware.

Logs every inbound request (method, path, query string, client IP) and its
completion (status, duration, outcome). Purely observational: the response
and any raised exception pass through untouched.
"""

import logging
import time
from pathlib import Path

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# =============================================================================
#   Logger
# =============================================================================
logger = logging.getLogger(Path(__file__).stem)


def get_client_ip(request: Request) -> str:
    """Best-effort client address: X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip

    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware that logs the start and the completion of every request.

    The start time is kept on ``request.state`` so concurrent requests never
    share it.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.start_time = time.perf_counter()

        method = request.method
        path = request.url.path
        query = request.url.query

        logger.info(
            "Incoming Request: %s %s %s | IP: %s",
            method, path, f"?{query}" if query else "", get_client_ip(request),
        )

        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "Request Completed with Exception: %s %s | Status: %d | Duration: %dms | Exception: %s",
                method, path, 500, _elapsed_ms(request), exc,
            )
            raise

        logger.info(
            "Request Completed: %s %s | Status: %d | Duration: %dms",
            method, path, response.status_code, _elapsed_ms(request),
        )
        return response


def _elapsed_ms(request: Request) -> int:
    return int((time.perf_counter() - request.state.start_time) * 1000)
