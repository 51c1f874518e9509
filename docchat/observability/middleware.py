"""
Request observability middleware.

CorrelationMiddleware binds an X-Correlation-ID for the lifetime of a
request and echoes it on the response. RequestLoggingMiddleware writes one
line when a request arrives and one when it completes or fails.

Dependencies: starlette, docchat.observability.correlation
System role: Per-request tracing and access logging
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from docchat.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Access log with timing for every request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        logger.info(
            f"{__name__}:dispatch - {route}",
            extra={"client_host": request.client.host if request.client else None},
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{__name__}:dispatch - {route} raised {type(e).__name__}",
                extra={"duration_ms": _elapsed_ms(started)},
            )
            raise

        logger.info(
            f"{__name__}:dispatch - {route} -> {response.status_code}",
            extra={"status_code": response.status_code, "duration_ms": _elapsed_ms(started)},
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Reuse the caller's correlation ID or mint one, and return it as a header."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
