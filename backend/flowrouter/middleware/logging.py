"""
FlowRouter Backend - Request Logging Middleware
===============================================

What:  One access log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs method,
       path, status, duration, request ID and client IP on the
       `flowrouter.access` logger. The level follows the status class:
       5xx → ERROR, 4xx → WARNING, everything else → INFO.

A request whose handler raised is logged as 500 before the exception
continues to RequestIDMiddleware. Request bodies and headers are never
logged. /health is skipped (probes hit it every few seconds).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from flowrouter.middleware.request_id import request_id_var

logger = logging.getLogger("flowrouter.access")

SKIPPED_PATHS = {"/health"}


def _log_level(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
        finally:
            self._log_access(request, path, status, start_time)

        return response

    @staticmethod
    def _log_access(request: Request, path: str, status: int, start_time: float) -> None:
        duration_ms = (time.perf_counter() - start_time) * 1000
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        logger.log(
            _log_level(status),
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )
