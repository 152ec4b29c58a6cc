"""
FlowRouter Backend - Request ID Middleware
==========================================

What:  Assigns a correlation ID to each request and echoes it in the
       `X-Request-ID` response header.
How:   Uses the client's `X-Request-ID` when present, otherwise a short
       uuid. The value lives in a ContextVar so loggers and exception
       handlers can read it without access to the request.

Unexpected exceptions are turned into the generic 500 JSON response here,
while the ID is still set. FastAPI's own `Exception` handler runs in
ServerErrorMiddleware, outside this middleware, where the ID is gone.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


def unexpected_error_response(rid: str) -> JSONResponse:
    """Generic 500 body: the stack trace is logged, never returned."""
    return JSONResponse(
        status_code=500,
        content={
            "error": "internal_server_error",
            "message": "An unexpected error occurred. Please try again or contact support.",
            "request_id": rid,
        },
    )


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = unexpected_error_response(rid)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
