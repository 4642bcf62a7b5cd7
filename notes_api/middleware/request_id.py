"""
Notes API — Request ID Middleware
===================================

What:  Assigns an ID to each incoming request and returns it in the response.
How:   Uses the client's X-Request-ID header when present, otherwise a short
       UUID; stores it in a ContextVar and on request.state, and echoes it
       in the X-Request-ID response header.

This is the outermost application middleware, so it is also where an
unexpected exception becomes the generic 500: Starlette's own server error
handler sits outside it and would answer without the header or the id.
"""

import logging
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

# Coroutine-local: each request sees its own value
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

INTERNAL_ERROR_BODY = {"error": "An unexpected error occurred. Please try again later."}


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware that tags every request and response with a correlation ID."""

    header_name = "X-Request-ID"

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(self.header_name) or str(uuid.uuid4())[:8]

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.error(
                "[%s] Unexpected error on %s %s: %s",
                rid,
                request.method,
                request.url.path,
                str(exc),
                exc_info=True,
            )
            response = JSONResponse(status_code=500, content=INTERNAL_ERROR_BODY)
        finally:
            request_id_var.reset(token)

        response.headers[self.header_name] = rid
        return response
