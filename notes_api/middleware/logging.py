"""
Notes API — Access Log Middleware
===================================

What:  One access log line per HTTP request under `notes_api.access`.
How:   Times the downstream call and logs method, path, status, duration,
       request id and the authenticated user (when the bearer auth stage
       accepted a token). Requests that end in an unhandled exception are
       logged as 500 before the exception continues outwards.

Format:
    GET /api/notes/1 404 3.2ms [a1b2c3d4] user=7
    POST /api/users/login 401 48.0ms [a1b2c3d4] user=-

Request bodies, the Authorization header and the token are never logged.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notes_api.middleware.request_id import request_id_var

logger = logging.getLogger("notes_api.access")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log; `/health` checks are not logged."""

    SKIPPED_PATHS = {"/health"}

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.SKIPPED_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            self._log(request, 500, started)
            raise

        self._log(request, response.status_code, started)
        return response

    @staticmethod
    def _log(request: Request, status: int, started: float) -> None:
        duration_ms = (time.perf_counter() - started) * 1000
        user_id: Optional[int] = getattr(request.state, "user_id", None)
        rid = request_id_var.get("")

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s] user=%s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            rid,
            user_id if user_id is not None else "-",
            extra={
                "request_id": rid,
                "user_id": user_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )
