"""
Notekeeper Backend — Request Logging Middleware
=================================================

What:  One access line per request on the "notekeeper.access" logger.

    GET /api/notes 200 3.2ms rid=1f3a9c2e auth=- client=127.0.0.1
    POST /api/notes 401 1.1ms rid=77b0d4aa auth=bearer client=10.0.0.7

`auth` only says whether an Authorization header was sent. Request bodies
and header values are never logged: they carry passwords and bearer tokens.
Level follows the status class (5xx ERROR, 4xx WARNING, else INFO).
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def level_for_status(status: int) -> int:
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
        if path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        auth = "bearer" if request.headers.get("authorization") else "-"
        client = request.client.host if request.client else "unknown"
        rid = request_id_var.get("")

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.1fms rid=%s auth=%s client=%s",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
            rid,
            auth,
            client,
        )
        return response
