"""
Notekeeper Backend — Request ID Middleware
============================================

What:  Tags each request with a correlation id and echoes it back in the
       X-Request-ID response header.
How:   A well-formed inbound X-Request-ID is reused; anything else (missing,
       too long, odd characters) is replaced by 8 fresh hex chars. The id is
       kept in a ContextVar so error bodies and log lines can read it.
       Unhandled exceptions are rendered here as a 500 body carrying the id.
"""

import logging
import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

# Ids end up in log lines, so only accept plain tokens from clients
_VALID_ID = re.compile(r"^[A-Za-z0-9_\-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        inbound = request.headers.get(REQUEST_ID_HEADER, "")
        rid = inbound if _VALID_ID.match(inbound) else new_request_id()

        token = request_id_var.set(rid)
        request.state.request_id = rid
        try:
            response = await call_next(request)
        except Exception as e:
            # Unhandled errors would otherwise reach ServerErrorMiddleware,
            # outside this middleware, where the id is no longer set
            logger.error("[%s] Unexpected error: %s", rid, str(e), exc_info=True)
            response = JSONResponse(
                status_code=500,
                content={
                    "error": "internal_server_error",
                    "message": "An unexpected error occurred. Please try again or contact support.",
                    "request_id": rid,
                },
            )
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
