"""
Recipe Server: Request ID Middleware
=======================================

What:  Assigns a short unique id to each incoming request and returns it in
       the X-Request-ID response header.
Why:   Every log line and every error payload for one request carries the
       same id, so an operator can go from a client's error straight to the
       server log.
How:   A client-supplied X-Request-ID is kept when it is short printable
       ASCII (it ends up in log lines and JSON bodies); otherwise a fresh
       8-char UUID prefix is used. Stored in a ContextVar (for loggers) and
       on request.state (for the handlers and the dispatcher).
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"

# Printable ASCII without spaces, at most 64 chars
CLIENT_ID_PATTERN = re.compile(r"^[!-~]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(client_value: str) -> str:
    """Keep an acceptable client id, else mint a new one."""
    if client_value and CLIENT_ID_PATTERN.match(client_value):
        return client_value
    return uuid.uuid4().hex[:8]


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tags each request with an id and echoes it on the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(HEADER, ""))
        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[HEADER] = rid
        return response
