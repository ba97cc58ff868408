"""
Recipe Server: Request Logging Middleware
============================================

What:  One access log line per HTTP request, naming the dispatcher rule that
       served it and how it ended.
Why:   A 404 for a typo'd URL and a 404 for a deleted recipe look identical
       to the client. The access log tells them apart.
How:   The /recipes handlers copy the DispatchResult's action, recipe id and
       error code onto request.state; this middleware reads them back after
       the response is produced.
When:  Inside RequestIDMiddleware, so the request id is already set.

Line format:
    GET /recipes/soup 404 0.8ms action=get_recipe id=soup outcome=not_found [a1b2c3d4]

Level by outcome:
    5xx              → ERROR
    route_not_found  → INFO (scanners and typos, not a client bug worth flagging)
    other 4xx        → WARNING
    everything else  → INFO
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from recipe_server.middleware.request_id import request_id_var

logger = logging.getLogger("recipe_server.access")

# Probes hit these every few seconds
QUIET_PATHS = frozenset({"/health"})


def access_level(status: int, outcome: str) -> int:
    if status >= 500:
        return logging.ERROR
    if outcome == "route_not_found":
        return logging.INFO
    if status >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access log line for every request outside QUIET_PATHS."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        action = getattr(request.state, "route_action", None) or "-"
        recipe_id = getattr(request.state, "recipe_id", None) or "-"
        outcome = getattr(request.state, "outcome", None) or "ok"
        rid = getattr(request.state, "request_id", "") or request_id_var.get("")

        logger.log(
            access_level(response.status_code, outcome),
            "%s %s %d %.1fms action=%s id=%s outcome=%s [%s]",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            action,
            recipe_id,
            outcome,
            rid,
            extra={
                "request_id": rid,
                "action": action,
                "recipe_id": recipe_id,
                "outcome": outcome,
                "status": response.status_code,
                "duration_ms": round(elapsed_ms, 2),
            },
        )
        return response
