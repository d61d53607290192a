"""
Help Center Backend — Request Logging Middleware
==================================================

One access-log line per request:

    POST /api/users 409 12.4ms [1f2e3d4c] from 10.0.0.7

Level follows the status class (5xx ERROR, 4xx WARNING, else INFO). Bodies,
cookies and query strings are never logged: OAuth callbacks carry the
authorization code in the query string and request bodies carry emails.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from helpcenter.middleware.request_id import request_id_var

logger = logging.getLogger("helpcenter.access")

# Probes would drown everything else.
QUIET_PATHS = {"/health"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in QUIET_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        status = response.status_code
        if status >= 500:
            level = logging.ERROR
        elif status >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        client_ip = request.client.host if request.client else "unknown"
        logger.log(
            level,
            "%s %s %d %.1fms [%s] from %s",
            request.method,
            request.url.path,
            status,
            duration_ms,
            request_id_var.get(""),
            client_ip,
        )
        return response
