"""
Catalog API - Request Logging Middleware
========================================

What:  Logs every HTTP request on arrival and again on completion.
Why:   The one piece of observability the service has: who called what,
       what came back and how long it took.
How:   Arrival line carries method, URL (with query string) and user agent.
       Completion line adds status and duration in milliseconds.
Who:   Applied to every request via Starlette middleware.
When:  Inside RequestIDMiddleware, so both lines carry the request ID.

Example output:
    2025-01-15T10:00:00 [INFO] catalog_api.access: GET /api/products?page=2 - User-Agent: curl/8.4.0 [a1b2c3d4]
    2025-01-15T10:00:00 [INFO] catalog_api.access: GET /api/products?page=2 - 200 - 1.4ms [a1b2c3d4]

What we log vs what we DON'T log:
    Log: method, URL, status, duration, user agent, request ID
    Don't log: request bodies, API key headers
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from catalog_api.middleware.request_id import request_id_var

logger = logging.getLogger("catalog_api.access")


def original_url(request: Request) -> str:
    """Path plus query string, as the client sent it."""
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs request arrival and completion.

    Log level follows the response status:
        5xx → ERROR, 4xx → WARNING, 2xx/3xx → INFO
    An exception escaping the app is logged at ERROR and re-raised so the
    server error handler still produces the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        method = request.method
        url = original_url(request)
        user_agent = request.headers.get("user-agent", "Unknown")
        rid = request_id_var.get("")

        logger.info(
            "%s %s - User-Agent: %s [%s]",
            method,
            url,
            user_agent,
            rid,
            extra={"request_id": rid, "method": method, "path": url, "user_agent": user_agent},
        )

        try:
            response = await call_next(request)
        except Exception:
            duration_ms = (time.perf_counter() - start_time) * 1000
            logger.error("%s %s - 500 - %.1fms [%s]", method, url, duration_ms, rid)
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s - %d - %.1fms [%s]",
            method,
            url,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": method,
                "path": url,
                "status": status,
                "duration_ms": round(duration_ms, 2),
            },
        )

        return response
