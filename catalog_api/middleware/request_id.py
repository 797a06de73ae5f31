"""
Catalog API - Request ID Middleware
===================================

What:  Assigns an ID to each incoming request and echoes it in the response.
Why:   Lets the access log, the error log and the client refer to the same
       request.
How:   Uses the client's X-Request-ID when it looks like an ID (1-64 of
       letters, digits, '.', '_' or '-'), otherwise a short UUID. Stored in a
       ContextVar for loggers and on request.state for handlers.

Error responses:
    Unexpected exceptions are rendered by Starlette's ServerErrorMiddleware,
    which sits outside this middleware, so the header is never added here.
    render_error() calls attach_request_id() itself to cover that path.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


def resolve_request_id(request: Request) -> str:
    """The client's ID if it is well formed, else a fresh 8-character one."""
    supplied = request.headers.get(REQUEST_ID_HEADER, "")
    if _CLIENT_ID.match(supplied):
        return supplied
    return uuid.uuid4().hex[:8]


def current_request_id(request: Request) -> str:
    """The ID assigned to `request`, or "" if none was assigned yet."""
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def attach_request_id(response: Response, rid: str) -> Response:
    if rid:
        response.headers[REQUEST_ID_HEADER] = rid
    return response


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request)
        request_id_var.set(rid)
        request.state.request_id = rid

        return attach_request_id(await call_next(request), rid)
