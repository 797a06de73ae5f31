"""
Catalog API - Catch-all Route
=============================

What:  Matches any path and method no other route claimed.
Why:   Unknown routes must fail through the global handler like every other
       error, with the requested URL in the message.
How:   Registered last; Starlette picks the first full match, so real routes
       always win.

Methods outside ALL_METHODS (TRACE, CONNECT, custom verbs) never reach this
route. Starlette answers them with a 405, which the HTTP exception handler in
main.py turns into the same error via route_not_found().
"""

from fastapi import APIRouter, Request

from catalog_api.exceptions import CatalogError, not_found_error
from catalog_api.middleware.logging import original_url

router = APIRouter(include_in_schema=False)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def route_not_found(request: Request) -> CatalogError:
    return not_found_error(f"Route {original_url(request)} not found")


@router.api_route("/{path:path}", methods=ALL_METHODS)
async def route_not_found_handler(request: Request, path: str) -> None:
    raise route_not_found(request)
