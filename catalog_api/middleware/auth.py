"""
Catalog API - Authentication Gate
=================================

What:  Format check on the API key sent with mutating requests.
Why:   Demonstrates where an auth guard sits in the pipeline; there is no
       identity store behind it.
How:   The key comes from `x-api-key`, falling back to `authorization`.
       It must be present and start with "api-key-". On success a fixed
       principal is attached to `request.state.user`.
"""

import logging
from typing import Optional

from fastapi import Request

from catalog_api.exceptions import authentication_error
from catalog_api.schemas.product import Principal

logger = logging.getLogger(__name__)

API_KEY_HEADER = "x-api-key"
FALLBACK_HEADER = "authorization"
API_KEY_PREFIX = "api-key-"
DEMO_USER_ID = "user-123"


def authenticate(credential: Optional[str]) -> Principal:
    """
    Check a credential's format and return the principal it stands for.

    Raises:
        CatalogError(AUTHENTICATION): credential missing or wrongly prefixed
    """
    if not credential:
        raise authentication_error(
            "API key is required. Please provide x-api-key header."
        )

    if not credential.startswith(API_KEY_PREFIX):
        raise authentication_error(
            f'Invalid API key format. Must start with "{API_KEY_PREFIX}"'
        )

    return Principal(id=DEMO_USER_ID, api_key=credential)


async def require_api_key(request: Request) -> Principal:
    """Dependency for mutating routes."""
    credential = request.headers.get(API_KEY_HEADER) or request.headers.get(FALLBACK_HEADER)
    principal = authenticate(credential)
    request.state.user = principal
    logger.debug("Authenticated %s %s as %s", request.method, request.url.path, principal.id)
    return principal
