"""
Catalog API - JSON Body Parser
==============================

What:  Reads and decodes the request body once, before any guard or handler.
Why:   Auth and validation run before the handler and need the parsed body;
       malformed JSON must fail with the same envelope as everything else.
How:   Installed as an app-wide FastAPI dependency. Stores the result on
       `request.state.body`.

Rules:
    - Only JSON content types (application/json, application/*+json) are
      decoded; any other body, or an empty one, parses as {}.
    - Bodies above settings.max_body_size bytes are rejected.
    - Invalid JSON is rejected, including the NaN and Infinity literals
      Python's json module would otherwise accept.
"""

import json
from typing import Any

from fastapi import Request

from catalog_api.config import settings
from catalog_api.exceptions import validation_error

INVALID_JSON = "Invalid JSON payload"


def _is_json(content_type: str) -> bool:
    media_type = content_type.split(";", 1)[0].strip().lower()
    return media_type == "application/json" or (
        media_type.startswith("application/") and media_type.endswith("+json")
    )


def _reject_constant(name: str) -> Any:
    # Non-finite literals are not JSON
    raise validation_error(INVALID_JSON)


async def parse_json_body(request: Request) -> Any:
    """Dependency: decode the JSON body into `request.state.body`."""
    limit = settings.max_body_size

    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise validation_error(f"Request body exceeds the {limit} byte limit")

    raw = await request.body()
    if len(raw) > limit:
        raise validation_error(f"Request body exceeds the {limit} byte limit")

    body: Any = {}
    if raw.strip() and _is_json(request.headers.get("content-type", "")):
        try:
            body = json.loads(raw, parse_constant=_reject_constant)
        except (UnicodeDecodeError, json.JSONDecodeError):
            raise validation_error(INVALID_JSON)

    request.state.body = body
    return body
