"""
Catalog API - Error Taxonomy
============================

What:  Defines the closed set of error kinds the API can produce.
Why:   Every failure, whatever its origin, must leave the service in the same
       JSON envelope with a status code chosen in exactly one place.
How:   A single exception class carries a kind tag, a message and an optional
       list of violations. `status_for()` is the only kind -> HTTP status
       mapping. `to_catalog_error()` folds framework and unexpected exceptions
       into the same type so the global handler has one shape to render.
Who:   Raised by middleware, services and routes; rendered by the handlers
       registered in main.py.

Error Kinds:
    ErrorKind.VALIDATION      → 400 Bad Request (client can fix)
    ErrorKind.AUTHENTICATION  → 401 Unauthorized
    ErrorKind.NOT_FOUND       → 404 Not Found (unknown id or unmatched route)
    ErrorKind.INTERNAL        → 500 Internal Server Error

Design Decision:
    One class tagged with an enum instead of a subclass per error. Handlers
    switch on `kind`, not on isinstance(); adding a kind means adding one enum
    member and one row in `_STATUS_BY_KIND`.
"""

import enum
from typing import List, Optional

from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException


class ErrorKind(str, enum.Enum):
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    NOT_FOUND = "not_found"
    INTERNAL = "internal"


_STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}

INTERNAL_ERROR_MESSAGE = "Internal server error"


def status_for(kind: ErrorKind) -> int:
    """Return the HTTP status code for an error kind."""
    return _STATUS_BY_KIND[kind]


class CatalogError(Exception):
    """
    The one application error type.

    Attributes:
        kind:     Which variant of the taxonomy this is
        message:  User-facing description, returned in the response body
        errors:   Ordered violation messages (validation failures only)
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        errors: Optional[List[str]] = None,
    ):
        self.kind = kind
        self.message = message
        self.errors = list(errors or [])
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return status_for(self.kind)

    @property
    def status(self) -> str:
        """'fail' for client errors (4xx), 'error' for everything else."""
        return "fail" if 400 <= self.status_code < 500 else "error"

    def __repr__(self) -> str:
        return f"CatalogError(kind={self.kind.value!r}, message={self.message!r})"


# ── Constructors ─────────────────────────────────────────────────────────


def validation_error(
    message: str = "Validation failed", errors: Optional[List[str]] = None
) -> CatalogError:
    return CatalogError(ErrorKind.VALIDATION, message, errors)


def authentication_error(message: str = "Authentication failed") -> CatalogError:
    return CatalogError(ErrorKind.AUTHENTICATION, message)


def not_found_error(message: str = "Resource not found") -> CatalogError:
    return CatalogError(ErrorKind.NOT_FOUND, message)


def internal_error(message: str = INTERNAL_ERROR_MESSAGE) -> CatalogError:
    return CatalogError(ErrorKind.INTERNAL, message)


# ── Translation ──────────────────────────────────────────────────────────


def to_catalog_error(exc: BaseException) -> CatalogError:
    """
    Fold any exception into the taxonomy.

    What:    CatalogError passes through unchanged; framework exceptions are
             mapped by status; everything else becomes INTERNAL with a
             generic message (the original text is logged, never returned).
    Who:     The global exception handlers in main.py.
    """
    if isinstance(exc, CatalogError):
        return exc

    if isinstance(exc, RequestValidationError):
        errors = [
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg', '')}"
            for err in exc.errors()
        ]
        return validation_error("Request validation failed", errors)

    if isinstance(exc, StarletteHTTPException):
        if exc.status_code == 404:
            return not_found_error(str(exc.detail))
        if exc.status_code == 401:
            return authentication_error(str(exc.detail))
        if 400 <= exc.status_code < 500:
            return validation_error(str(exc.detail))
        return internal_error()

    return internal_error()
