"""
Catalog API - Pydantic Data Models and Response Schemas
=======================================================

What:  Pydantic models for the product record and every API payload.
Why:   Typed records inside the service, automatic camelCase serialization
       and OpenAPI docs at the edge.
How:   All models share `CamelModel`, which maps snake_case attributes to the
       camelCase JSON field names clients use (in_stock <-> inStock).
       FastAPI serializes response models by alias, so routes return models
       and never build dicts by hand.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ══════════════════════════════════════════════════════════════════════════
# Domain Records
# ══════════════════════════════════════════════════════════════════════════


class ProductInput(CamelModel):
    """
    The mutable fields of a product, as accepted from a client.

    Only built by the validation layer after every rule has passed, so the
    store can trust its types. Trimming and lowercasing happen in the store.
    """

    name: str
    description: str
    price: Union[int, float]
    category: str
    in_stock: bool


class Product(CamelModel):
    """A catalog record owned by ProductStore."""

    id: str = Field(description="Opaque unique identifier")
    name: str
    description: str
    price: Union[int, float] = Field(ge=0)
    category: str
    in_stock: bool
    created_at: datetime = Field(description="Set once at creation (UTC)")
    updated_at: datetime = Field(description="Set at creation and on every update (UTC)")


class Principal(CamelModel):
    """Identity attached to a request after the API key check."""

    id: str
    api_key: str


# ══════════════════════════════════════════════════════════════════════════
# Query Models
# ══════════════════════════════════════════════════════════════════════════


class ProductFilters(CamelModel):
    """
    Per-request filters. None means "not specified" and imposes no constraint.
    Echoed back in list responses with the None entries dropped.
    """

    category: Optional[str] = None
    in_stock: Optional[bool] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    search: Optional[str] = None

    def echo(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class ListQuery(CamelModel):
    """Sort and page parameters for GET /api/products."""

    sort_by: str = "createdAt"
    sort_order: Optional[str] = None
    page: int = 1
    limit: int = 10


class Pagination(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next_page: bool
    has_prev_page: bool


class PriceStats(CamelModel):
    # None on an empty catalog
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    average: Optional[float] = None


class ProductStats(CamelModel):
    total: int
    in_stock: int
    out_of_stock: int
    categories: Dict[str, int]
    price_stats: PriceStats


# ══════════════════════════════════════════════════════════════════════════
# Response Envelopes
# ══════════════════════════════════════════════════════════════════════════


class ProductResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: Product


class ProductListResponse(CamelModel):
    success: bool = True
    data: List[Product]
    pagination: Pagination
    filters: Dict[str, Any]


class SearchResponse(CamelModel):
    success: bool = True
    query: str
    count: int
    data: List[Product]


class StatsResponse(CamelModel):
    success: bool = True
    data: ProductStats


class ApiInfoResponse(CamelModel):
    success: bool = True
    message: str
    version: str
    endpoints: Dict[str, str]
    authentication: str
    query_parameters: Dict[str, str]


class ErrorResponse(CamelModel):
    """
    Error envelope shared by every failure.

    Example:
        {
            "success": false,
            "status": "fail",
            "message": "Product validation failed",
            "errors": ["Name is required and must be at least 2 characters long"]
        }
    """

    success: bool = False
    status: str = Field(description="'fail' for 4xx, 'error' otherwise")
    message: str
    errors: Optional[List[str]] = Field(default=None, description="Violations, when any")
    stack: Optional[str] = Field(default=None, description="Development mode only")
