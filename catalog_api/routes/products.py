"""
Catalog API - Product Route Handlers
====================================

What:  The /api/products resource: list, search, stats, read, create,
       update and delete.
Why:   Entry point for every catalog operation.
How:   Handlers stay thin. They pull what they need from the request,
       call the store or the query engine, and wrap the result in a
       response envelope. They never catch CatalogError themselves; the
       global handlers in main.py render every failure.

Route order matters: /search and /stats are declared before /{product_id}
so they are not captured as ids.

Guards on mutating routes (route-level dependencies, run in order):
    require_api_key → validated_product (POST/PUT only) → handler
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from catalog_api.exceptions import validation_error
from catalog_api.middleware.auth import require_api_key
from catalog_api.middleware.validation import validated_product
from catalog_api.schemas.product import (
    ErrorResponse,
    ProductInput,
    ProductListResponse,
    ProductResponse,
    SearchResponse,
    StatsResponse,
)
from catalog_api.services import query as engine
from catalog_api.services.product_store import ProductStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])

SEARCH_QUERY_REQUIRED = "Search query is required. Use ?q=searchterm"


@router.get(
    "",
    response_model=ProductListResponse,
    summary="List products with filtering, sorting and pagination",
)
async def list_products(
    category: Optional[str] = Query(default=None, description="Case-insensitive substring"),
    in_stock: Optional[str] = Query(default=None, alias="inStock", description="'true' or 'false'"),
    min_price: Optional[str] = Query(default=None, alias="minPrice"),
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    search: Optional[str] = Query(default=None, description="Matches name or description"),
    sort_by: Optional[str] = Query(default=None, alias="sortBy", description="Default: createdAt"),
    sort_order: Optional[str] = Query(default=None, alias="sortOrder", description="'desc' for descending"),
    page: Optional[str] = Query(default=None, description="1-indexed page number (default 1)"),
    limit: Optional[str] = Query(default=None, description="Items per page (default 10)"),
    store: ProductStore = Depends(get_store),
) -> ProductListResponse:
    """
    Page through the catalog.

    Query values arrive as raw strings on purpose: invalid numbers fall back
    to defaults (page, limit) or to "no filter" (prices) instead of a 422.

    Example:
        GET /api/products?category=electronics&inStock=true&sortBy=price&sortOrder=desc&page=1&limit=5
    """
    filters, list_query = engine.parse_list_query(
        category=category,
        in_stock=in_stock,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    items, pagination = engine.list_products(store.list(), filters, list_query)

    return ProductListResponse(
        data=items,
        pagination=pagination,
        filters=filters.echo(),
    )


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={400: {"description": "Missing search term", "model": ErrorResponse}},
    summary="Search products by name or description",
)
async def search_products(
    q: Optional[str] = Query(default=None, description="Search term"),
    store: ProductStore = Depends(get_store),
) -> SearchResponse:
    if not q:
        raise validation_error(SEARCH_QUERY_REQUIRED)

    results = engine.search_products(store.list(), q)
    return SearchResponse(query=q, count=len(results), data=results)


@router.get(
    "/stats",
    response_model=StatsResponse,
    summary="Aggregate catalog statistics",
)
async def product_stats(store: ProductStore = Depends(get_store)) -> StatsResponse:
    return StatsResponse(data=engine.compute_stats(store.list()))


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    response_model_exclude_none=True,
    responses={404: {"description": "Product not found", "model": ErrorResponse}},
    summary="Get a single product by ID",
)
async def get_product(
    product_id: str,
    store: ProductStore = Depends(get_store),
) -> ProductResponse:
    return ProductResponse(data=store.get(product_id))


@router.post(
    "",
    status_code=201,
    response_model=ProductResponse,
    dependencies=[Depends(require_api_key)],
    responses={
        400: {"description": "Invalid product payload", "model": ErrorResponse},
        401: {"description": "Missing or malformed API key", "model": ErrorResponse},
    },
    summary="Create a product (requires API key)",
)
async def create_product(
    fields: ProductInput = Depends(validated_product),
    store: ProductStore = Depends(get_store),
) -> ProductResponse:
    product = store.create(fields)
    return ProductResponse(message="Product created successfully", data=product)


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_api_key)],
    responses={
        400: {"description": "Invalid product payload", "model": ErrorResponse},
        401: {"description": "Missing or malformed API key", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Replace a product's fields (requires API key)",
)
async def update_product(
    product_id: str,
    fields: ProductInput = Depends(validated_product),
    store: ProductStore = Depends(get_store),
) -> ProductResponse:
    product = store.update(product_id, fields)
    return ProductResponse(message="Product updated successfully", data=product)


@router.delete(
    "/{product_id}",
    response_model=ProductResponse,
    dependencies=[Depends(require_api_key)],
    responses={
        401: {"description": "Missing or malformed API key", "model": ErrorResponse},
        404: {"description": "Product not found", "model": ErrorResponse},
    },
    summary="Delete a product (requires API key)",
)
async def delete_product(
    product_id: str,
    store: ProductStore = Depends(get_store),
) -> ProductResponse:
    product = store.delete(product_id)
    return ProductResponse(message="Product deleted successfully", data=product)
