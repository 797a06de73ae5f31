"""
Catalog API - Root Route
========================

What:  GET / describes the API: endpoints, authentication and query options.
Who:   Humans poking at the server with a browser or curl.
"""

from fastapi import APIRouter

from catalog_api import __version__
from catalog_api.middleware.auth import API_KEY_PREFIX
from catalog_api.schemas.product import ApiInfoResponse

router = APIRouter(tags=["Info"])

ENDPOINTS = {
    "GET /": "API information",
    "GET /api/products": "List products with filtering and pagination",
    "GET /api/products/search": "Search products by name",
    "GET /api/products/stats": "Get product statistics",
    "GET /api/products/:id": "Get specific product",
    "POST /api/products": "Create product (requires API key)",
    "PUT /api/products/:id": "Update product (requires API key)",
    "DELETE /api/products/:id": "Delete product (requires API key)",
}


@router.get("/", response_model=ApiInfoResponse, summary="API information")
async def api_info() -> ApiInfoResponse:
    return ApiInfoResponse(
        message="Welcome to the Advanced Product API!",
        version=__version__,
        endpoints=ENDPOINTS,
        authentication=f'Include x-api-key header with value starting with "{API_KEY_PREFIX}"',
        query_parameters={
            "filtering": "category, inStock, minPrice, maxPrice, search",
            "sorting": "sortBy, sortOrder (asc|desc)",
            "pagination": "page, limit",
            "search": "q (query string)",
        },
    )
