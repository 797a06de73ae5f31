"""
Catalog API - Application Package Initializer
=============================================

What: Marks the `catalog_api` directory as a Python package.
Why:  Enables module imports like `from catalog_api.config import settings`.
Who:  Used implicitly by Python's import system and explicitly by pytest and uvicorn.

Architecture Note:
    The service follows the same layered split as any FastAPI backend:

    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  <- HTTP concerns only
    ├─────────────────────────────────────┤
    │   Middleware (logging, body, auth,  │  <- Cross-cutting request pipeline
    │   validation)                       │
    ├─────────────────────────────────────┤
    │   Services (store, query engine)    │  <- Business logic, no HTTP
    ├─────────────────────────────────────┤
    │        Schemas (Data contracts)     │  <- Pydantic models
    └─────────────────────────────────────┘

    The product list lives in memory inside ProductStore; there is no
    persistence layer.
"""

__version__ = "2.0.0"
