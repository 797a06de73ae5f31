# Middleware package init
"""
Catalog API - Middleware Package
================================

What:  Cross-cutting concerns applied to requests before the route handler.
Why:   Each concern is written once instead of inside every handler.

Request pipeline (order matters!):
    Request → [Request ID] → [Logging] → [Body Parser] → [Auth]* → [Validation]* → Handler
                                                                  * mutating routes only
    Any failure along the way → global error handler (main.py)

    Request ID and Logging are Starlette middleware (wrap every request,
    including 404s). Body Parser, Auth and Validation are FastAPI
    dependencies: the body parser is installed app-wide, auth and
    validation per route. FastAPI resolves app-level dependencies before
    route-level ones, and route-level ones before endpoint parameters,
    which is what fixes the order above.
"""
