# Routes package init
"""
Catalog API - API Routes Package
================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - root.py:      GET  /                         (API information)
    - products.py:  GET  /api/products             (list with filters + pagination)
                    GET  /api/products/search      (search by name/description)
                    GET  /api/products/stats       (aggregate statistics)
                    GET  /api/products/{id}        (single product)
                    POST /api/products             (create, API key required)
                    PUT  /api/products/{id}        (update, API key required)
                    DELETE /api/products/{id}      (delete, API key required)
    - fallback.py:  *    /{anything else}          (404 envelope)

Design Principle:
    Routes are THIN. They extract data from the request, call a service and
    wrap the result. Errors are raised, never formatted, here.
"""
