# Services package init
"""
Catalog API - Services Layer
============================

What:  Business logic sitting between routes (HTTP) and the product data.
Why:   Routes handle HTTP; services hold the rules and can be tested without it.

Service Inventory:
    - ProductStore (product_store.py): owner of the in-memory product list
    - Query engine (query.py): filter -> sort -> paginate, search and stats
"""
