"""
Catalog API - Product Store
===========================

What:  Owns the in-memory product list and every mutation of it.
Why:   A single owner keeps the invariants in one place: unique ids,
       createdAt never changing, updatedAt >= createdAt.
How:   Records are Product models in a list guarded by an RLock. Reads hand
       out copies, so no caller can change a stored record by accident.
Who:   Route handlers (through the `get_store` dependency) and tests.
When:  One instance per application, created with seed data by create_app().

Concurrency:
    Async handlers share one event loop, but FastAPI runs sync callables in
    a thread pool, so mutations and snapshots take the lock. No operation
    suspends while holding it.
"""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from starlette.requests import Request

from catalog_api.exceptions import not_found_error
from catalog_api.schemas.product import Product, ProductInput

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _seed(
    id: str,
    name: str,
    description: str,
    price: int,
    category: str,
    in_stock: bool,
    created: str,
) -> Product:
    timestamp = datetime.fromisoformat(created.replace("Z", "+00:00"))
    return Product(
        id=id,
        name=name,
        description=description,
        price=price,
        category=category,
        in_stock=in_stock,
        created_at=timestamp,
        updated_at=timestamp,
    )


def seed_products() -> List[Product]:
    """The catalog a fresh server starts with."""
    return [
        _seed("1", "Laptop", "High-performance laptop with 16GB RAM",
              12000, "electronics", True, "2025-01-15T10:00:00Z"),
        _seed("2", "Smartphone", "Latest model with 128GB storage",
              80000, "electronics", True, "2025-01-16T11:00:00Z"),
        _seed("3", "Coffee Maker", "Programmable coffee maker with timer",
              5000, "kitchen", False, "2025-01-17T09:00:00Z"),
        _seed("4", "Wireless Mouse", "Ergonomic wireless mouse with long battery life",
              2500, "electronics", True, "2025-01-18T14:00:00Z"),
        _seed("5", "Blender", "High-speed blender for smoothies and shakes",
              7500, "kitchen", True, "2025-01-19T12:00:00Z"),
    ]


class ProductStore:
    """
    In-memory product repository.

    Operations:
        list()            -> snapshot of all products (copies)
        get(id)           -> one product, or NOT_FOUND
        create(fields)    -> new product with fresh id and timestamps
        update(id, fields)-> replaced mutable fields, new updatedAt
        delete(id)        -> removed product

    Normalization on write:
        name, description: trimmed
        category:          trimmed and lowercased
    """

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._lock = threading.RLock()
        self._products: List[Product] = [p.model_copy() for p in (products or [])]

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    # ── Reads ─────────────────────────────────────────────────────────────

    def list(self) -> List[Product]:
        with self._lock:
            return [p.model_copy() for p in self._products]

    def get(self, product_id: str) -> Product:
        with self._lock:
            return self._products[self._index_of(product_id)].model_copy()

    # ── Mutations ─────────────────────────────────────────────────────────

    def create(self, fields: ProductInput) -> Product:
        now = _utcnow()
        with self._lock:
            product = Product(
                id=self._new_id(),
                created_at=now,
                updated_at=now,
                **self._normalize(fields),
            )
            self._products.append(product)

        logger.info("Product created: %s (%s)", product.id, product.name)
        return product.model_copy()

    def update(self, product_id: str, fields: ProductInput) -> Product:
        with self._lock:
            index = self._index_of(product_id)
            current = self._products[index]
            # The clock may be coarse; never let updatedAt move backwards
            now = max(_utcnow(), current.updated_at)
            updated = current.model_copy(
                update={**self._normalize(fields), "updated_at": now}
            )
            self._products[index] = updated

        logger.info("Product updated: %s", product_id)
        return updated.model_copy()

    def delete(self, product_id: str) -> Product:
        with self._lock:
            removed = self._products.pop(self._index_of(product_id))

        logger.info("Product deleted: %s", product_id)
        return removed

    # ── Internals ─────────────────────────────────────────────────────────

    def _index_of(self, product_id: str) -> int:
        for index, product in enumerate(self._products):
            if product.id == product_id:
                return index
        raise not_found_error(PRODUCT_NOT_FOUND)

    def _new_id(self) -> str:
        existing = {p.id for p in self._products}
        while True:
            candidate = str(uuid.uuid4())
            if candidate not in existing:
                return candidate

    @staticmethod
    def _normalize(fields: ProductInput) -> dict:
        return {
            "name": fields.name.strip(),
            "description": fields.description.strip(),
            "price": fields.price,
            "category": fields.category.strip().lower(),
            "in_stock": fields.in_stock,
        }


# ── Store Dependency ──────────────────────────────────────────────────────
def get_store(request: Request) -> ProductStore:
    """
    FastAPI dependency that provides the application's ProductStore.

    The store lives on app.state (set by create_app), so every app instance,
    including each one a test builds, starts from its own seeded catalog.
    """
    return request.app.state.store
