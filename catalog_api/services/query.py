"""
Catalog API - Filter / Sort / Paginate Engine
=============================================

What:  Pure functions that turn the product list into one page of results.
Why:   Keeping them free of HTTP and store state makes the list semantics
       testable in isolation.
How:   Applied in a fixed order: filter -> sort -> paginate.

Query-string parsing also lives here: raw strings from the URL become a
ProductFilters and a ListQuery, with lenient fallbacks instead of errors.
"""

import math
import re
from typing import Dict, List, Optional, Sequence, Tuple

from pydantic.alias_generators import to_camel

from catalog_api.schemas.product import (
    ListQuery,
    Pagination,
    PriceStats,
    Product,
    ProductFilters,
    ProductStats,
)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT_FIELD = "createdAt"

# Keys compared by value; everything else compares as text
_VALUE_SORT_FIELDS = {"price", "createdAt", "updatedAt"}

# camelCase wire name -> Product attribute
_ATTRIBUTE_BY_FIELD = {to_camel(name): name for name in Product.model_fields}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


# ══════════════════════════════════════════════════════════════════════════
# Query-string parsing
# ══════════════════════════════════════════════════════════════════════════


def parse_positive_int(value: Optional[str], default: int) -> int:
    """
    Parse the leading integer of `value` ("2abc" -> 2).

    Missing, non-numeric and non-positive values fall back to `default`.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(value)
    if not match:
        return default
    parsed = int(match.group(1))
    return parsed if parsed > 0 else default


def parse_float(value: Optional[str]) -> Optional[float]:
    """
    Parse the leading decimal number of `value` ("100abc" -> 100.0).

    Missing, non-numeric and non-finite values ("inf", "1e400") give None,
    which means the filter is not applied.
    """
    if not value:
        return None
    match = _LEADING_FLOAT.match(value)
    if not match:
        return None
    parsed = float(match.group(1))
    return parsed if math.isfinite(parsed) else None


def parse_bool(value: Optional[str]) -> Optional[bool]:
    if value == "true":
        return True
    if value == "false":
        return False
    return None


def parse_list_query(
    category: Optional[str] = None,
    in_stock: Optional[str] = None,
    min_price: Optional[str] = None,
    max_price: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> Tuple[ProductFilters, ListQuery]:
    """Build the filters and the sort/page settings from raw query values."""
    filters = ProductFilters(
        category=category or None,
        in_stock=parse_bool(in_stock),
        min_price=parse_float(min_price),
        max_price=parse_float(max_price),
        search=search or None,
    )
    query = ListQuery(
        sort_by=sort_by or DEFAULT_SORT_FIELD,
        sort_order=sort_order,
        page=parse_positive_int(page, DEFAULT_PAGE),
        limit=parse_positive_int(limit, DEFAULT_LIMIT),
    )
    return filters, query


# ══════════════════════════════════════════════════════════════════════════
# Filter
# ══════════════════════════════════════════════════════════════════════════


def matches_search(product: Product, term: str) -> bool:
    """Case-insensitive substring match on name or description."""
    needle = term.lower()
    return needle in product.name.lower() or needle in product.description.lower()


def filter_products(products: Sequence[Product], filters: ProductFilters) -> List[Product]:
    """Keep the products that satisfy every specified filter."""
    result = list(products)

    if filters.category:
        needle = filters.category.lower()
        result = [p for p in result if needle in p.category.lower()]

    if filters.in_stock is not None:
        result = [p for p in result if p.in_stock == filters.in_stock]

    if filters.min_price is not None:
        result = [p for p in result if p.price >= filters.min_price]

    if filters.max_price is not None:
        result = [p for p in result if p.price <= filters.max_price]

    if filters.search:
        result = [p for p in result if matches_search(p, filters.search)]

    return result


def search_products(products: Sequence[Product], term: str) -> List[Product]:
    return [p for p in products if matches_search(p, term)]


# ══════════════════════════════════════════════════════════════════════════
# Sort
# ══════════════════════════════════════════════════════════════════════════


def _text_key(product: Product, field: str) -> Tuple[str, str]:
    attribute = _ATTRIBUTE_BY_FIELD.get(field)
    value = getattr(product, attribute, None) if attribute else None
    text = "" if value is None else str(value)
    return text.casefold(), text


def sort_products(
    products: Sequence[Product],
    sort_by: str = DEFAULT_SORT_FIELD,
    sort_order: Optional[str] = None,
) -> List[Product]:
    """
    Sort by a camelCase field name.

    price / createdAt / updatedAt compare by value. Any other name compares
    as text, with unknown or missing fields treated as "". Descending only
    when sort_order == "desc". The sort is stable, so equal keys keep their
    store order and repeated requests page identically.
    """
    reverse = sort_order == "desc"

    if sort_by in _VALUE_SORT_FIELDS:
        attribute = _ATTRIBUTE_BY_FIELD[sort_by]
        return sorted(products, key=lambda p: getattr(p, attribute), reverse=reverse)

    return sorted(products, key=lambda p: _text_key(p, sort_by), reverse=reverse)


# ══════════════════════════════════════════════════════════════════════════
# Paginate
# ══════════════════════════════════════════════════════════════════════════


def paginate(
    products: Sequence[Product], page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT
) -> Tuple[List[Product], Pagination]:
    """
    Slice one page out of `products`.

    skip = (page - 1) * limit; a page past the end is empty, not an error.
    """
    total = len(products)
    skip = (page - 1) * limit
    items = list(products[skip:skip + limit])

    pagination = Pagination(
        current_page=page,
        total_pages=math.ceil(total / limit),
        total_items=total,
        items_per_page=limit,
        has_next_page=skip + limit < total,
        has_prev_page=page > 1,
    )
    return items, pagination


def list_products(
    products: Sequence[Product], filters: ProductFilters, query: ListQuery
) -> Tuple[List[Product], Pagination]:
    """The whole pipeline: filter, then sort, then paginate."""
    filtered = filter_products(products, filters)
    ordered = sort_products(filtered, query.sort_by, query.sort_order)
    return paginate(ordered, query.page, query.limit)


# ══════════════════════════════════════════════════════════════════════════
# Stats
# ══════════════════════════════════════════════════════════════════════════


def compute_stats(products: Sequence[Product]) -> ProductStats:
    categories: Dict[str, int] = {}
    for product in products:
        categories[product.category] = categories.get(product.category, 0) + 1

    in_stock = sum(1 for p in products if p.in_stock)
    prices = [p.price for p in products]

    price_stats = PriceStats()
    if prices:
        price_stats = PriceStats(
            min=min(prices),
            max=max(prices),
            average=sum(prices) / len(prices),
        )

    return ProductStats(
        total=len(products),
        in_stock=in_stock,
        out_of_stock=len(products) - in_stock,
        categories=categories,
        price_stats=price_stats,
    )
