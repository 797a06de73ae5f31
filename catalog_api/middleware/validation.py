"""
Catalog API - Product Payload Validation
========================================

What:  Checks a proposed product payload against the field rules.
Why:   The store only ever sees typed, rule-abiding input; clients get every
       problem with their payload at once, not one per round trip.
How:   Every rule runs and contributes at most one violation message. The
       result is either a ProductInput or the ordered list of violations.

Rules:
    name         present, string, trimmed length >= 2
    description  present, string, trimmed length >= 10
    price        present, finite number (booleans excluded), >= 0
    category     present, non-empty string
    inStock      present, boolean
"""

import math
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional

from fastapi import Depends

from catalog_api.exceptions import validation_error
from catalog_api.middleware.body_parser import parse_json_body
from catalog_api.schemas.product import ProductInput

NAME_MESSAGE = "Name is required and must be at least 2 characters long"
DESCRIPTION_MESSAGE = "Description is required and must be at least 10 characters long"
PRICE_MESSAGE = "Price is required and must be a non-negative number"
CATEGORY_MESSAGE = "Category is required and must be a string"
IN_STOCK_MESSAGE = "InStock is required and must be a boolean"

VALIDATION_FAILED = "Product validation failed"


@dataclass
class ValidationResult:
    product: Optional[ProductInput] = None
    violations: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.violations


def _text_at_least(value: Any, length: int) -> bool:
    return isinstance(value, str) and len(value.strip()) >= length


def _is_number(value: Any) -> bool:
    # bool is an int subclass; JSON true is not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        # Integers too large for a float would break price stats
        return math.isfinite(float(value))
    except OverflowError:
        return False


def validate_product(payload: Any) -> ValidationResult:
    """Run every rule against `payload`; a non-object counts as {}."""
    data: Mapping[str, Any] = payload if isinstance(payload, Mapping) else {}
    violations: List[str] = []

    name = data.get("name")
    description = data.get("description")
    price = data.get("price")
    category = data.get("category")
    in_stock = data.get("inStock")

    if not _text_at_least(name, 2):
        violations.append(NAME_MESSAGE)

    if not _text_at_least(description, 10):
        violations.append(DESCRIPTION_MESSAGE)

    if not _is_number(price) or price < 0:
        violations.append(PRICE_MESSAGE)

    if not isinstance(category, str) or not category:
        violations.append(CATEGORY_MESSAGE)

    if not isinstance(in_stock, bool):
        violations.append(IN_STOCK_MESSAGE)

    if violations:
        return ValidationResult(violations=violations)

    return ValidationResult(
        product=ProductInput(
            name=name,
            description=description,
            price=price,
            category=category,
            in_stock=in_stock,
        )
    )


async def validated_product(body: Any = Depends(parse_json_body)) -> ProductInput:
    """
    Dependency for POST/PUT: the validated payload, or a 400.

    `parse_json_body` is the app-wide dependency; FastAPI caches it per
    request, so depending on it here does not read the body twice.
    """
    result = validate_product(body)
    if not result.is_valid:
        raise validation_error(VALIDATION_FAILED, result.violations)
    return result.product
