"""
Catalog API - Payload Validation Tests
======================================

What we test:
    ✅ A valid payload yields a typed ProductInput
    ✅ Every rule reports its own violation, all collected in order
    ✅ Type strictness (booleans are not prices, strings are not booleans)
"""

import pytest

from catalog_api.middleware.validation import (
    CATEGORY_MESSAGE,
    DESCRIPTION_MESSAGE,
    IN_STOCK_MESSAGE,
    NAME_MESSAGE,
    PRICE_MESSAGE,
    validate_product,
)


class TestValidateProduct:

    def test_valid_payload(self, product_payload):
        result = validate_product(product_payload)

        assert result.is_valid
        assert result.violations == []
        assert result.product.in_stock is True
        assert result.product.price == 3500

    def test_collects_all_violations(self, product_payload):
        del product_payload["name"]
        product_payload["price"] = -1

        result = validate_product(product_payload)

        assert result.product is None
        assert result.violations == [NAME_MESSAGE, PRICE_MESSAGE]

    def test_empty_payload_fails_every_rule(self):
        result = validate_product({})
        assert result.violations == [
            NAME_MESSAGE,
            DESCRIPTION_MESSAGE,
            PRICE_MESSAGE,
            CATEGORY_MESSAGE,
            IN_STOCK_MESSAGE,
        ]

    @pytest.mark.parametrize("payload", [None, [], "product", 42])
    def test_non_object_treated_as_empty(self, payload):
        assert len(validate_product(payload).violations) == 5

    def test_name_is_measured_after_trimming(self, product_payload):
        product_payload["name"] = "  A  "
        assert validate_product(product_payload).violations == [NAME_MESSAGE]

    def test_short_description(self, product_payload):
        product_payload["description"] = "too short"
        assert validate_product(product_payload).violations == [DESCRIPTION_MESSAGE]

    @pytest.mark.parametrize(
        "price",
        ["10", True, None, -0.01, float("nan"), float("inf"), float("-inf"), 10 ** 400],
    )
    def test_bad_prices(self, product_payload, price):
        product_payload["price"] = price
        assert validate_product(product_payload).violations == [PRICE_MESSAGE]

    @pytest.mark.parametrize("price", [0, 0.0, 19.99, 100000])
    def test_good_prices(self, product_payload, price):
        product_payload["price"] = price
        assert validate_product(product_payload).is_valid

    @pytest.mark.parametrize("category", ["", 7, None])
    def test_bad_category(self, product_payload, category):
        product_payload["category"] = category
        assert validate_product(product_payload).violations == [CATEGORY_MESSAGE]

    @pytest.mark.parametrize("in_stock", ["true", 1, None])
    def test_in_stock_must_be_boolean(self, product_payload, in_stock):
        product_payload["inStock"] = in_stock
        assert validate_product(product_payload).violations == [IN_STOCK_MESSAGE]

    def test_false_in_stock_is_valid(self, product_payload):
        product_payload["inStock"] = False
        assert validate_product(product_payload).product.in_stock is False
