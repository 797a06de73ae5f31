"""
Catalog API - Product Store Unit Tests
======================================

What we test:
    ✅ create assigns a unique id, equal timestamps and normalized fields
    ✅ update keeps id and createdAt, advances updatedAt
    ✅ delete removes the record; later get fails with NOT_FOUND
    ✅ list hands out copies, not the stored records
"""

import threading

import pytest

from catalog_api.exceptions import CatalogError, ErrorKind
from catalog_api.schemas.product import ProductInput
from catalog_api.services.product_store import ProductStore, seed_products


class TestSeedData:

    def test_five_seed_products(self):
        products = seed_products()
        assert [p.id for p in products] == ["1", "2", "3", "4", "5"]
        assert sum(p.in_stock for p in products) == 4

    def test_seed_timestamps_are_consistent(self):
        for product in seed_products():
            assert product.updated_at == product.created_at
            assert product.created_at.tzinfo is not None


class TestProductStoreCreate:

    def setup_method(self):
        self.store = ProductStore(seed_products())

    def test_create_assigns_unique_id(self, product_input):
        existing = {p.id for p in self.store.list()}
        product = self.store.create(product_input)
        assert product.id not in existing
        assert len(self.store) == 6

    def test_create_sets_equal_timestamps(self, product_input):
        product = self.store.create(product_input)
        assert product.created_at == product.updated_at

    def test_create_normalizes_fields(self, product_input):
        product = self.store.create(product_input)
        assert product.name == "Desk Lamp"
        assert product.category == "home-office"
        assert product.description == "LED desk lamp with adjustable brightness"

    def test_created_ids_never_collide(self, product_input):
        ids = {self.store.create(product_input).id for _ in range(50)}
        assert len(ids) == 50

    def test_create_is_safe_across_threads(self, product_input):
        store = ProductStore()
        threads = [
            threading.Thread(target=lambda: [store.create(product_input) for _ in range(20)])
            for _ in range(5)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(store) == 100
        assert len({p.id for p in store.list()}) == 100


class TestProductStoreReadUpdateDelete:

    def setup_method(self):
        self.store = ProductStore(seed_products())

    def test_get_existing(self):
        assert self.store.get("1").name == "Laptop"

    def test_get_missing_raises_not_found(self):
        with pytest.raises(CatalogError) as excinfo:
            self.store.get("does-not-exist")
        assert excinfo.value.kind is ErrorKind.NOT_FOUND
        assert excinfo.value.message == "Product not found"

    def test_update_preserves_id_and_created_at(self, product_input):
        before = self.store.get("3")
        after = self.store.update("3", product_input)

        assert after.id == "3"
        assert after.created_at == before.created_at
        assert after.updated_at >= before.updated_at
        assert after.name == "Desk Lamp"
        assert self.store.get("3").category == "home-office"

    def test_update_missing_raises_not_found(self, product_input):
        with pytest.raises(CatalogError) as excinfo:
            self.store.update("nope", product_input)
        assert excinfo.value.kind is ErrorKind.NOT_FOUND

    def test_delete_then_get_fails(self):
        removed = self.store.delete("2")
        assert removed.name == "Smartphone"
        assert len(self.store) == 4
        with pytest.raises(CatalogError) as excinfo:
            self.store.get("2")
        assert excinfo.value.kind is ErrorKind.NOT_FOUND

    def test_delete_missing_raises_not_found(self):
        with pytest.raises(CatalogError):
            self.store.delete("nope")


class TestSnapshotSemantics:

    def test_mutating_list_result_does_not_touch_store(self):
        store = ProductStore(seed_products())
        snapshot = store.list()
        snapshot.clear()
        assert len(store) == 5

    def test_mutating_returned_record_does_not_touch_store(self):
        store = ProductStore(seed_products())
        product = store.get("1")
        product.name = "Changed"
        assert store.get("1").name == "Laptop"

    def test_store_copies_initial_records(self):
        products = seed_products()
        store = ProductStore(products)
        products[0].name = "Changed"
        assert store.get("1").name == "Laptop"

    def test_update_input_with_untrimmed_values(self):
        store = ProductStore(seed_products())
        fields = ProductInput(
            name=" Mixer ",
            description=" Stand mixer with bowl ",
            price=0,
            category="KITCHEN",
            in_stock=False,
        )
        updated = store.update("5", fields)
        assert updated.name == "Mixer"
        assert updated.description == "Stand mixer with bowl"
        assert updated.category == "kitchen"
        assert updated.price == 0
