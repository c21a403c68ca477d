"""
Tests for InventoryState loading and write-through.

Covers reloads from storage, tolerance of missing/corrupt data, and the
behaviour when storage rejects a write (mutation kept, error surfaced).
"""

from typing import Mapping

import pytest

from inventory_kernel.config import InventoryConfig
from inventory_kernel.db.sql_storage import SqlStorage
from inventory_kernel.db.storage import InMemoryStorage, Storage
from inventory_kernel.domain.ids import SequentialIdGenerator
from inventory_kernel.domain.models import Product, ProductInput
from inventory_kernel.exceptions import PersistenceError
from inventory_kernel.services.catalog_service import CatalogService
from inventory_kernel.services.stock_service import StockService
from inventory_kernel.state import InventoryState


class FailingStorage(Storage):
    """Storage whose reads or writes fail on demand."""

    def __init__(self, fail_reads: bool = False):
        self.inner = InMemoryStorage()
        self.fail_reads = fail_reads
        self.fail_writes = False

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise PersistenceError(key, "storage offline")
        return self.inner.get(key)

    def put_many(self, records: Mapping[str, str]) -> None:
        if self.fail_writes:
            raise PersistenceError(",".join(sorted(records)), "quota exceeded")
        self.inner.put_many(records)


def _reload(storage, config, clock):
    fresh = InventoryState(storage=storage, config=config, clock=clock)
    fresh.load()
    return fresh


class TestLoad:

    def test_empty_storage_loads_empty(self, state):
        assert state.products == ()
        assert state.movements == ()

    def test_reload_reproduces_state(self, state, storage, config, clock, make_product, stock):
        product = make_product(quantity=10)
        stock.apply_movement(product.id, "out", 4, note="sale")

        fresh = _reload(storage, config, clock)

        assert fresh.products == state.products
        assert fresh.movements == state.movements

    def test_corrupt_products_load_empty(self, storage, config, clock):
        storage.put(config.products_key, "{{{ not json")
        storage.put(config.movements_key, "[]")
        fresh = _reload(storage, config, clock)
        assert fresh.products == ()

    def test_corrupt_movements_do_not_affect_products(self, storage, config, clock, make_product):
        make_product()
        storage.put(config.movements_key, "garbage")
        fresh = _reload(storage, config, clock)
        assert len(fresh.products) == 1
        assert fresh.movements == ()

    def test_read_failure_loads_empty(self, config, clock, captured_logs):
        fresh = InventoryState(storage=FailingStorage(fail_reads=True), config=config, clock=clock)
        fresh.load()
        assert fresh.products == ()
        assert any(r["message"] == "storage_load_failed" for r in captured_logs())

    def test_keys_come_from_config(self, clock):
        storage = InMemoryStorage()
        config = InventoryConfig.in_memory(products_key="p", movements_key="m")
        s = InventoryState(storage=storage, config=config, clock=clock)
        CatalogService(s).upsert_product(ProductInput(name="W", sku="W"))
        assert storage.keys() == ["p"]


class TestWriteFailure:

    @pytest.fixture
    def failing(self):
        return FailingStorage()

    @pytest.fixture
    def failing_state(self, failing, config, clock):
        s = InventoryState(
            storage=failing,
            config=config,
            clock=clock,
            id_generator=SequentialIdGenerator(),
        )
        s.load()
        return s

    def test_movement_kept_in_memory_when_write_fails(self, failing, failing_state):
        catalog = CatalogService(failing_state)
        product = catalog.upsert_product(ProductInput(name="W", sku="W", quantity=5))
        failing.fail_writes = True

        with pytest.raises(PersistenceError):
            StockService(failing_state).apply_movement(product.id, "out", 2)

        assert failing_state.find_product(product.id).quantity == 3
        assert len(failing_state.movements) == 1
        # storage still holds the last good snapshot
        assert '"quantity": 5' in failing.inner.get(failing_state.config.products_key)

    def test_next_successful_write_carries_change(self, failing, failing_state, config, clock):
        catalog = CatalogService(failing_state)
        stock = StockService(failing_state)
        product = catalog.upsert_product(ProductInput(name="W", sku="W", quantity=5))

        failing.fail_writes = True
        with pytest.raises(PersistenceError):
            stock.apply_movement(product.id, "out", 2)
        failing.fail_writes = False
        stock.apply_movement(product.id, "in", 1)

        fresh = _reload(failing.inner, config, clock)
        assert fresh.find_product(product.id).quantity == 4
        assert len(fresh.movements) == 2

    def test_catalog_write_failure_surfaces(self, failing, failing_state):
        failing.fail_writes = True
        with pytest.raises(PersistenceError) as exc_info:
            CatalogService(failing_state).upsert_product(ProductInput(name="W", sku="W"))
        assert exc_info.value.code == "PERSISTENCE_ERROR"
        assert len(failing_state.products) == 1


class TestEncodeFailure:

    def test_unencodable_catalog_changes_nothing(self, state, storage, config, make_product):
        product = make_product(quantity=5)
        snapshot = storage.get(config.products_key)
        huge = Product(id="huge", name="H", sku="H", quantity=10**5000)

        with pytest.raises(PersistenceError) as exc_info:
            state.commit(products=state.products + (huge,))

        assert exc_info.value.code == "PERSISTENCE_ERROR"
        assert state.products == (product,)
        assert storage.get(config.products_key) == snapshot

    def test_state_stays_writable_after_encode_failure(self, state, stock, make_product):
        product = make_product(quantity=5)
        huge = Product(id="huge", name="H", sku="H", quantity=10**5000)
        with pytest.raises(PersistenceError):
            state.commit(products=state.products + (huge,))

        stock.stock_out(product.id, 2)
        assert state.find_product(product.id).quantity == 3
        assert len(state.movements) == 1


class TestSqlBackedState:

    def test_movement_survives_restart(self, tmp_path, clock):
        url = f"sqlite:///{tmp_path / 'inventory.db'}"
        config = InventoryConfig(database_url=url, seed_demo_data=False)

        storage = SqlStorage.from_url(url)
        s = InventoryState(storage=storage, config=config, clock=clock)
        s.load()
        product = CatalogService(s).upsert_product(ProductInput(name="W", sku="W", quantity=9))
        StockService(s).apply_movement(product.id, "out", 9)
        storage.dispose()

        reopened = SqlStorage.from_url(url)
        try:
            fresh = _reload(reopened, config, clock)
            assert fresh.find_product(product.id).quantity == 0
            assert [m.quantity for m in fresh.movements] == [9]
        finally:
            reopened.dispose()
