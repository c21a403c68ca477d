"""
Pytest fixtures for the inventory kernel test suite.

Provides:
- Structured logging configured once per session, with log capture
- States over InMemoryStorage with a DeterministicClock and sequential ids
- Services and selector bound to that state
- A ``make_product`` factory for catalog setup
"""

import json
import logging
from decimal import Decimal
from io import StringIO

import pytest

from inventory_kernel.config import InventoryConfig
from inventory_kernel.db.storage import InMemoryStorage
from inventory_kernel.domain.clock import DeterministicClock
from inventory_kernel.domain.ids import SequentialIdGenerator
from inventory_kernel.domain.models import ProductInput
from inventory_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.services.catalog_service import CatalogService
from inventory_kernel.services.stock_service import StockService
from inventory_kernel.state import InventoryState


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture inventory_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, stock):
            stock.apply_movement(...)
            logs = captured_logs()
            assert any(r["message"] == "movement_applied" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("inventory_kernel")
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)


# =============================================================================
# State fixtures
# =============================================================================


@pytest.fixture
def clock():
    return DeterministicClock()


@pytest.fixture
def id_generator():
    return SequentialIdGenerator(prefix="id")


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def config():
    return InventoryConfig.in_memory(seed_demo_data=False)


@pytest.fixture
def state(storage, config, clock, id_generator):
    s = InventoryState(
        storage=storage,
        config=config,
        clock=clock,
        id_generator=id_generator,
    )
    s.load()
    return s


@pytest.fixture
def catalog(state):
    return CatalogService(state)


@pytest.fixture
def stock(state):
    return StockService(state)


@pytest.fixture
def selector(state):
    return InventorySelector(state)


@pytest.fixture
def make_product(catalog):
    """Factory that upserts a product with sensible defaults."""

    def _make(
        name: str = "Widget",
        sku: str = "WID-001",
        category: str = "General",
        quantity=10,
        reorder_level=5,
        price=Decimal("100"),
        id: str | None = None,
    ):
        return catalog.upsert_product(
            ProductInput(
                id=id,
                name=name,
                sku=sku,
                category=category,
                quantity=quantity,
                reorder_level=reorder_level,
                price=price,
            )
        )

    return _make
