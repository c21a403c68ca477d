"""
Session bootstrap -- wires storage, state, services and selector together.

Usage::

    session = open_inventory(InventoryConfig.from_yaml_file(path))
    session.stock.apply_movement(product_id, "out", 2)
    print(session.selector.statistics())
"""

from dataclasses import dataclass
from decimal import Decimal

from inventory_kernel.config import InventoryConfig
from inventory_kernel.db.sql_storage import SqlStorage
from inventory_kernel.db.storage import InMemoryStorage, Storage
from inventory_kernel.domain.clock import Clock
from inventory_kernel.domain.ids import IdGenerator
from inventory_kernel.domain.models import Product
from inventory_kernel.exceptions import PersistenceError
from inventory_kernel.logging_config import configure_logging, get_logger
from inventory_kernel.selectors.inventory_selector import InventorySelector
from inventory_kernel.services.catalog_service import CatalogService
from inventory_kernel.services.stock_service import StockService
from inventory_kernel.state import InventoryState

logger = get_logger("bootstrap")

# (name, sku, category, quantity, reorder_level, price)
DEMO_PRODUCTS: tuple[tuple[str, str, str, int, int, Decimal], ...] = (
    ("HP Laptop 15s", "LAP-HP-15S", "Laptop", 8, 3, Decimal("45000")),
    ("Logitech Wireless Mouse", "MOU-LOGI-M185", "Accessories", 25, 10, Decimal("699")),
    ("Seagate 1TB HDD", "HDD-SG-1TB", "Storage", 5, 5, Decimal("3500")),
)


@dataclass(frozen=True)
class InventorySession:
    """Everything a presentation layer needs for one inventory."""
    state: InventoryState
    catalog: CatalogService
    stock: StockService
    selector: InventorySelector


def build_storage(config: InventoryConfig) -> Storage:
    """SQL storage for a configured URL, otherwise in-memory."""
    if config.database_url is None:
        return InMemoryStorage()
    return SqlStorage.from_url(config.database_url)


def seed_demo_if_empty(state: InventoryState) -> bool:
    """
    Populate the demonstration catalog when no products are loaded.

    Returns:
        True if products were seeded.
    """
    with state.lock:
        if state.products:
            return False
        demo = [
            Product(
                id=state.ids.next_id(),
                name=name,
                sku=sku,
                category=category,
                quantity=quantity,
                reorder_level=reorder_level,
                price=price,
            )
            for name, sku, category, quantity, reorder_level, price in DEMO_PRODUCTS
        ]
        state.commit(products=demo)
    logger.info("demo_products_seeded", extra={"product_count": len(demo)})
    return True


def open_inventory(
    config: InventoryConfig | None = None,
    storage: Storage | None = None,
    clock: Clock | None = None,
    id_generator: IdGenerator | None = None,
) -> InventorySession:
    """
    Load an inventory and return its session.

    ``storage`` overrides the one derived from ``config.database_url``.
    A database that cannot be opened is not fatal: the session starts empty
    on in-memory storage, leaving the file untouched, and a warning is
    logged.
    """
    configure_logging()
    config = config or InventoryConfig.with_defaults()
    if storage is None:
        try:
            storage = build_storage(config)
        except PersistenceError:
            logger.warning("storage_unavailable", exc_info=True)
            storage = InMemoryStorage()
    state = InventoryState(
        storage=storage,
        config=config,
        clock=clock,
        id_generator=id_generator,
    )
    state.load()
    if config.seed_demo_data:
        seed_demo_if_empty(state)
    return InventorySession(
        state=state,
        catalog=CatalogService(state),
        stock=StockService(state),
        selector=InventorySelector(state),
    )
