"""
Module: inventory_kernel.selectors.inventory_selector
Responsibility: Read-only views of an InventoryState for a presentation
    layer: product search, stock status, recent movements, low-stock alerts
    and statistics.
Architecture position: Kernel > Selectors.  May import from domain/ and
    state.py.  MUST NOT import from services/.

Invariants enforced:
    - Read-only: the selector reads ``state.products`` / ``state.movements``
      snapshots and never calls ``commit()``.
    - Each method reads the state once, so a result is consistent with a
      single point in time.
"""

from inventory_kernel.domain.derivations import (
    classify_stock_status,
    compute_statistics,
    filter_products,
    format_currency,
    low_stock_products,
    product_views,
    recent_movements,
)
from inventory_kernel.domain.models import (
    InventoryStatistics,
    MovementView,
    Product,
    ProductView,
    StockStatus,
)
from inventory_kernel.state import InventoryState


class InventorySelector:
    """
    Derived views bound to one state.

    Usage::

        selector = InventorySelector(state)
        stats = selector.statistics()
        rows = selector.product_views("laptop")
    """

    def __init__(self, state: InventoryState):
        self.state = state

    def filter_products(self, query: str | None = "") -> tuple[Product, ...]:
        return filter_products(self.state.products, query)

    def product_views(self, query: str | None = "") -> tuple[ProductView, ...]:
        return product_views(self.state.products, query)

    def stock_status(self, product: Product) -> StockStatus:
        return classify_stock_status(product)

    def low_stock_products(self) -> tuple[Product, ...]:
        return low_stock_products(self.state.products)

    def recent_movements(self, limit: int | None = None) -> tuple[MovementView, ...]:
        """Most recent movements; ``limit`` defaults to the configured one."""
        if limit is None:
            limit = self.state.config.recent_movements_limit
        state = self.state
        with state.lock:
            movements, products = state.movements, state.products
        return recent_movements(movements, products, limit)

    def statistics(self) -> InventoryStatistics:
        return compute_statistics(self.state.products)

    def format_currency(self, amount) -> str:
        return format_currency(amount, self.state.config.currency_symbol)
