"""
Pure domain layer.

This module contains immutable records and pure derivations with NO
dependencies on:
- ORM (SQLAlchemy)
- Storage
- I/O
"""

from inventory_kernel.domain.clock import (
    Clock,
    DeterministicClock,
    SequentialClock,
    SystemClock,
)
from inventory_kernel.domain.derivations import (
    classify_stock_status,
    compute_statistics,
    filter_products,
    format_currency,
    low_stock_products,
    product_views,
    recent_movements,
)
from inventory_kernel.domain.ids import IdGenerator, SequentialIdGenerator, UUIDGenerator
from inventory_kernel.domain.models import (
    InventoryStatistics,
    Movement,
    MovementType,
    MovementView,
    Product,
    ProductInput,
    ProductView,
    StockStatus,
)

__all__ = [
    # Clock
    "Clock",
    "DeterministicClock",
    "SequentialClock",
    "SystemClock",
    # Ids
    "IdGenerator",
    "SequentialIdGenerator",
    "UUIDGenerator",
    # Records
    "InventoryStatistics",
    "Movement",
    "MovementType",
    "MovementView",
    "Product",
    "ProductInput",
    "ProductView",
    "StockStatus",
    # Derivations
    "classify_stock_status",
    "compute_statistics",
    "filter_products",
    "format_currency",
    "low_stock_products",
    "product_views",
    "recent_movements",
]
