"""
Inventory Domain Models (``inventory_kernel.domain.models``).

Responsibility
--------------
Frozen value objects for the nouns of the inventory ledger: products,
stock movements, raw product input, and the derived views handed to a
presentation layer.

Architecture
------------
Layer: **Domain** -- pure data structures.  All dataclasses are
``frozen=True``; services replace records with ``dataclasses.replace``
rather than mutating them, so anything returned to a caller is a read-only
snapshot.

Invariants
----------
- ``Movement.quantity`` is a positive integer.
- ``Product.price`` is a non-negative ``Decimal``.
- ``Product.quantity`` is NOT constrained: a catalog edit may set any value.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import MAX_PREC, Decimal, localcontext
from enum import Enum
from typing import Any

from inventory_kernel.domain.clock import from_millis


class MovementType(Enum):
    """Direction of a stock movement."""
    IN = "in"
    OUT = "out"

    @property
    def label(self) -> str:
        return "Stock In" if self is MovementType.IN else "Stock Out"


class StockStatus(Enum):
    """Stock classification of a product against its reorder level."""
    OK = "ok"
    LOW = "low"
    OUT = "out"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    StockStatus.OK: "OK",
    StockStatus.LOW: "Low",
    StockStatus.OUT: "Out of Stock",
}


@dataclass(frozen=True)
class Product:
    """
    A catalog entry for one stock-keeping unit.

    ``quantity`` is the authoritative running balance.  It is changed by
    stock movements and by catalog edits; it is never recomputed from the
    movement history.
    """
    id: str
    name: str
    sku: str
    category: str = ""
    quantity: int = 0
    reorder_level: int = 0
    price: Decimal = Decimal("0")

    def __post_init__(self):
        if self.price < 0:
            raise ValueError(f"price must be non-negative (got {self.price})")

    @property
    def label(self) -> str:
        return f"{self.name} ({self.sku})"

    @property
    def total_value(self) -> Decimal:
        with localcontext(prec=MAX_PREC):
            return self.quantity * self.price


@dataclass(frozen=True)
class Movement:
    """
    One recorded stock-in or stock-out event.

    ``product_id`` is a reference, not ownership: it may dangle once the
    product is deleted.  ``timestamp`` is epoch milliseconds.
    """
    id: str
    product_id: str
    type: MovementType
    quantity: int
    timestamp: int
    note: str = ""

    def __post_init__(self):
        if self.quantity <= 0:
            raise ValueError(f"movement quantity must be positive (got {self.quantity})")

    @property
    def signed_quantity(self) -> int:
        return self.quantity if self.type is MovementType.IN else -self.quantity


@dataclass(frozen=True)
class ProductInput:
    """
    Raw caller input for ``CatalogService.upsert_product``.

    Numeric fields hold whatever the caller collected (form strings, numbers,
    ``None``); the catalog coerces them.  An empty or ``None`` id means
    "create a new product".
    """
    name: str
    sku: str
    category: str | None = ""
    quantity: Any = 0
    reorder_level: Any = 0
    price: Any = 0
    id: str | None = None

    @classmethod
    def from_product(cls, product: Product) -> "ProductInput":
        """Pre-fill an edit from an existing product."""
        return cls(
            id=product.id,
            name=product.name,
            sku=product.sku,
            category=product.category,
            quantity=product.quantity,
            reorder_level=product.reorder_level,
            price=product.price,
        )


@dataclass(frozen=True)
class InventoryStatistics:
    """Aggregate figures over the whole catalog."""
    total_products: int
    total_quantity: int
    inventory_value: Decimal
    low_stock_count: int


@dataclass(frozen=True)
class ProductView:
    """A product decorated with its stock status and total value."""
    product: Product
    status: StockStatus
    total_value: Decimal


@dataclass(frozen=True)
class MovementView:
    """A movement resolved against the current catalog for display."""
    movement: Movement
    product: Product | None

    @property
    def is_product_deleted(self) -> bool:
        return self.product is None

    @property
    def product_label(self) -> str:
        if self.product is None:
            return "(deleted product)"
        return self.product.label

    @property
    def type_label(self) -> str:
        return self.movement.type.label

    @property
    def occurred_at(self) -> datetime:
        """The movement timestamp as an aware UTC datetime."""
        return from_millis(self.movement.timestamp)
