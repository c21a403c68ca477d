"""
Inventory Derivations (``inventory_kernel.domain.derivations``).

Responsibility
--------------
Stateless views over the catalog and movement ledger: search filtering,
stock-status classification, recent movements, low-stock alerts and
aggregate statistics.

Architecture
------------
Layer: **Domain** -- pure functions.  No I/O, no state, no clock.  Inputs
are sequences of frozen records; outputs are new tuples of frozen records,
so nothing here can mutate the ledger.

Failure Modes
-------------
- ``recent_movements`` raises ``ValueError`` on a negative ``limit``.
- ``format_currency`` never raises; unreadable amounts render as zero.
  Money arithmetic runs in a maximum-precision context, so sums and
  products are exact rather than rounded to 28 digits.
"""

from __future__ import annotations

from decimal import MAX_PREC, ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Sequence

from inventory_kernel.domain.coercion import coerce_decimal
from inventory_kernel.domain.models import (
    InventoryStatistics,
    Movement,
    MovementView,
    Product,
    ProductView,
    StockStatus,
)

DEFAULT_RECENT_LIMIT = 20


def classify_stock_status(product: Product) -> StockStatus:
    """
    Classify a product against its reorder level.

    OUT when quantity <= 0; LOW when 0 < quantity <= reorder_level; OK
    otherwise.  A quantity equal to the reorder level is LOW.
    """
    if product.quantity <= 0:
        return StockStatus.OUT
    if product.quantity <= product.reorder_level:
        return StockStatus.LOW
    return StockStatus.OK


def filter_products(
    products: Sequence[Product],
    query: str | None,
) -> tuple[Product, ...]:
    """
    Case-insensitive substring search over name, sku and category.

    The haystack is the plain concatenation ``name + sku + category``, so a
    query may span field boundaries.  A blank query returns every product in
    catalog order.
    """
    needle = (query or "").strip().lower()
    if not needle:
        return tuple(products)
    return tuple(
        p for p in products
        if needle in (p.name + p.sku + (p.category or "")).lower()
    )


def product_views(
    products: Sequence[Product],
    query: str | None = None,
) -> tuple[ProductView, ...]:
    """Filter, then decorate each product with its status and value."""
    return tuple(
        ProductView(
            product=p,
            status=classify_stock_status(p),
            total_value=p.total_value,
        )
        for p in filter_products(products, query)
    )


def low_stock_products(products: Sequence[Product]) -> tuple[Product, ...]:
    """Products needing attention (LOW or OUT), in catalog order."""
    return tuple(
        p for p in products
        if classify_stock_status(p) is not StockStatus.OK
    )


def recent_movements(
    movements: Sequence[Movement],
    products: Sequence[Product],
    limit: int = DEFAULT_RECENT_LIMIT,
) -> tuple[MovementView, ...]:
    """
    Most recent movements first, truncated to ``limit``.

    Each movement is resolved against the current catalog; a reference to a
    deleted product resolves to ``None`` instead of raising.

    Raises:
        ValueError: If ``limit`` is negative.
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    by_id = {p.id: p for p in products}
    ordered = sorted(movements, key=lambda m: m.timestamp, reverse=True)
    return tuple(
        MovementView(movement=m, product=by_id.get(m.product_id))
        for m in ordered[:limit]
    )


def compute_statistics(products: Sequence[Product]) -> InventoryStatistics:
    """
    Aggregate catalog figures.

    Quantities are summed as-is (a negative quantity subtracts).  Only LOW
    products count towards ``low_stock_count``; OUT products do not.
    """
    with localcontext(prec=MAX_PREC):
        inventory_value = sum(
            (p.quantity * p.price for p in products), Decimal("0")
        )
    return InventoryStatistics(
        total_products=len(products),
        total_quantity=sum(p.quantity for p in products),
        inventory_value=inventory_value,
        low_stock_count=sum(
            1 for p in products
            if classify_stock_status(p) is StockStatus.LOW
        ),
    )


def format_currency(amount: Any, symbol: str = "₹") -> str:
    """Render ``amount`` with ``symbol`` and two decimal places."""
    with localcontext(prec=MAX_PREC):
        value = coerce_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{symbol}{value}"
