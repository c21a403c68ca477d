"""
CatalogService -- product create, edit and delete.

Responsibility:
    Validates raw product input, coerces its numeric fields, and installs
    the resulting record in the catalog.  Writes the full catalog snapshot
    after every change.

Invariants enforced:
    - Name and sku are non-empty after trimming whitespace.
    - An edit replaces the whole record in its original catalog position;
      fields are never merged.
    - Deleting a product leaves its movements in the ledger.

Failure modes:
    - ValidationError for an empty name or sku, or a negative price.
      Raised before any state change.
    - PersistenceError if the catalog write fails (state keeps the change).

Manual adjustments:
    An edit that changes quantity overwrites the running balance without a
    movement.  With ``InventoryConfig.record_manual_adjustments`` enabled,
    the delta is also appended to the ledger as an ``in``/``out`` movement
    noted "Manual adjustment", committed together with the catalog.
"""

from inventory_kernel.domain.coercion import MAX_MAGNITUDE, coerce_decimal, coerce_int
from inventory_kernel.domain.models import (
    Movement,
    MovementType,
    Product,
    ProductInput,
)
from inventory_kernel.exceptions import ValidationError
from inventory_kernel.logging_config import LogContext, get_logger
from inventory_kernel.services.base import BaseService

logger = get_logger("services.catalog")

MANUAL_ADJUSTMENT_NOTE = "Manual adjustment"


class CatalogService(BaseService):
    """Entry points for product catalog mutation and lookup."""

    def upsert_product(self, data: ProductInput) -> Product:
        """
        Create a product, or replace the product with the same id.

        Preconditions:
            - ``data.name`` and ``data.sku`` are non-empty after trimming.
        Postconditions:
            - The returned product is in the catalog and persisted.
            - A new product gets a fresh id from the state's generator unless
              the input names one; an edit keeps its id and position.

        Raises:
            ValidationError: If name or sku is empty, or price is negative
                or not below ``MAX_MAGNITUDE``.
            PersistenceError: If the catalog write fails.
        """
        name = (data.name or "").strip()
        sku = (data.sku or "").strip()
        if not name:
            raise ValidationError("name", "name is required")
        if not sku:
            raise ValidationError("sku", "sku is required")

        price = coerce_decimal(data.price)
        if price < 0:
            raise ValidationError("price", f"price must be non-negative, got {price}")
        if price >= MAX_MAGNITUDE:
            raise ValidationError("price", f"price must be below {MAX_MAGNITUDE}, got {price}")

        state = self.state
        with state.lock:
            product = Product(
                id=data.id or state.ids.next_id(),
                name=name,
                sku=sku,
                category=(data.category or "").strip(),
                quantity=coerce_int(data.quantity),
                reorder_level=coerce_int(data.reorder_level),
                price=price,
            )

            products = list(state.products)
            index = next(
                (i for i, p in enumerate(products) if p.id == product.id), None
            )
            adjustment: Movement | None = None
            if index is None:
                products.append(product)
            else:
                previous = products[index]
                products[index] = product
                adjustment = self._manual_adjustment(previous, product)

            with LogContext.bind(product_id=product.id):
                if adjustment is None:
                    state.commit(products=products)
                else:
                    state.commit(
                        products=products,
                        movements=state.movements + (adjustment,),
                    )
                logger.info(
                    "product_upserted",
                    extra={
                        "is_new": index is None,
                        "sku": product.sku,
                        "quantity": product.quantity,
                        "manual_adjustment": adjustment is not None,
                    },
                )
        return product

    def _manual_adjustment(self, previous: Product, current: Product) -> Movement | None:
        if not self.state.config.record_manual_adjustments:
            return None
        delta = current.quantity - previous.quantity
        if delta == 0:
            return None
        return Movement(
            id=self.state.ids.next_id(),
            product_id=current.id,
            type=MovementType.IN if delta > 0 else MovementType.OUT,
            quantity=abs(delta),
            timestamp=self.state.clock.now_millis(),
            note=MANUAL_ADJUSTMENT_NOTE,
        )

    def delete_product(self, product_id: str) -> None:
        """
        Remove a product by id.  Unknown ids are a no-op.

        Raises:
            PersistenceError: If the catalog write fails.
        """
        state = self.state
        with state.lock:
            remaining = [p for p in state.products if p.id != product_id]
            if len(remaining) == len(state.products):
                logger.debug("product_delete_noop", extra={"target_id": product_id})
                return
            with LogContext.bind(product_id=product_id):
                state.commit(products=remaining)
                logger.info("product_deleted")

    def find_product(self, product_id: str | None) -> Product | None:
        return self.state.find_product(product_id)

    def list_products(self) -> tuple[Product, ...]:
        return self.state.products

    def product_options(self) -> tuple[tuple[str, str], ...]:
        """``(id, "name (sku)")`` pairs for a product picker."""
        return tuple((p.id, p.label) for p in self.state.products)

    def blank_input(self) -> ProductInput:
        """An empty create form using the configured default reorder level."""
        return ProductInput(
            name="",
            sku="",
            category="",
            quantity=0,
            reorder_level=self.state.config.default_reorder_level,
            price=0,
        )
