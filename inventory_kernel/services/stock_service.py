"""
StockService -- stock-in and stock-out movements.

Responsibility:
    The only place quantity arithmetic happens for movements.  Validates a
    requested movement against the catalog, adjusts the product's running
    balance, appends the movement to the ledger, and persists both.

Invariants enforced:
    - Every check runs before any state change; a rejected movement leaves
      the catalog and the ledger untouched.
    - A stock-out never takes a product below zero at creation time.  Equal
      quantities are allowed and leave the product at exactly zero.
    - The new quantity and the new movement are committed together through
      ``InventoryState.commit()``, under ``state.lock``.

Failure modes:
    - ValidationError: unknown product, unknown movement type, or a quantity
      that is not a positive integer.
    - InsufficientStockError: stock-out larger than the current quantity.
    - PersistenceError: storage rejected the write; the in-memory change is
      kept.
"""

from dataclasses import replace
from typing import Any

from inventory_kernel.domain.coercion import parse_positive_int
from inventory_kernel.domain.models import Movement, MovementType
from inventory_kernel.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    ValidationError,
)
from inventory_kernel.logging_config import LogContext, get_logger
from inventory_kernel.services.base import BaseService

logger = get_logger("services.stock")


def _parse_type(value: MovementType | str) -> MovementType:
    if isinstance(value, MovementType):
        return value
    try:
        return MovementType(str(value).strip().lower())
    except ValueError:
        raise ValidationError("type", f"movement type must be 'in' or 'out', got {value!r}") from None


class StockService(BaseService):
    """Applies stock movements to the catalog and ledger."""

    def apply_movement(
        self,
        product_id: str,
        type: MovementType | str,
        quantity: Any,
        note: str | None = "",
    ) -> Movement:
        """
        Record a stock-in or stock-out for a product.

        Preconditions:
            - ``product_id`` names a product in the catalog.
            - ``quantity`` is an integer greater than zero.
            - For ``out``: the product holds at least ``quantity`` units.
        Postconditions:
            - The product's quantity moved by exactly ``quantity``.
            - Exactly one movement was appended, stamped with the state's
              clock and a fresh id.

        Raises:
            ValidationError: If the product, type or quantity is invalid.
            InsufficientStockError: If a stock-out exceeds available stock.
            PersistenceError: If the write fails after the state changed.
        """
        movement_type = _parse_type(type)
        amount = parse_positive_int(quantity)
        if amount is None:
            logger.info(
                "movement_rejected",
                extra={"reason": "invalid_quantity", "target_id": product_id},
            )
            raise ValidationError("quantity", f"quantity must be a positive integer, got {quantity!r}")

        state = self.state
        with state.lock, LogContext.bind(product_id=product_id or None):
            product = state.find_product(product_id)
            if product is None:
                logger.info("movement_rejected", extra={"reason": "product_not_found"})
                raise ProductNotFoundError(product_id)

            if movement_type is MovementType.OUT and product.quantity < amount:
                logger.info(
                    "movement_rejected",
                    extra={
                        "reason": "insufficient_stock",
                        "available": product.quantity,
                        "requested": amount,
                    },
                )
                raise InsufficientStockError(product.id, product.quantity, amount)

            movement = Movement(
                id=state.ids.next_id(),
                product_id=product.id,
                type=movement_type,
                quantity=amount,
                timestamp=state.clock.now_millis(),
                note=(note or "").strip(),
            )
            updated = replace(product, quantity=product.quantity + movement.signed_quantity)
            products = tuple(updated if p.id == product.id else p for p in state.products)

            with LogContext.bind(movement_id=movement.id):
                state.commit(products=products, movements=state.movements + (movement,))
                logger.info(
                    "movement_applied",
                    extra={
                        "type": movement_type.value,
                        "quantity": amount,
                        "balance": updated.quantity,
                    },
                )
        return movement

    def stock_in(self, product_id: str, quantity: Any, note: str | None = "") -> Movement:
        return self.apply_movement(product_id, MovementType.IN, quantity, note)

    def stock_out(self, product_id: str, quantity: Any, note: str | None = "") -> Movement:
        return self.apply_movement(product_id, MovementType.OUT, quantity, note)
