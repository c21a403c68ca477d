"""
Module: inventory_kernel.db.codec
Responsibility: JSON encoding of the product catalog and movement ledger as
    flat record arrays, and tolerant decoding back into domain objects.
Architecture position: Kernel > DB.  May import from domain/.

Record formats:
    Product  -- {id, name, sku, category, quantity, reorderLevel, price}
    Movement -- {id, productId, type, quantity, note, timestamp}

    ``price`` is written as a JSON number (an integer when integral) and
    ``timestamp`` as integer epoch milliseconds.

Failure modes:
    Decoding never raises.  Missing text, invalid JSON or a non-array payload
    decodes to an empty collection; individual malformed records are
    skipped.  Both cases log a warning.
"""

import json
from decimal import Decimal
from typing import Any, Callable, Sequence, TypeVar

from inventory_kernel.domain.coercion import coerce_decimal, coerce_int
from inventory_kernel.domain.models import Movement, MovementType, Product
from inventory_kernel.logging_config import get_logger

logger = get_logger("db.codec")

T = TypeVar("T")


def _price_to_json(price: Decimal) -> int | float:
    if price == price.to_integral_value():
        return int(price)
    return float(price)


def product_to_record(product: Product) -> dict[str, Any]:
    return {
        "id": product.id,
        "name": product.name,
        "sku": product.sku,
        "category": product.category,
        "quantity": product.quantity,
        "reorderLevel": product.reorder_level,
        "price": _price_to_json(product.price),
    }


def movement_to_record(movement: Movement) -> dict[str, Any]:
    return {
        "id": movement.id,
        "productId": movement.product_id,
        "type": movement.type.value,
        "quantity": movement.quantity,
        "note": movement.note,
        "timestamp": movement.timestamp,
    }


def _require_str(record: dict, key: str) -> str:
    value = record.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"{key} must be a non-empty string")
    return value


def product_from_record(record: dict[str, Any]) -> Product:
    """Build a Product from a stored record. Raises ValueError if malformed."""
    category = record.get("category") or ""
    return Product(
        id=_require_str(record, "id"),
        name=_require_str(record, "name"),
        sku=_require_str(record, "sku"),
        category=category if isinstance(category, str) else str(category),
        quantity=coerce_int(record.get("quantity")),
        reorder_level=coerce_int(record.get("reorderLevel")),
        price=coerce_decimal(record.get("price")),
    )


def movement_from_record(record: dict[str, Any]) -> Movement:
    """Build a Movement from a stored record. Raises ValueError if malformed."""
    timestamp = record.get("timestamp")
    if isinstance(timestamp, bool) or not isinstance(timestamp, (int, float)):
        raise ValueError("timestamp must be a number")
    quantity = record.get("quantity")
    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValueError("quantity must be an integer")
    note = record.get("note") or ""
    return Movement(
        id=_require_str(record, "id"),
        product_id=_require_str(record, "productId"),
        type=MovementType(record.get("type")),
        quantity=quantity,
        timestamp=int(timestamp),
        note=note if isinstance(note, str) else str(note),
    )


def encode_products(products: Sequence[Product]) -> str:
    return json.dumps([product_to_record(p) for p in products], ensure_ascii=False)


def encode_movements(movements: Sequence[Movement]) -> str:
    return json.dumps([movement_to_record(m) for m in movements], ensure_ascii=False)


def _decode(
    text: str | None,
    key: str,
    build: Callable[[dict[str, Any]], T],
) -> list[T]:
    if text is None:
        return []
    try:
        payload = json.loads(text)
    except ValueError:
        logger.warning("storage_load_corrupt", extra={"key": key, "reason": "invalid_json"})
        return []
    if not isinstance(payload, list):
        logger.warning("storage_load_corrupt", extra={"key": key, "reason": "not_a_list"})
        return []

    items: list[T] = []
    for index, record in enumerate(payload):
        try:
            if not isinstance(record, dict):
                raise ValueError("record is not an object")
            items.append(build(record))
        except (ValueError, TypeError) as exc:
            logger.warning(
                "storage_record_skipped",
                extra={"key": key, "index": index, "reason": str(exc)},
            )
    return items


def decode_products(text: str | None, key: str = "products") -> list[Product]:
    return _decode(text, key, product_from_record)


def decode_movements(text: str | None, key: str = "movements") -> list[Movement]:
    return _decode(text, key, movement_from_record)
