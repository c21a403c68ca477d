"""
InventoryState -- the session-owned store of catalog and ledger.

Responsibility:
    Holds the product catalog and the movement ledger for one caller, along
    with the collaborators every operation needs (storage, clock, id
    generator, config).  Services receive the state by reference; there is
    no module-level inventory.

Invariants enforced:
    - Collections are replaced, never mutated in place.  ``products`` and
      ``movements`` hand out tuples of frozen records, so a snapshot taken
      by a reader cannot change underneath it.
    - ``commit()`` swaps both collections in one step and writes them with a
      single ``Storage.put_many`` call: a reader of the state or of storage
      never sees a quantity change without its movement.
    - ``lock`` is held by every mutating service call.

Failure modes:
    - ``load()`` never raises for bad data: missing or corrupt records load
      as empty collections.  A storage read failure is logged and also
      loads as empty.
    - ``commit()`` raises PersistenceError after the in-memory swap when the
      write fails.  The swap is kept.
    - A collection that cannot be encoded raises PersistenceError before the
      swap, leaving both collections unchanged.
"""

import threading
from typing import Sequence

from inventory_kernel.config import InventoryConfig
from inventory_kernel.db.codec import (
    decode_movements,
    decode_products,
    encode_movements,
    encode_products,
)
from inventory_kernel.db.storage import InMemoryStorage, Storage
from inventory_kernel.domain.clock import Clock, SystemClock
from inventory_kernel.domain.ids import IdGenerator, UUIDGenerator
from inventory_kernel.domain.models import Movement, Product
from inventory_kernel.exceptions import PersistenceError
from inventory_kernel.logging_config import get_logger

logger = get_logger("state")


class InventoryState:
    """
    Catalog and ledger for a single session.

    Usage::

        state = InventoryState(storage=SqlStorage.from_url(url))
        state.load()
    """

    def __init__(
        self,
        storage: Storage | None = None,
        config: InventoryConfig | None = None,
        clock: Clock | None = None,
        id_generator: IdGenerator | None = None,
    ):
        self.storage = storage or InMemoryStorage()
        self.config = config or InventoryConfig.in_memory()
        self.clock = clock or SystemClock()
        self.ids = id_generator or UUIDGenerator()
        self.lock = threading.RLock()
        self._products: tuple[Product, ...] = ()
        self._movements: tuple[Movement, ...] = ()

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    @property
    def movements(self) -> tuple[Movement, ...]:
        return self._movements

    def find_product(self, product_id: str | None) -> Product | None:
        if not product_id:
            return None
        for product in self._products:
            if product.id == product_id:
                return product
        return None

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def load(self) -> None:
        """Replace both collections with what storage currently holds."""
        products_key = self.config.products_key
        movements_key = self.config.movements_key
        try:
            products_text = self.storage.get(products_key)
            movements_text = self.storage.get(movements_key)
        except PersistenceError:
            logger.warning("storage_load_failed", exc_info=True)
            products_text = movements_text = None

        with self.lock:
            self._products = tuple(decode_products(products_text, products_key))
            self._movements = tuple(decode_movements(movements_text, movements_key))

        logger.info(
            "inventory_loaded",
            extra={
                "product_count": len(self._products),
                "movement_count": len(self._movements),
            },
        )

    def commit(
        self,
        products: Sequence[Product] | None = None,
        movements: Sequence[Movement] | None = None,
    ) -> None:
        """
        Install new collections and write them through to storage.

        Only the collections passed are replaced and written.  Both are
        encoded before either is installed.

        Raises:
            PersistenceError: If a collection cannot be encoded, in which
                case nothing changes, or if storage rejects the write, in
                which case the in-memory collections keep the new values.
        """
        new_products = None if products is None else tuple(products)
        new_movements = None if movements is None else tuple(movements)
        pending = []
        if new_movements is not None:
            pending.append((self.config.movements_key, encode_movements, new_movements))
        if new_products is not None:
            pending.append((self.config.products_key, encode_products, new_products))

        records: dict[str, str] = {}
        with self.lock:
            for key, encode, collection in pending:
                try:
                    records[key] = encode(collection)
                except ValueError as exc:
                    logger.error("inventory_encode_failed", extra={"key": key}, exc_info=True)
                    raise PersistenceError(key, str(exc)) from exc
            if not records:
                return
            if new_movements is not None:
                self._movements = new_movements
            if new_products is not None:
                self._products = new_products
            try:
                self.storage.put_many(records)
            except PersistenceError:
                logger.error(
                    "inventory_persist_failed",
                    extra={"keys": sorted(records)},
                    exc_info=True,
                )
                raise
