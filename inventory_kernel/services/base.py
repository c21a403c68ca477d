"""
BaseService -- abstract base for all inventory services.

Responsibility:
    Provides the common constructor for every service that mutates an
    ``InventoryState``.

Invariants enforced:
    - Services validate all input before touching state.
    - Services change state only through ``InventoryState.commit()`` while
      holding ``state.lock``.

Non-goals:
    - Read-only views belong in ``inventory_kernel/selectors/``.
"""

from abc import ABC

from inventory_kernel.state import InventoryState


class BaseService(ABC):
    """
    Abstract base class for all inventory services.

    Contract:
        Accepts the caller's ``InventoryState``.  The caller owns the state
        and its lifetime; services hold no inventory data of their own.
    """

    def __init__(self, state: InventoryState):
        self.state = state
