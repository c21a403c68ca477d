"""
Module: inventory_kernel.db.storage
Responsibility: The key-value persistence contract the inventory state writes
    through, plus a dict-backed implementation.
Architecture position: Kernel > DB.  MUST NOT import from services/,
    selectors/ or state.py.

Contract:
    Values are opaque strings (the serialized record collections).  Reads of
    a missing key return None.  ``put_many`` writes every pair or none of
    them, as far as the backend allows.

Failure modes:
    - Implementations raise PersistenceError for backend failures.  They do
      not retry.
"""

from abc import ABC, abstractmethod
from typing import Mapping

from inventory_kernel.logging_config import get_logger

logger = get_logger("db.storage")


class Storage(ABC):
    """Abstract key-value store for serialized record collections."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value for ``key``, or None if absent."""
        ...

    @abstractmethod
    def put_many(self, records: Mapping[str, str]) -> None:
        """Store every key/value pair as one unit."""
        ...

    def put(self, key: str, value: str) -> None:
        """Store a single value."""
        self.put_many({key: value})


class InMemoryStorage(Storage):
    """
    Dict-backed storage for tests and throwaway sessions.

    ``put_many`` builds the next snapshot and swaps it in with one
    assignment, so a reader never sees half of a multi-key write.
    """

    def __init__(self, initial: Mapping[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def put_many(self, records: Mapping[str, str]) -> None:
        snapshot = dict(self._data)
        snapshot.update(records)
        self._data = snapshot
        logger.debug("memory_storage_written", extra={"keys": sorted(records)})

    def keys(self) -> list[str]:
        return sorted(self._data)
