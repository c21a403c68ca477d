"""
Identifier generation for products and movements.

Ids are opaque strings. Uniqueness is the generator's job: ``UUIDGenerator``
relies on uuid4, ``SequentialIdGenerator`` on a locked monotonic counter.
Tests inject the sequential generator so ids are predictable.
"""

import itertools
import threading
from abc import ABC, abstractmethod
from uuid import uuid4


class IdGenerator(ABC):
    """Produces a fresh opaque id on every call to ``next_id()``."""

    @abstractmethod
    def next_id(self) -> str:
        ...


class UUIDGenerator(IdGenerator):
    """Random uuid4 ids rendered as 32-character hex strings."""

    def next_id(self) -> str:
        return uuid4().hex


class SequentialIdGenerator(IdGenerator):
    """Monotonic ``<prefix>-<n>`` ids, starting at ``start``."""

    def __init__(self, prefix: str = "id", start: int = 1):
        self._prefix = prefix
        self._counter = itertools.count(start)
        self._lock = threading.Lock()

    def next_id(self) -> str:
        with self._lock:
            n = next(self._counter)
        return f"{self._prefix}-{n}"
