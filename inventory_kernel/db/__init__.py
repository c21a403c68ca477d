"""Persistence layer: storage contract, codecs and the SQLAlchemy backend."""

from inventory_kernel.db.storage import InMemoryStorage, Storage
from inventory_kernel.db.sql_storage import SqlStorage

__all__ = [
    "Storage",
    "InMemoryStorage",
    "SqlStorage",
]
