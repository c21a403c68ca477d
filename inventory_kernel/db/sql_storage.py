"""
Module: inventory_kernel.db.sql_storage
Responsibility: Storage implementation over a SQLAlchemy ``kv_records`` table.
Architecture position: Kernel > DB.

Invariants enforced:
    - put_many writes all keys inside one session_scope() transaction, so
      the catalog and the movement ledger are committed together.

Failure modes:
    - SQLAlchemyError from the driver is wrapped in PersistenceError.  The
      transaction is rolled back; nothing is retried.
"""

from typing import Mapping

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inventory_kernel.db.base import KeyValueRecord
from inventory_kernel.db.engine import (
    create_storage_engine,
    create_tables,
    session_scope,
)
from inventory_kernel.db.storage import Storage
from inventory_kernel.exceptions import PersistenceError
from inventory_kernel.logging_config import get_logger

logger = get_logger("db.sql_storage")


class SqlStorage(Storage):
    """
    Key-value storage persisted through SQLAlchemy.

    Usage::

        storage = SqlStorage.from_url("sqlite:///inventory.db")
        storage.put("inventory_products_v1", "[]")
    """

    def __init__(self, engine: Engine, create_schema: bool = True):
        self._engine = engine
        self._factory: sessionmaker[Session] = sessionmaker(
            bind=engine, expire_on_commit=False
        )
        if create_schema:
            try:
                create_tables(engine)
            except SQLAlchemyError as exc:
                raise PersistenceError("kv_records", str(exc)) from exc

    @classmethod
    def from_url(cls, database_url: str, echo: bool = False) -> "SqlStorage":
        return cls(create_storage_engine(database_url, echo=echo))

    @property
    def engine(self) -> Engine:
        return self._engine

    def get(self, key: str) -> str | None:
        try:
            with session_scope(self._factory) as session:
                return session.execute(
                    select(KeyValueRecord.value).where(KeyValueRecord.key == key)
                ).scalar_one_or_none()
        except SQLAlchemyError as exc:
            logger.error("sql_storage_read_failed", extra={"key": key}, exc_info=True)
            raise PersistenceError(key, str(exc)) from exc

    def put_many(self, records: Mapping[str, str]) -> None:
        keys = sorted(records)
        try:
            with session_scope(self._factory) as session:
                for key in keys:
                    row = session.get(KeyValueRecord, key)
                    if row is None:
                        session.add(KeyValueRecord(key=key, value=records[key]))
                    else:
                        row.value = records[key]
        except SQLAlchemyError as exc:
            logger.error("sql_storage_write_failed", extra={"keys": keys}, exc_info=True)
            raise PersistenceError(",".join(keys), str(exc)) from exc

        logger.debug("sql_storage_written", extra={"keys": keys})

    def dispose(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()
