"""
Module: inventory_kernel.db.engine
Responsibility: SQLAlchemy engine construction and transactional scope for
    the SQL-backed key-value storage.
Architecture position: Kernel > DB.  May import from db/base.py.  MUST NOT
    import from services/, selectors/, domain/ or state.py.

Engines are owned by the storage object that creates them; there is no
module-level engine.

Invariants enforced:
    - session_scope() commits on normal exit and rolls back on any exception,
      so a multi-key write lands in one transaction or not at all.
    - In-memory SQLite URLs use a StaticPool so every session sees the same
      database.
"""

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inventory_kernel.db.base import Base
from inventory_kernel.logging_config import get_logger

logger = get_logger("db.engine")


def _is_memory_sqlite(database_url: str) -> bool:
    return database_url in ("sqlite://", "sqlite:///:memory:")


def create_storage_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Build an engine for ``database_url``.

    Args:
        database_url: Any SQLAlchemy URL (e.g., ``sqlite:///inventory.db``).
        echo: If True, log all SQL statements.

    Returns:
        SQLAlchemy Engine instance.
    """
    kwargs: dict = {"echo": echo}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **kwargs)
    logger.info(
        "engine_initialized",
        extra={"dialect": engine.dialect.name, "echo": echo},
    )
    return engine


def create_tables(engine: Engine) -> None:
    """Create every table registered on ``Base.metadata`` (idempotent)."""
    Base.metadata.create_all(engine)
    logger.info("tables_created", extra={"tables": sorted(Base.metadata.tables)})


@contextmanager
def session_scope(
    factory: sessionmaker[Session],
) -> Generator[Session, None, None]:
    """
    Provide a transactional scope around a series of operations.

    Postconditions: On normal exit, session is committed and closed.
        On exception, session is rolled back and closed.  The exception
        is re-raised to the caller.

    Usage:
        with session_scope(factory) as session:
            session.add(entity)
            # Commits on successful exit, rolls back on exception
    """
    session = factory()
    logger.debug("transaction_started")
    try:
        yield session
        session.commit()
        logger.debug("transaction_committed")
    except Exception:
        session.rollback()
        logger.warning("transaction_rolled_back", exc_info=True)
        raise
    finally:
        session.close()
