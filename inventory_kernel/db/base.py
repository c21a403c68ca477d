"""
Module: inventory_kernel.db.base
Responsibility: Declarative base for the SQLAlchemy tables backing SqlStorage.
Architecture position: Kernel > DB.  Lowest-level import target for ORM
    models; MUST NOT import from services/, selectors/ or domain/.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Declarative base for all inventory kernel tables."""
    pass


class KeyValueRecord(Base):
    """
    One serialized record collection, addressed by its storage key.

    ``value`` holds the JSON text produced by ``inventory_kernel.db.codec``.
    """

    __tablename__ = "kv_records"

    key: Mapped[str] = mapped_column(String(200), primary_key=True)
    value: Mapped[str] = mapped_column(Text)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<KeyValueRecord {self.key} ({len(self.value)} chars)>"
