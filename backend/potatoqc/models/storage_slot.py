"""StorageSlot — one named payload row.

The whole batch list is stored as a single JSON blob under its slot name
(``potato_batches`` by default).  There is no per-batch table.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, LargeBinary, String
from sqlalchemy.orm import Mapped, mapped_column

from potatoqc.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StorageSlot(Base):
    __tablename__ = "storage_slots"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow
    )
