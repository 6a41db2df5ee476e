"""WasteEntry ORM — persists one logged waste-disposal record.

Invariants:
    - id is the caller-visible entry id (string PK, generated by the service)
    - quantity is non-nullable; recycled_quantity / updated_at nullable ("absent")
    - Rows are replaced whole by SqlEntryStore.insert (merge), never patched per column

Design Decisions:
    - String PK over UUID column: ids come from the IdGenerator contract, which
      only promises uniqueness, not UUID shape
    - No server defaults: every column value is decided by the core transitions
"""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class WasteEntryRecord(Base):
    """Row form of WasteEntry."""
    __tablename__ = "waste_entries"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    owner_identity: Mapped[str] = mapped_column(String(255), nullable=False)
    waste_type: Mapped[str] = mapped_column(String(255), nullable=False)
    quantity: Mapped[float] = mapped_column(Float, nullable=False)
    recycled_quantity: Mapped[float | None] = mapped_column(Float, nullable=True)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    is_verified: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
