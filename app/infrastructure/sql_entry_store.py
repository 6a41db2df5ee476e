"""SQL Entry Store — EntryStore backed by SQLAlchemy async ORM.

Invariants:
    - One short-lived session per call; every write commits or rolls back whole
    - Row <-> WasteEntry mapping names every field in both directions
    - Datetimes read back without tzinfo (SQLite) are UTC
    - values() ordered by created_at, then id

Design Decisions:
    - merge() for insert: one statement path for both first write and replacement
    - Session errors mapped by DatabaseSessionManager, not here
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select

from app.core.domain_types import EntryId, OwnerIdentity, Quantity, WasteEntry
from app.infrastructure.database import DatabaseSessionManager
from app.models.waste_entry import WasteEntryRecord

logger = logging.getLogger(__name__)


class SqlEntryStore:
    """Durable entry store over a relational database."""

    def __init__(self, manager: DatabaseSessionManager):
        self._manager = manager

    async def insert(self, entry_id: EntryId, entry: WasteEntry) -> None:
        async with self._manager.session() as db:
            await db.merge(_to_record(entry_id, entry))
            await db.commit()

    async def get(self, entry_id: EntryId) -> WasteEntry | None:
        async with self._manager.session() as db:
            record = await db.get(WasteEntryRecord, entry_id)
            return _to_entry(record) if record else None

    async def remove(self, entry_id: EntryId) -> WasteEntry | None:
        async with self._manager.session() as db:
            record = await db.get(WasteEntryRecord, entry_id)
            if record is None:
                return None
            removed = _to_entry(record)
            await db.delete(record)
            await db.commit()
            return removed

    async def values(self) -> list[WasteEntry]:
        async with self._manager.session() as db:
            result = await db.execute(
                select(WasteEntryRecord).order_by(
                    WasteEntryRecord.created_at, WasteEntryRecord.id,
                ),
            )
            return [_to_entry(r) for r in result.scalars().all()]

    async def health_check(self) -> bool:
        return await self._manager.health_check()


def _to_record(entry_id: EntryId, entry: WasteEntry) -> WasteEntryRecord:
    return WasteEntryRecord(
        id=entry_id,
        owner_identity=entry.owner_identity,
        waste_type=entry.waste_type,
        quantity=entry.quantity,
        recycled_quantity=entry.recycled_quantity,
        location=entry.location,
        is_verified=entry.is_verified,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
    )


def _to_entry(record: WasteEntryRecord) -> WasteEntry:
    return WasteEntry(
        id=EntryId(record.id),
        owner_identity=OwnerIdentity(record.owner_identity),
        waste_type=record.waste_type,
        quantity=Quantity(record.quantity),
        recycled_quantity=(
            Quantity(record.recycled_quantity)
            if record.recycled_quantity is not None else None
        ),
        location=record.location,
        is_verified=record.is_verified,
        created_at=_as_utc(record.created_at),
        updated_at=(
            _as_utc(record.updated_at) if record.updated_at is not None else None
        ),
    )


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
