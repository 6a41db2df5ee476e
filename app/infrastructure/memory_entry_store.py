"""In-Memory Entry Store — dict-backed EntryStore with an optional capacity bound.

Invariants:
    - Keyed by entry id; values() returns insertion order (overwrite keeps position)
    - Records are frozen dataclasses, so callers never hold a mutable reference
    - Inserting a NEW key at capacity raises StorageFailureError; overwrites always succeed

Design Decisions:
    - Capacity bound models a fixed-size stable map: a full medium rejects the write
      instead of evicting (ADR: no silent data loss)
    - Async methods despite no IO: satisfies the EntryStore protocol shared with SqlEntryStore
"""

import logging

from app.core.domain_types import EntryId, WasteEntry
from app.core.errors import StorageFailureError

logger = logging.getLogger(__name__)


class InMemoryEntryStore:
    """Process-local entry store. Contents are lost on restart."""

    def __init__(self, capacity: int | None = None):
        if capacity is not None and capacity < 0:
            raise ValueError("capacity must be >= 0")
        self._capacity = capacity
        self._entries: dict[EntryId, WasteEntry] = {}

    async def insert(self, entry_id: EntryId, entry: WasteEntry) -> None:
        if (
            self._capacity is not None
            and entry_id not in self._entries
            and len(self._entries) >= self._capacity
        ):
            logger.error(
                f"Entry store full ({self._capacity} entries)",
                extra={"entry_id": entry_id, "operation": "insert"},
            )
            raise StorageFailureError(
                f"capacity of {self._capacity} entries exhausted", "insert",
            )
        self._entries[entry_id] = entry

    async def get(self, entry_id: EntryId) -> WasteEntry | None:
        return self._entries.get(entry_id)

    async def remove(self, entry_id: EntryId) -> WasteEntry | None:
        return self._entries.pop(entry_id, None)

    async def values(self) -> list[WasteEntry]:
        return list(self._entries.values())

    async def health_check(self) -> bool:
        return True

    def __len__(self) -> int:
        return len(self._entries)
