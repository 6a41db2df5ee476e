"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in EntryStore: boundary methods are async because implementations do IO,
      but core pure functions (validate_entry, entry_transitions) are never async —
      the service orchestrates the async calls around the pure logic
    - Clock / IdentityProvider / IdGenerator are sync: they never touch IO
"""

from datetime import datetime
from typing import Protocol

from app.core.domain_types import EntryId, OwnerIdentity, WasteEntry


class Clock(Protocol):
    """Supplies a monotonically non-decreasing UTC timestamp."""
    def now(self) -> datetime: ...


class IdentityProvider(Protocol):
    """Supplies the identity of the current caller, stable for one call."""
    def current(self) -> OwnerIdentity: ...


class IdGenerator(Protocol):
    """Produces ids unique among all records ever created in the store."""
    def next_id(self) -> EntryId: ...


class EntryStore(Protocol):
    """Keyed persistence for waste entries — the sole mutator of stored state."""
    async def insert(self, entry_id: EntryId, entry: WasteEntry) -> None: ...
    async def get(self, entry_id: EntryId) -> WasteEntry | None: ...
    async def remove(self, entry_id: EntryId) -> WasteEntry | None: ...
    async def values(self) -> list[WasteEntry]: ...
    async def health_check(self) -> bool: ...
