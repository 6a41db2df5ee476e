"""Entry Service — the eight operations of the waste-entry surface.

Invariants:
    - Validation and precondition checks run strictly before any insert/remove
    - Mutations (create/update/delete/verify/recycle) run under the shared write lock:
      fetch, compute the whole new record, write it back as one replacement
    - Reads (get/list_all/list_verified) take no lock
    - Nothing is retried here; every failure propagates as a WasteLedgerError

Design Decisions:
    - Thin orchestration over pure core (validate_entry, entry_transitions)
      (ADR: impureim sandwich — read, decide purely, write)
    - Built per call by EntryRuntime.for_caller: identity is a call-scoped collaborator
"""

import asyncio
import logging

from app.core.domain_types import (
    EntryId, EntryOperation, EntryPayload, WasteEntry,
)
from app.core.entry_transitions import (
    apply_recycling, apply_update, apply_verification, build_entry,
)
from app.core.errors import (
    EntryNotFoundError, IdentityCollisionError, WasteLedgerError,
)
from app.core.repository_protocols import (
    Clock, EntryStore, IdGenerator, IdentityProvider,
)
from app.core.validate_entry import validate_entry_payload, validate_recycle_amount

logger = logging.getLogger(__name__)


class EntryService:
    """Orchestrates validator, collaborators and store for one caller."""

    def __init__(
        self,
        store: EntryStore,
        clock: Clock,
        identity: IdentityProvider,
        id_generator: IdGenerator,
        write_lock: asyncio.Lock | None = None,
    ):
        self.store = store
        self.clock = clock
        self.identity = identity
        self.id_generator = id_generator
        self._write_lock = write_lock or asyncio.Lock()

    # ─── Mutations ───────────────────────────────────────────────

    async def create(self, payload: EntryPayload) -> WasteEntry:
        """Validate and store a new, unverified entry owned by the caller."""
        validate_entry_payload(payload)
        async with self._write_lock:
            entry_id = self.id_generator.next_id()
            if await self.store.get(entry_id) is not None:
                error = IdentityCollisionError(entry_id)
                error.context.operation = EntryOperation.CREATE.value
                self._log_rejection(EntryOperation.CREATE, error)
                raise error
            entry = build_entry(
                entry_id, self.identity.current(), payload, self.clock.now(),
            )
            await self.store.insert(entry_id, entry)
        self._log_mutation(EntryOperation.CREATE, entry)
        return entry

    async def update(self, entry_id: EntryId, payload: EntryPayload) -> WasteEntry:
        """Overwrite the editable fields of an existing entry."""
        validate_entry_payload(payload)
        async with self._write_lock:
            existing = await self._require(entry_id, EntryOperation.UPDATE)
            updated = apply_update(existing, payload, self.clock.now())
            await self.store.insert(entry_id, updated)
        self._log_mutation(EntryOperation.UPDATE, updated)
        return updated

    async def delete(self, entry_id: EntryId) -> WasteEntry:
        """Permanently remove an entry and return its last state."""
        async with self._write_lock:
            existing = await self._require(entry_id, EntryOperation.DELETE)
            removed = await self.store.remove(entry_id)
        removed = removed or existing
        self._log_mutation(EntryOperation.DELETE, removed)
        return removed

    async def verify(self, entry_id: EntryId) -> WasteEntry:
        """Mark an entry verified. Re-verifying succeeds and re-stamps updated_at."""
        async with self._write_lock:
            existing = await self._require(entry_id, EntryOperation.VERIFY)
            verified = apply_verification(existing, self.clock.now())
            await self.store.insert(entry_id, verified)
        self._log_mutation(EntryOperation.VERIFY, verified)
        return verified

    async def recycle(self, entry_id: EntryId, amount: float) -> WasteEntry:
        """Convert `amount` of outstanding quantity into recycled quantity."""
        validate_recycle_amount(amount)
        async with self._write_lock:
            existing = await self._require(entry_id, EntryOperation.RECYCLE)
            try:
                recycled = apply_recycling(existing, amount, self.clock.now())
            except WasteLedgerError as e:
                self._log_rejection(EntryOperation.RECYCLE, e)
                raise
            await self.store.insert(entry_id, recycled)
        self._log_mutation(EntryOperation.RECYCLE, recycled)
        return recycled

    # ─── Queries ─────────────────────────────────────────────────

    async def get(self, entry_id: EntryId) -> WasteEntry:
        return await self._require(entry_id, EntryOperation.GET)

    async def list_all(self) -> list[WasteEntry]:
        return list(await self.store.values())

    async def list_verified(self) -> list[WasteEntry]:
        return [e for e in await self.list_all() if e.is_verified]

    # ─── Helpers ─────────────────────────────────────────────────

    async def _require(
        self, entry_id: EntryId, operation: EntryOperation,
    ) -> WasteEntry:
        entry = await self.store.get(entry_id)
        if entry is None:
            error = EntryNotFoundError(entry_id)
            error.context.operation = operation.value
            self._log_rejection(operation, error)
            raise error
        return entry

    def _log_mutation(self, operation: EntryOperation, entry: WasteEntry) -> None:
        logger.info(
            f"Waste entry {operation.value}: {entry.id}",
            extra={
                "entry_id": entry.id,
                "owner_identity": entry.owner_identity,
                "operation": operation.value,
            },
        )

    def _log_rejection(
        self, operation: EntryOperation, error: WasteLedgerError,
    ) -> None:
        logger.warning(
            f"Waste entry {operation.value} rejected: {error.message}",
            extra={
                "entry_id": error.context.entry_id,
                "operation": operation.value,
                "error_code": error.code,
            },
        )
