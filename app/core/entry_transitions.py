"""Entry Transitions — one explicit constructor per operation that changes a record.

Invariants:
    - Every function returns a NEW WasteEntry naming every field (no spread/replace)
    - id, owner_identity, created_at are copied from the prior record, never recomputed
    - updated_at >= created_at, even when the clock reads earlier than created_at
    - apply_recycling raises OverRecycleError BEFORE building anything: the stored
      record is left untouched

Design Decisions:
    - Pure functions, timestamps passed in: the service owns the Clock
    - is_verified is never read from a payload: verify is the only path to True
"""

from datetime import datetime

from app.core.domain_types import (
    EntryId, EntryPayload, OwnerIdentity, Quantity, WasteEntry,
)
from app.core.errors import OverRecycleError


def build_entry(
    entry_id: EntryId,
    owner: OwnerIdentity,
    payload: EntryPayload,
    created_at: datetime,
) -> WasteEntry:
    """Build a freshly created, unverified entry from a validated payload."""
    return WasteEntry(
        id=entry_id,
        owner_identity=owner,
        waste_type=payload.waste_type,
        quantity=Quantity(payload.quantity),
        recycled_quantity=_optional_quantity(payload.recycled_quantity),
        location=payload.location,
        is_verified=False,
        created_at=created_at,
        updated_at=None,
    )


def apply_update(
    existing: WasteEntry, payload: EntryPayload, now: datetime,
) -> WasteEntry:
    """Overwrite caller-editable fields. recycled_quantity kept when omitted."""
    recycled = (
        _optional_quantity(payload.recycled_quantity)
        if payload.recycled_quantity is not None
        else existing.recycled_quantity
    )
    return WasteEntry(
        id=existing.id,
        owner_identity=existing.owner_identity,
        waste_type=payload.waste_type,
        quantity=Quantity(payload.quantity),
        recycled_quantity=recycled,
        location=payload.location,
        is_verified=existing.is_verified,
        created_at=existing.created_at,
        updated_at=stamp(existing, now),
    )


def apply_verification(existing: WasteEntry, now: datetime) -> WasteEntry:
    """Mark verified. Idempotent on the flag; always re-stamps updated_at."""
    return WasteEntry(
        id=existing.id,
        owner_identity=existing.owner_identity,
        waste_type=existing.waste_type,
        quantity=existing.quantity,
        recycled_quantity=existing.recycled_quantity,
        location=existing.location,
        is_verified=True,
        created_at=existing.created_at,
        updated_at=stamp(existing, now),
    )


def apply_recycling(
    existing: WasteEntry, amount: float, now: datetime,
) -> WasteEntry:
    """Move `amount` from outstanding quantity into recycled quantity."""
    if amount > existing.quantity:
        raise OverRecycleError(existing.id, amount, existing.quantity)
    return WasteEntry(
        id=existing.id,
        owner_identity=existing.owner_identity,
        waste_type=existing.waste_type,
        quantity=Quantity(existing.quantity - amount),
        recycled_quantity=Quantity(existing.recycled_or_zero + amount),
        location=existing.location,
        is_verified=existing.is_verified,
        created_at=existing.created_at,
        updated_at=stamp(existing, now),
    )


def stamp(existing: WasteEntry, now: datetime) -> datetime:
    """updated_at for a mutation of `existing` observed at `now`."""
    return max(now, existing.created_at)


def _optional_quantity(value: float | None) -> Quantity | None:
    return Quantity(value) if value is not None else None
