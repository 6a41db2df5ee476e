"""Entry Service — the eight operations against an in-memory store.

Tests cover:
    - create: assigned fields, validation before any write, collisions, storage failures
    - get / list_all / list_verified
    - update: identity fields preserved, NotFound, validation
    - delete: returns last state, subsequent get fails
    - verify: idempotent, re-stamps updated_at
    - recycle: conservation, OverRecycle leaves record unchanged
    - concurrent recycles on a store that suspends mid read-modify-write
    - the end-to-end plastic/siteA scenario
"""

import asyncio
import contextlib

import pytest

from app.core.domain_types import EntryId
from app.core.errors import (
    EntryNotFoundError, EntryValidationError, IdentityCollisionError,
    OverRecycleError, StorageFailureError,
)
from app.services.entry_service import EntryService
from tests.fakes import (
    FixedIdentity, RejectingWritesStore, ScriptedIdGenerator, SequentialIdGenerator,
    SteppingClock, YieldingEntryStore, payload,
)


# ─── create ──────────────────────────────────────────────────────

async def test_create_assigns_generated_fields(service, clock):
    entry = await service.create(payload())
    assert entry.id == "entry-1"
    assert entry.owner_identity == "alice"
    assert entry.is_verified is False
    assert entry.updated_at is None
    assert entry.recycled_quantity is None
    assert entry.created_at.tzinfo is not None


async def test_create_then_get_round_trips(service):
    created = await service.create(payload(waste_type="glass", quantity=3.5))
    assert await service.get(created.id) == created


async def test_create_records_owner_from_identity(service_for):
    entry = await service_for("bob").create(payload())
    assert entry.owner_identity == "bob"


async def test_create_accepts_initial_recycled_quantity(service):
    entry = await service.create(payload(recycled_quantity=10))
    assert entry.recycled_quantity == 10


async def test_create_invalid_payload_writes_nothing(service, store, ids):
    with pytest.raises(EntryValidationError):
        await service.create(payload(waste_type=""))
    assert await store.values() == []
    assert ids.count == 0


async def test_create_identity_collision(store):
    svc = EntryService(
        store=store, clock=SteppingClock(), identity=FixedIdentity(),
        id_generator=ScriptedIdGenerator(["dup", "dup"]),
    )
    first = await svc.create(payload())
    with pytest.raises(IdentityCollisionError) as exc:
        await svc.create(payload(waste_type="glass"))
    assert exc.value.entry_id == "dup"
    assert await store.get(EntryId("dup")) == first


async def test_create_storage_failure_propagates():
    svc = EntryService(
        store=RejectingWritesStore(), clock=SteppingClock(),
        identity=FixedIdentity(), id_generator=SequentialIdGenerator(),
    )
    with pytest.raises(StorageFailureError):
        await svc.create(payload())


# ─── get / list ──────────────────────────────────────────────────

async def test_get_missing_raises_not_found(service):
    with pytest.raises(EntryNotFoundError) as exc:
        await service.get(EntryId("missing"))
    assert "missing" in exc.value.message


async def test_list_all_returns_every_entry(service):
    a = await service.create(payload(waste_type="plastic"))
    b = await service.create(payload(waste_type="paper"))
    assert {e.id for e in await service.list_all()} == {a.id, b.id}


async def test_list_all_empty(service):
    assert await service.list_all() == []


async def test_list_verified_is_filtered_subset(service):
    a = await service.create(payload())
    await service.create(payload())
    await service.verify(a.id)

    everything = await service.list_all()
    verified = await service.list_verified()
    assert [e.id for e in verified] == [a.id]
    assert verified == [e for e in everything if e.is_verified]


# ─── update ──────────────────────────────────────────────────────

async def test_update_preserves_identity_fields(service_for):
    original = await service_for("alice").create(payload())
    updated = await service_for("bob").update(
        original.id, payload(waste_type="metal", quantity=5, location="siteB"),
    )
    assert updated.id == original.id
    assert updated.created_at == original.created_at
    assert updated.owner_identity == "alice"
    assert (updated.waste_type, updated.quantity, updated.location) == ("metal", 5, "siteB")
    assert updated.updated_at > original.created_at


async def test_update_keeps_verification(service):
    entry = await service.create(payload())
    await service.verify(entry.id)
    updated = await service.update(entry.id, payload(quantity=1))
    assert updated.is_verified is True


async def test_update_is_persisted(service):
    entry = await service.create(payload())
    updated = await service.update(entry.id, payload(quantity=1))
    assert await service.get(entry.id) == updated


async def test_update_missing_raises_not_found(service):
    with pytest.raises(EntryNotFoundError):
        await service.update(EntryId("missing"), payload())


async def test_update_validates_before_lookup(service):
    with pytest.raises(EntryValidationError):
        await service.update(EntryId("missing"), payload(quantity=-1))


async def test_update_invalid_leaves_record_unchanged(service):
    entry = await service.create(payload())
    with pytest.raises(EntryValidationError):
        await service.update(entry.id, payload(location=" "))
    assert await service.get(entry.id) == entry


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_returns_last_state_and_removes(service):
    entry = await service.create(payload())
    verified = await service.verify(entry.id)
    removed = await service.delete(entry.id)
    assert removed == verified
    with pytest.raises(EntryNotFoundError):
        await service.get(entry.id)


async def test_delete_missing_raises_not_found(service):
    with pytest.raises(EntryNotFoundError):
        await service.delete(EntryId("missing"))


async def test_delete_twice_fails_second_time(service):
    entry = await service.create(payload())
    await service.delete(entry.id)
    with pytest.raises(EntryNotFoundError):
        await service.delete(entry.id)


# ─── verify ──────────────────────────────────────────────────────

async def test_verify_is_idempotent(service):
    entry = await service.create(payload())
    first = await service.verify(entry.id)
    second = await service.verify(entry.id)
    assert first.is_verified is True
    assert second.is_verified is True
    assert second.updated_at > first.updated_at


async def test_verify_missing_raises_not_found(service):
    with pytest.raises(EntryNotFoundError):
        await service.verify(EntryId("missing"))


# ─── recycle ─────────────────────────────────────────────────────

@pytest.mark.parametrize("amount", [0, 1, 37.5, 100])
async def test_recycle_conserves_quantity(service, amount):
    entry = await service.create(payload(quantity=100))
    recycled = await service.recycle(entry.id, amount)
    assert recycled.quantity == 100 - amount
    assert recycled.recycled_quantity == amount


async def test_recycle_over_outstanding_leaves_record_unchanged(service):
    entry = await service.create(payload(quantity=10))
    before = await service.recycle(entry.id, 4)
    with pytest.raises(OverRecycleError):
        await service.recycle(entry.id, 7)
    assert await service.get(entry.id) == before


async def test_recycle_negative_amount_rejected(service):
    entry = await service.create(payload(quantity=10))
    with pytest.raises(EntryValidationError):
        await service.recycle(entry.id, -1)
    assert (await service.get(entry.id)).quantity == 10


async def test_recycle_missing_raises_not_found(service):
    with pytest.raises(EntryNotFoundError):
        await service.recycle(EntryId("missing"), 1)


async def test_recycle_storage_failure_leaves_record():
    store = RejectingWritesStore(reject_writes=False)
    svc = EntryService(
        store=store, clock=SteppingClock(), identity=FixedIdentity(),
        id_generator=SequentialIdGenerator(),
    )
    entry = await svc.create(payload())
    store.reject_writes = True
    with pytest.raises(StorageFailureError):
        await svc.recycle(entry.id, 1)
    assert await store.get(entry.id) == entry


# ─── concurrency ─────────────────────────────────────────────────

def _yielding_service(write_lock=None) -> EntryService:
    return EntryService(
        store=YieldingEntryStore(), clock=SteppingClock(), identity=FixedIdentity(),
        id_generator=SequentialIdGenerator(), write_lock=write_lock,
    )


async def test_concurrent_recycles_never_overdraw():
    service = _yielding_service()
    entry = await service.create(payload(quantity=10))
    results = await asyncio.gather(
        *(service.recycle(entry.id, 3) for _ in range(5)),
        return_exceptions=True,
    )
    succeeded = [r for r in results if not isinstance(r, Exception)]
    rejected = [r for r in results if isinstance(r, OverRecycleError)]
    assert len(succeeded) == 3
    assert len(rejected) == 2
    final = await service.get(entry.id)
    assert final.quantity == 1
    assert final.recycled_quantity == 9


async def test_yielding_store_interleaves_without_write_lock():
    """Without a shared lock every recycle reads the same prior record."""
    service = _yielding_service(write_lock=contextlib.nullcontext())
    entry = await service.create(payload(quantity=10))
    results = await asyncio.gather(
        *(service.recycle(entry.id, 3) for _ in range(5)),
        return_exceptions=True,
    )
    assert not any(isinstance(r, Exception) for r in results)
    final = await service.get(entry.id)
    assert final.quantity == 7
    assert final.recycled_quantity == 3


# ─── scenario ────────────────────────────────────────────────────

async def test_plastic_site_a_scenario(service):
    entry = await service.create(payload(waste_type="plastic", quantity=100, location="siteA"))
    assert (entry.quantity, entry.recycled_quantity, entry.is_verified) == (100, None, False)

    after_first = await service.recycle(entry.id, 40)
    assert (after_first.quantity, after_first.recycled_quantity) == (60, 40)

    with pytest.raises(OverRecycleError):
        await service.recycle(entry.id, 70)
    unchanged = await service.get(entry.id)
    assert (unchanged.quantity, unchanged.recycled_quantity) == (60, 40)

    verified = await service.verify(entry.id)
    assert verified.is_verified is True

    removed = await service.delete(entry.id)
    assert removed == verified
    with pytest.raises(EntryNotFoundError):
        await service.get(entry.id)
