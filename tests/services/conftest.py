"""Service test fixtures — EntryService over an in-memory store with deterministic fakes.

Invariants:
    - Every test gets a fresh store, a stepping clock and sequential ids
    - `service` acts as alice; `service_for` builds services for other callers on the same store
"""

import asyncio

import pytest

from app.infrastructure.memory_entry_store import InMemoryEntryStore
from app.services.entry_service import EntryService
from tests.fakes import FixedIdentity, SequentialIdGenerator, SteppingClock


@pytest.fixture
def store():
    return InMemoryEntryStore()


@pytest.fixture
def clock():
    return SteppingClock()


@pytest.fixture
def ids():
    return SequentialIdGenerator()


@pytest.fixture
def write_lock():
    return asyncio.Lock()


@pytest.fixture
def service_for(store, clock, ids, write_lock):
    def _build(identity: str = "alice") -> EntryService:
        return EntryService(
            store=store, clock=clock, identity=FixedIdentity(identity),
            id_generator=ids, write_lock=write_lock,
        )
    return _build


@pytest.fixture
def service(service_for):
    return service_for("alice")
