"""API test fixtures — FastAPI client over an in-memory EntryRuntime.

Invariants:
    - get_runtime overridden: lifespan never runs under ASGITransport
    - Deterministic clock and ids so responses are predictable
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.routes.waste_entries import get_runtime
from app.infrastructure.memory_entry_store import InMemoryEntryStore
from app.main import app
from app.services.entry_runtime import EntryRuntime
from tests.fakes import SequentialIdGenerator, SteppingClock


@pytest.fixture
def runtime():
    return EntryRuntime(
        store=InMemoryEntryStore(),
        clock=SteppingClock(),
        id_generator=SequentialIdGenerator(),
    )


@pytest.fixture
async def client(runtime):
    app.dependency_overrides[get_runtime] = lambda: runtime
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.dependency_overrides.clear()
