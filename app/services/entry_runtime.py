"""Entry Runtime — process-wide wiring of store, collaborators and the write lock.

Invariants:
    - Exactly one EntryRuntime per process (built in the FastAPI lifespan)
    - write_lock is shared by every EntryService built from this runtime, so
      read-modify-write sequences never interleave across requests
    - Identity is NOT part of the runtime: it is per call (see for_caller)

Design Decisions:
    - Explicit owned object on app.state over module-level singletons
      (ADR: no ambient store access from arbitrary code)
    - asyncio.Lock over threading.Lock: all callers share one event loop
"""

import asyncio
import logging
from dataclasses import dataclass, field

from app.config import Settings
from app.core.repository_protocols import Clock, EntryStore, IdGenerator
from app.infrastructure.clock import SystemClock
from app.infrastructure.database import DatabaseSessionManager
from app.infrastructure.id_generator import UuidIdGenerator
from app.infrastructure.identity import StaticIdentityProvider
from app.infrastructure.memory_entry_store import InMemoryEntryStore
from app.infrastructure.sql_entry_store import SqlEntryStore
from app.services.entry_service import EntryService

logger = logging.getLogger(__name__)


@dataclass
class EntryRuntime:
    """Long-lived collaborators shared by all requests."""
    store: EntryStore
    clock: Clock
    id_generator: IdGenerator
    anonymous_identity: str = "anonymous"
    write_lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    db_manager: DatabaseSessionManager | None = None

    def for_caller(self, identity: str | None) -> EntryService:
        """Build the service for one call, bound to the caller's identity."""
        return EntryService(
            store=self.store,
            clock=self.clock,
            identity=StaticIdentityProvider(identity, self.anonymous_identity),
            id_generator=self.id_generator,
            write_lock=self.write_lock,
        )

    async def close(self) -> None:
        if self.db_manager is not None:
            await self.db_manager.dispose()


async def build_runtime(settings: Settings) -> EntryRuntime:
    """Create the runtime for the configured storage backend."""
    if settings.storage_backend == "memory":
        logger.info("Using in-memory entry store")
        return EntryRuntime(
            store=InMemoryEntryStore(capacity=settings.memory_store_capacity),
            clock=SystemClock(),
            id_generator=UuidIdGenerator(),
            anonymous_identity=settings.anonymous_identity,
        )

    manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Using SQL entry store")
    return EntryRuntime(
        store=SqlEntryStore(manager),
        clock=SystemClock(),
        id_generator=UuidIdGenerator(),
        anonymous_identity=settings.anonymous_identity,
        db_manager=manager,
    )
