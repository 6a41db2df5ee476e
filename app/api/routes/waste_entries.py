"""Waste Entries — HTTP transport for the eight entry operations.

Invariants:
    - Routes contain no business logic: parse body, resolve caller, delegate to EntryService
    - Domain failures propagate as WasteLedgerError to the global handler (error_handlers.py)
    - Caller identity read from the configured header; anonymous identity when absent

Design Decisions:
    - get_runtime / get_entry_service as FastAPI dependencies: tests override
      get_runtime with in-memory fakes (ADR: DI over monkeypatching globals)
    - /verified declared before /{entry_id} so it is not captured as an id
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.config import get_settings
from app.core.domain_types import EntryId
from app.schemas.waste_entry import (
    RecycleRequest, WasteEntryList, WasteEntryPayload, WasteEntryResponse,
)
from app.services.entry_runtime import EntryRuntime
from app.services.entry_service import EntryService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/waste-entries", tags=["waste-entries"])


def get_runtime(request: Request) -> EntryRuntime:
    """Process-wide runtime built by the lifespan."""
    runtime = getattr(request.app.state, "runtime", None)
    if runtime is None:
        raise RuntimeError("Entry runtime not initialized")
    return runtime


def get_entry_service(
    request: Request, runtime: EntryRuntime = Depends(get_runtime),
) -> EntryService:
    """EntryService bound to the caller identified by the request."""
    caller = request.headers.get(get_settings().identity_header)
    return runtime.for_caller(caller)


@router.post(
    "", response_model=WasteEntryResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_waste_entry(
    body: WasteEntryPayload, service: EntryService = Depends(get_entry_service),
):
    """Log a new waste entry."""
    entry = await service.create(body.to_payload())
    return WasteEntryResponse.from_entry(entry)


@router.get("", response_model=WasteEntryList)
async def list_waste_entries(
    service: EntryService = Depends(get_entry_service),
):
    """All stored entries."""
    entries = await service.list_all()
    return WasteEntryList(
        entries=[WasteEntryResponse.from_entry(e) for e in entries],
    )


@router.get("/verified", response_model=WasteEntryList)
async def list_verified_waste_entries(
    service: EntryService = Depends(get_entry_service),
):
    """Only entries that have been verified."""
    entries = await service.list_verified()
    return WasteEntryList(
        entries=[WasteEntryResponse.from_entry(e) for e in entries],
    )


@router.get("/{entry_id}", response_model=WasteEntryResponse)
async def get_waste_entry(
    entry_id: str, service: EntryService = Depends(get_entry_service),
):
    entry = await service.get(EntryId(entry_id))
    return WasteEntryResponse.from_entry(entry)


@router.put("/{entry_id}", response_model=WasteEntryResponse)
async def update_waste_entry(
    entry_id: str,
    body: WasteEntryPayload,
    service: EntryService = Depends(get_entry_service),
):
    """Overwrite wasteType, quantity, location (and recycledQuantity if given)."""
    entry = await service.update(EntryId(entry_id), body.to_payload())
    return WasteEntryResponse.from_entry(entry)


@router.delete("/{entry_id}", response_model=WasteEntryResponse)
async def delete_waste_entry(
    entry_id: str, service: EntryService = Depends(get_entry_service),
):
    """Permanently delete an entry; responds with its last state."""
    entry = await service.delete(EntryId(entry_id))
    return WasteEntryResponse.from_entry(entry)


@router.post("/{entry_id}/verify", response_model=WasteEntryResponse)
async def verify_waste_entry(
    entry_id: str, service: EntryService = Depends(get_entry_service),
):
    entry = await service.verify(EntryId(entry_id))
    return WasteEntryResponse.from_entry(entry)


@router.post("/{entry_id}/recycle", response_model=WasteEntryResponse)
async def recycle_waste_entry(
    entry_id: str,
    body: RecycleRequest,
    service: EntryService = Depends(get_entry_service),
):
    """Convert part of the outstanding quantity into recycled quantity."""
    entry = await service.recycle(EntryId(entry_id), body.recycled_quantity)
    return WasteEntryResponse.from_entry(entry)
