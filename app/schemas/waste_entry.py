"""Waste Entry Schemas — Pydantic models for the HTTP boundary.

Invariants:
    - Wire keys are camelCase (wasteType, recycledQuantity, ...); Python attrs snake_case
    - Request models check SHAPE and TYPE only — domain rules live in core/validate_entry
    - Unknown request fields (e.g. isVerified) are ignored, never applied

Design Decisions:
    - to_payload()/from_entry() are the only converters between wire and core types
    - Strings are not stripped here: the validator decides what "empty" means
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from app.core.domain_types import EntryPayload, WasteEntry


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="ignore",
    )


class WasteEntryPayload(_CamelModel):
    """Create/update body."""
    waste_type: str
    quantity: float
    location: str
    recycled_quantity: float | None = None

    def to_payload(self) -> EntryPayload:
        return EntryPayload(
            waste_type=self.waste_type,
            quantity=self.quantity,
            location=self.location,
            recycled_quantity=self.recycled_quantity,
        )


class RecycleRequest(_CamelModel):
    """Recycle body — amount of outstanding quantity to convert."""
    recycled_quantity: float


class WasteEntryResponse(_CamelModel):
    """Public-facing entry."""
    id: str
    owner_identity: str
    waste_type: str
    quantity: float
    recycled_quantity: float | None
    location: str
    is_verified: bool
    created_at: datetime
    updated_at: datetime | None

    @classmethod
    def from_entry(cls, entry: WasteEntry) -> "WasteEntryResponse":
        return cls(
            id=entry.id,
            owner_identity=entry.owner_identity,
            waste_type=entry.waste_type,
            quantity=entry.quantity,
            recycled_quantity=entry.recycled_quantity,
            location=entry.location,
            is_verified=entry.is_verified,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class WasteEntryList(_CamelModel):
    entries: list[WasteEntryResponse]
