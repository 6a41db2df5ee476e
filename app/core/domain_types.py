"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EntryId, OwnerIdentity wrap str — never use a bare str for identity in domain logic
    - WasteEntry is frozen: every mutation produces a new instance (whole-record replace)
    - recycled_quantity / updated_at use None for "absent"; read sites go through
      recycled_or_zero / has_been_updated rather than truth-testing the raw field

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - Frozen dataclass over ORM model in core: core never imports SQLAlchemy
      (ADR: functional core, imperative shell)
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EntryId = NewType("EntryId", str)
OwnerIdentity = NewType("OwnerIdentity", str)


# ─── Value Types ─────────────────────────────────────────────────

Quantity = NewType("Quantity", float)   # >= 0, finite


# ─── Enums ───────────────────────────────────────────────────────

class EntryOperation(str, Enum):
    """The eight operations of the entry surface — used for logging and error context."""
    CREATE = "create"
    GET = "get"
    LIST_ALL = "list_all"
    UPDATE = "update"
    DELETE = "delete"
    VERIFY = "verify"
    LIST_VERIFIED = "list_verified"
    RECYCLE = "recycle"


# ─── Records ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class EntryPayload:
    """Caller-supplied fields for create/update. quantity=None means missing."""
    waste_type: str
    quantity: float | None
    location: str
    recycled_quantity: float | None = None


@dataclass(frozen=True)
class WasteEntry:
    """A single logged waste-disposal record."""
    id: EntryId
    owner_identity: OwnerIdentity
    waste_type: str
    quantity: Quantity
    recycled_quantity: Quantity | None
    location: str
    is_verified: bool
    created_at: datetime
    updated_at: datetime | None

    @property
    def recycled_or_zero(self) -> float:
        return self.recycled_quantity if self.recycled_quantity is not None else 0.0

    @property
    def has_been_updated(self) -> bool:
        return self.updated_at is not None
