"""Entry Validation — pure checks applied before a payload reaches the store.

Invariants:
    - Pure: no state, no IO, raises EntryValidationError on the FIRST violated rule
    - Field emptiness is checked before numeric range (deterministic precedence)
    - Non-finite numbers (nan, inf) are rejected alongside negatives

Design Decisions:
    - Raise instead of returning an error dict: the service has nothing to do
      with a bad payload except surface it (ADR: fail before any mutation)
"""

import math

from app.core.domain_types import EntryPayload
from app.core.errors import EntryValidationError


def validate_entry_payload(payload: EntryPayload) -> None:
    """Validate a create/update payload."""
    _require_text(payload.waste_type, "wasteType")
    _require_text(payload.location, "location")
    if payload.quantity is None:
        raise EntryValidationError("quantity is required", "quantity")
    _require_non_negative(payload.quantity, "quantity")
    if payload.recycled_quantity is not None:
        _require_non_negative(payload.recycled_quantity, "recycledQuantity")


def validate_recycle_amount(amount: float) -> None:
    """Recycle amounts must be non-negative; a negative one would grow quantity."""
    _require_non_negative(amount, "recycledQuantity")


def _require_text(value: str | None, field: str) -> None:
    if value is None or not value.strip():
        raise EntryValidationError(f"{field} cannot be empty", field)


def _require_non_negative(value: float, field: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise EntryValidationError(f"{field} must be a number", field)
    if not math.isfinite(value):
        raise EntryValidationError(f"{field} must be a finite number", field)
    if value < 0:
        raise EntryValidationError(
            f"{field} must be >= 0 (got {value})", field,
        )
