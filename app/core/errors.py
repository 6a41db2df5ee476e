"""Error Hierarchy — typed, categorized exceptions for all Waste Ledger failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable and raised before any store write
    - Storage errors (500-level) surface the medium's rejection, never retried here
    - to_response() produces the REST envelope; messages name the offending id or rule

Design Decisions:
    - Single hierarchy with WasteLedgerError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    entry_id: str | None = None
    operation: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class WasteLedgerError(Exception):
    """Base exception for all Waste Ledger errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    @property
    def recoverable(self) -> bool:
        return self.severity in (ErrorSeverity.INFO, ErrorSeverity.WARNING)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entry_id": self.context.entry_id,
                    "operation": self.context.operation,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class EntryValidationError(WasteLedgerError):
    """Entry payload or recycle amount violates a domain rule."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.field = field


class EntryNotFoundError(WasteLedgerError):
    """Referenced waste entry does not exist."""
    def __init__(self, entry_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entry_id = entry_id
        super().__init__(
            f"Waste Entry with ID={entry_id} not found.",
            "ENTRY_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, ctx, 404,
        )
        self.entry_id = entry_id


class OverRecycleError(WasteLedgerError):
    """Recycled amount exceeds the outstanding quantity of the entry."""
    def __init__(
        self,
        entry_id: str,
        requested: float,
        outstanding: float,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entry_id = entry_id
        super().__init__(
            f"Recycled quantity {requested} exceeds available quantity "
            f"{outstanding} for Waste Entry with ID={entry_id}.",
            "OVER_RECYCLE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.entry_id = entry_id
        self.requested = requested
        self.outstanding = outstanding


class IdentityCollisionError(WasteLedgerError):
    """Id generator returned an id already present in the store. Retry the request."""
    def __init__(self, entry_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entry_id = entry_id
        super().__init__(
            f"Generated ID={entry_id} already exists; retry the request.",
            "IDENTITY_COLLISION", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, ctx, 409,
        )
        self.entry_id = entry_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailureError(WasteLedgerError):
    """Underlying storage medium rejected a read or write."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Storage {operation} failed: {message}",
            "STORAGE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation
