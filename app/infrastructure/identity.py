"""Caller Identity — resolves the identity recorded as an entry's owner.

Invariants:
    - current() never returns an empty identity (falls back to the anonymous one)
    - Identity is fixed for the lifetime of one provider (one request)

Design Decisions:
    - Header-based resolution lives in the route layer; this provider only holds
      the resolved value, so the service never sees transport details
"""

from app.core.domain_types import OwnerIdentity


class StaticIdentityProvider:
    """Identity provider bound to one caller for the duration of a call."""

    def __init__(self, identity: str | None, anonymous: str = "anonymous"):
        resolved = (identity or "").strip()
        self._identity = OwnerIdentity(resolved or anonymous)

    def current(self) -> OwnerIdentity:
        return self._identity
