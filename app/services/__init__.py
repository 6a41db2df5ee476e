"""Services Layer — entry operations and runtime wiring.

Invariants:
    - EntryService is the only component routes call into
    - Services orchestrate; decisions live in core/

Design Decisions:
    - Runtime (long-lived) split from service (per call) so identity stays call-scoped
"""
