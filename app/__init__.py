"""Waste Ledger Application Package — persistent store of waste-disposal entries.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Empty __init__.py: explicit imports only, no star exports
"""
