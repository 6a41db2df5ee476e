"""Infrastructure Layer — storage, collaborators and cross-cutting concerns.

Invariants:
    - Implements the Protocols of core/repository_protocols.py
    - All storage failures mapped to StorageFailureError

Design Decisions:
    - One file per collaborator (clock, ids, identity, each store) for locality
"""
