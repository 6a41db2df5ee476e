"""ORM Models — SQLAlchemy declarative models for persisted entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - WasteEntryRecord is the only persisted entity

Design Decisions:
    - Models imported here so Base.metadata is complete for create_all and alembic
"""

from app.models.waste_entry import WasteEntryRecord  # noqa: F401
