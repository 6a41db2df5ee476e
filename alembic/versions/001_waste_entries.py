"""Initial schema — waste_entries.

Revision ID: 001_waste_entries
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_waste_entries"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "waste_entries",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("owner_identity", sa.String(255), nullable=False),
        sa.Column("waste_type", sa.String(255), nullable=False),
        sa.Column("quantity", sa.Float, nullable=False),
        sa.Column("recycled_quantity", sa.Float, nullable=True),
        sa.Column("location", sa.String(500), nullable=False),
        sa.Column("is_verified", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_waste_entries_is_verified", "waste_entries", ["is_verified"])


def downgrade() -> None:
    op.drop_index("ix_waste_entries_is_verified", table_name="waste_entries")
    op.drop_table("waste_entries")
