"""DB-level exclusion constraint against double booking a room.

The application checks availability before writing, but the check and the
write are separate statements: two concurrent requests can both pass it.
This constraint makes the second write fail (SQLSTATE 23P01), which the
domain layer reports as a room conflict.

Revision ID: 002_no_room_overlap_constraint
Revises: 001_reservations
Create Date: 2026-10-19
"""

from __future__ import annotations

from pathlib import Path

from alembic import op

revision = "002_no_room_overlap_constraint"
down_revision = "001_reservations"
branch_labels = None
depends_on = None

_SQL_FILE = Path(__file__).resolve().parents[1] / "sql" / "002_no_room_overlap_constraint.sql"


def upgrade() -> None:
    op.execute(_SQL_FILE.read_text(encoding="utf-8"))


def downgrade() -> None:
    op.execute("ALTER TABLE reservations DROP CONSTRAINT IF EXISTS no_room_overlap")
    # btree_gist stays installed: other objects may depend on it.
