"""Add the is_active flag to coworkers (SQLite-safe, idempotent)."""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202602270002_coworker_is_active"
down_revision = "202602270001_capacity_schema"
branch_labels = None
depends_on = None


def _column_names(table_name: str) -> set[str]:
    inspector = sa.inspect(op.get_bind())
    return {column["name"] for column in inspector.get_columns(table_name)}


def upgrade():
    if "is_active" in _column_names("coworker"):
        print("[INFO] Skipping coworker.is_active (already exists).")
        return
    with op.batch_alter_table("coworker") as batch_op:
        batch_op.add_column(
            sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true())
        )
    print("[INFO] Added coworker.is_active.")


def downgrade():
    if "is_active" not in _column_names("coworker"):
        return
    with op.batch_alter_table("coworker") as batch_op:
        batch_op.drop_column("is_active")
