"""Record who created an assignment (SQLite-safe, idempotent)."""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202602270003_assigned_by"
down_revision = "202602270002_coworker_is_active"
branch_labels = None
depends_on = None


def _column_names(table_name: str) -> set[str]:
    inspector = sa.inspect(op.get_bind())
    return {column["name"] for column in inspector.get_columns(table_name)}


def upgrade():
    if "assigned_by" in _column_names("assignment"):
        print("[INFO] Skipping assignment.assigned_by (already exists).")
        return
    with op.batch_alter_table("assignment") as batch_op:
        batch_op.add_column(sa.Column("assigned_by", sa.Text(), nullable=False, server_default=""))
    print("[INFO] Added assignment.assigned_by.")


def downgrade():
    if "assigned_by" not in _column_names("assignment"):
        return
    with op.batch_alter_table("assignment") as batch_op:
        batch_op.drop_column("assigned_by")
