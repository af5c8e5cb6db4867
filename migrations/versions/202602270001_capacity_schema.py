"""Create coworker, project, task and assignment tables (idempotent)."""
from __future__ import annotations
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "202602270001_capacity_schema"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing = set(inspector.get_table_names())

    if "coworker" not in existing:
        op.create_table(
            "coworker",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("capacity", sa.Float(), nullable=False, server_default="0"),
            sa.PrimaryKeyConstraint("id"),
        )
        print("[INFO] Created coworker table.")

    if "project" not in existing:
        op.create_table(
            "project",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.PrimaryKeyConstraint("id"),
        )
        print("[INFO] Created project table.")

    if "task" not in existing:
        op.create_table(
            "task",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.Text(), nullable=False),
            sa.Column("project_id", sa.Integer(), nullable=False),
            sa.Column("priority", sa.String(length=50), nullable=False, server_default="Normal"),
            sa.Column("status", sa.String(length=50), nullable=False, server_default="Not started"),
            sa.Column("estimated_hours", sa.Float(), nullable=False, server_default="0"),
            sa.Column("weekly_effort", sa.Float(), nullable=False, server_default="0"),
            sa.Column("added", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column("completed", sa.DateTime(), nullable=True),
            sa.Column("note", sa.Text(), nullable=False, server_default=""),
            sa.ForeignKeyConstraint(
                ["project_id"], ["project.id"], name="fk_task_project_id", ondelete="CASCADE"
            ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_task_project_id", "task", ["project_id"])
        print("[INFO] Created task table.")

    if "assignment" not in existing:
        op.create_table(
            "assignment",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("coworker_id", sa.Integer(), nullable=False),
            sa.Column("task_id", sa.Integer(), nullable=False),
            sa.Column("hours_assigned", sa.Float(), nullable=False, server_default="0"),
            sa.Column("assigned_date", sa.DateTime(), nullable=False, server_default=sa.func.now()),
            sa.Column("note", sa.Text(), nullable=False, server_default=""),
            sa.ForeignKeyConstraint(
                ["coworker_id"], ["coworker.id"], name="fk_assignment_coworker_id", ondelete="CASCADE"
            ),
            sa.ForeignKeyConstraint(
                ["task_id"], ["task.id"], name="fk_assignment_task_id", ondelete="CASCADE"
            ),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_assignment_coworker_id", "assignment", ["coworker_id"])
        op.create_index("ix_assignment_task_id", "assignment", ["task_id"])
        print("[INFO] Created assignment table.")


def downgrade():
    conn = op.get_bind()
    inspector = sa.inspect(conn)
    existing = set(inspector.get_table_names())

    if "assignment" in existing:
        op.drop_index("ix_assignment_task_id", table_name="assignment")
        op.drop_index("ix_assignment_coworker_id", table_name="assignment")
        op.drop_table("assignment")
    if "task" in existing:
        op.drop_index("ix_task_project_id", table_name="task")
        op.drop_table("task")
    if "project" in existing:
        op.drop_table("project")
    if "coworker" in existing:
        op.drop_table("coworker")
