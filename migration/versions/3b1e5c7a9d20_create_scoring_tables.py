"""create projects, phases, tasks, workers and assignment tables

Revision ID: 3b1e5c7a9d20
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3b1e5c7a9d20"
down_revision = None
branch_labels = None
depends_on = None


def _schedule_columns() -> list[sa.Column]:
    return [
        sa.Column("start_datetime", sa.DateTime(), nullable=True),
        sa.Column("completion_datetime", sa.DateTime(), nullable=True),
        sa.Column("actual_completion_datetime", sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "workers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
    )

    op.create_table(
        "projects",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column(
            "manager_id",
            sa.String(),
            sa.ForeignKey("workers.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("status", sa.String(length=32), nullable=True),
        *_schedule_columns(),
        sa.Column("budget", sa.Float(), nullable=True),
    )
    op.create_index("idx_projects_manager", "projects", ["manager_id"])

    op.create_table(
        "phases",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        *_schedule_columns(),
    )
    op.create_index("idx_phases_project", "phases", ["project_id"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "phase_id",
            sa.String(),
            sa.ForeignKey("phases.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("priority", sa.String(length=32), nullable=True),
        sa.Column("status", sa.String(length=32), nullable=True),
        *_schedule_columns(),
    )
    op.create_index("idx_tasks_phase", "tasks", ["phase_id"])

    op.create_table(
        "task_workers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column("task_id", sa.String(), sa.ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False),
        sa.Column("worker_id", sa.String(), sa.ForeignKey("workers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=True),
    )
    op.create_index("idx_task_workers_task", "task_workers", ["task_id"])
    op.create_index("idx_task_workers_worker", "task_workers", ["worker_id"])

    op.create_table(
        "project_workers",
        sa.Column("id", sa.String(), primary_key=True),
        sa.Column(
            "project_id",
            sa.String(),
            sa.ForeignKey("projects.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("worker_id", sa.String(), sa.ForeignKey("workers.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=32), nullable=True),
    )
    op.create_index("idx_project_workers_project", "project_workers", ["project_id"])
    op.create_index("idx_project_workers_worker", "project_workers", ["worker_id"])


def downgrade() -> None:
    op.drop_index("idx_project_workers_worker", table_name="project_workers")
    op.drop_index("idx_project_workers_project", table_name="project_workers")
    op.drop_table("project_workers")
    op.drop_index("idx_task_workers_worker", table_name="task_workers")
    op.drop_index("idx_task_workers_task", table_name="task_workers")
    op.drop_table("task_workers")
    op.drop_index("idx_tasks_phase", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("idx_phases_project", table_name="phases")
    op.drop_table("phases")
    op.drop_index("idx_projects_manager", table_name="projects")
    op.drop_table("projects")
    op.drop_table("workers")
