"""Create analytics source tables

Revision ID: 3f1c9a2b7d10
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates jobs, pipeline_stages, applications, application_stage_history and
job_analytics. pipeline_stages carries an explicit is_terminal_hire_stage
flag so hires are not inferred from stage names.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f1c9a2b7d10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the analytics tables and their indexes."""
    op.create_table(
        "jobs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("posted_by", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index("jobs_status_idx", "jobs", ["status"])
    op.create_index("jobs_posted_by_idx", "jobs", ["posted_by"])
    op.create_index("jobs_is_active_idx", "jobs", ["is_active"])

    op.create_table(
        "pipeline_stages",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("order", sa.Integer(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_terminal_hire_stage", sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    op.create_table(
        "applications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("job_id", sa.Integer(), sa.ForeignKey("jobs.id"), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False, server_default="submitted"),
        sa.Column("applied_at", sa.DateTime(timezone=True), nullable=True, server_default=sa.text("now()")),
        sa.Column("current_stage", sa.Integer(), sa.ForeignKey("pipeline_stages.id"), nullable=True),
        sa.Column("stage_changed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("source", sa.String(length=50), nullable=True, server_default="public_apply"),
    )
    op.create_index("applications_job_id_idx", "applications", ["job_id"])
    op.create_index("applications_current_stage_idx", "applications", ["current_stage"])
    op.create_index("applications_status_idx", "applications", ["status"])

    op.create_table(
        "application_stage_history",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "application_id",
            sa.Integer(),
            sa.ForeignKey("applications.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("from_stage", sa.Integer(), sa.ForeignKey("pipeline_stages.id"), nullable=True),
        sa.Column("to_stage", sa.Integer(), sa.ForeignKey("pipeline_stages.id"), nullable=False),
        sa.Column("changed_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.text("now()")),
    )
    op.create_index(
        "application_stage_history_application_idx",
        "application_stage_history",
        ["application_id", "changed_at"],
    )

    op.create_table(
        "job_analytics",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "job_id",
            sa.Integer(),
            sa.ForeignKey("jobs.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("views", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("apply_clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("conversion_rate", sa.Numeric(5, 2), nullable=True),
    )


def downgrade() -> None:
    """Drop the analytics tables."""
    op.drop_table("job_analytics")
    op.drop_index("application_stage_history_application_idx", table_name="application_stage_history")
    op.drop_table("application_stage_history")
    op.drop_index("applications_status_idx", table_name="applications")
    op.drop_index("applications_current_stage_idx", table_name="applications")
    op.drop_index("applications_job_id_idx", table_name="applications")
    op.drop_table("applications")
    op.drop_table("pipeline_stages")
    op.drop_index("jobs_is_active_idx", table_name="jobs")
    op.drop_index("jobs_posted_by_idx", table_name="jobs")
    op.drop_index("jobs_status_idx", table_name="jobs")
    op.drop_table("jobs")
