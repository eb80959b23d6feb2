"""grading periods

Revision ID: 0002_grading_periods
Revises: 0001_initial
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0002_grading_periods"
down_revision = "0001_initial"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "grading_periods",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("school_year", sa.String(9), nullable=False, index=True),
        sa.Column("period_number", sa.Integer(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=True),
        sa.Column("end_date", sa.Date(), nullable=True),
        sa.Column("is_current", sa.Boolean(), nullable=False),
        sa.Column("owner_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.UniqueConstraint("owner_id", "school_year", "period_number", name="uq_grading_periods_owner_year_number"),
    )

    with op.batch_alter_table("assessment_types") as batch_op:
        batch_op.add_column(sa.Column("grading_period_id", sa.String(36), nullable=True))
        batch_op.create_index("ix_assessment_types_grading_period_id", ["grading_period_id"])
        batch_op.create_foreign_key(
            "fk_assessment_types_grading_period_id",
            "grading_periods",
            ["grading_period_id"],
            ["id"],
            ondelete="CASCADE",
        )


def downgrade() -> None:
    with op.batch_alter_table("assessment_types") as batch_op:
        batch_op.drop_constraint("fk_assessment_types_grading_period_id", type_="foreignkey")
        batch_op.drop_index("ix_assessment_types_grading_period_id")
        batch_op.drop_column("grading_period_id")

    op.drop_table("grading_periods")
