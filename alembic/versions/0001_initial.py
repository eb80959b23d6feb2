"""initial schema

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 00:00:00.000000
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


user_role_enum = sa.Enum("teacher", "admin", name="user_role")
assessment_kind_enum = sa.Enum("QUIZ", "EXAM", "ASSIGNMENT", name="assessment_kind")
assessment_status_enum = sa.Enum("DRAFT", "PUBLISHED", name="assessment_status")
announcement_scope_enum = sa.Enum("SCHOOL", "CLASS", name="announcement_scope")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def _owner():
    return sa.Column("owner_id", sa.String(36), sa.ForeignKey("users.id"), nullable=False, index=True)


def upgrade() -> None:
    user_role_enum.create(op.get_bind(), checkfirst=True)
    assessment_kind_enum.create(op.get_bind(), checkfirst=True)
    assessment_status_enum.create(op.get_bind(), checkfirst=True)
    announcement_scope_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("full_name", sa.String(), nullable=False),
        sa.Column("email", sa.String(), nullable=False, unique=True, index=True),
        sa.Column("password_hash", sa.String(), nullable=True),
        sa.Column("role", user_role_enum, nullable=False),
        *_timestamps(),
    )

    op.create_table(
        "subjects",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("code", sa.String(10), nullable=False),
        _owner(),
        *_timestamps(),
        sa.UniqueConstraint("owner_id", "code", name="uq_subjects_owner_code"),
    )

    op.create_table(
        "classes",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("year_level", sa.Integer(), nullable=False),
        sa.Column("subject_id", sa.String(36), sa.ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "students",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("family_name", sa.String(), nullable=False),
        sa.Column("first_name", sa.String(), nullable=False),
        sa.Column("middle_name", sa.String(), nullable=True),
        sa.Column("year_level", sa.Integer(), nullable=False),
        sa.Column("external_id", sa.String(), nullable=True),
        _owner(),
        *_timestamps(),
        sa.UniqueConstraint("owner_id", "external_id", name="uq_students_owner_external_id"),
    )

    op.create_table(
        "enrollments",
        sa.Column("class_id", sa.String(36), sa.ForeignKey("classes.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("student_id", sa.String(36), sa.ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
        _owner(),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )

    op.create_table(
        "assessment_types",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("percentage_weight", sa.Float(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_default", sa.Boolean(), nullable=False),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "assessments",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("class_id", sa.String(36), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("assessment_type_id", sa.String(36), sa.ForeignKey("assessment_types.id"), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("type", assessment_kind_enum, nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("weight", sa.Float(), nullable=False),
        sa.Column("max_score", sa.Float(), nullable=False),
        sa.Column("status", assessment_status_enum, nullable=False),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "scores",
        sa.Column("assessment_id", sa.String(36), sa.ForeignKey("assessments.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("student_id", sa.String(36), sa.ForeignKey("students.id", ondelete="CASCADE"), primary_key=True),
        sa.Column("raw_score", sa.Float(), nullable=True),
        sa.Column("comment", sa.String(), nullable=True),
        sa.Column("last_updated_by", sa.String(36), nullable=False),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "announcements",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("scope", announcement_scope_enum, nullable=False),
        sa.Column("class_id", sa.String(36), sa.ForeignKey("classes.id", ondelete="CASCADE"), nullable=True),
        sa.Column("title", sa.String(), nullable=False),
        sa.Column("body", sa.String(), nullable=False),
        sa.Column("published_at", sa.DateTime(), nullable=True),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "subject_photos",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("subject_id", sa.String(36), sa.ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False, index=True),
        sa.Column("photo_url", sa.String(), nullable=False),
        sa.Column("caption", sa.String(), nullable=True),
        sa.Column("display_order", sa.Integer(), nullable=False),
        _owner(),
        *_timestamps(),
    )

    op.create_table(
        "audit_log",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("user_id", sa.String(36), nullable=False, index=True),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("entity", sa.String(64), nullable=False),
        sa.Column("entity_id", sa.String(36), nullable=False),
        sa.Column("meta", sa.JSON(), nullable=True),
        _owner(),
        sa.Column("created_at", sa.DateTime(), nullable=False, index=True),
    )


def downgrade() -> None:
    op.drop_table("audit_log")
    op.drop_table("subject_photos")
    op.drop_table("announcements")
    op.drop_table("scores")
    op.drop_table("assessments")
    op.drop_table("assessment_types")
    op.drop_table("enrollments")
    op.drop_table("students")
    op.drop_table("classes")
    op.drop_table("subjects")
    op.drop_table("users")

    announcement_scope_enum.drop(op.get_bind(), checkfirst=True)
    assessment_status_enum.drop(op.get_bind(), checkfirst=True)
    assessment_kind_enum.drop(op.get_bind(), checkfirst=True)
    user_role_enum.drop(op.get_bind(), checkfirst=True)
