"""initial schema: users, schools, classrooms, students

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

Tables reference each other by id only. Referential checks happen in the
service layer, so there are no foreign keys. Unique constraints back the
duplicate checks done before every insert.
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "0001_initial_schema"
down_revision: str | Sequence[str] | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    """Create all tables."""
    user_role_enum = postgresql.ENUM(
        "superadmin",
        "admin",
        "readonly",
        name="user_role",
        create_type=False,
    )
    user_role_enum.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.Column("username", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column(
            "role",
            user_role_enum,
            server_default="readonly",
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "schools",
        sa.Column("id", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("phone", sa.String(length=30), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("established_year", sa.Integer(), nullable=False),
        sa.Column("website", sa.String(length=500), nullable=True),
        sa.Column("additional_info", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", name="uq_schools_name"),
        sa.UniqueConstraint("email", name="uq_schools_email"),
    )

    op.create_table(
        "classrooms",
        sa.Column("id", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("school_id", sa.String(length=32), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False),
        sa.Column(
            "resources",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("managed_by", sa.String(length=32), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name", "school_id", name="uq_classrooms_name_school_id"),
        sa.CheckConstraint("capacity >= 1", name="ck_classrooms_capacity_positive"),
    )
    op.create_index("ix_classrooms_school_id", "classrooms", ["school_id"])

    op.create_table(
        "students",
        sa.Column("id", sa.String(length=32), nullable=False),
        *_timestamps(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("dob", sa.Date(), nullable=False),
        sa.Column("school_id", sa.String(length=32), nullable=False),
        sa.Column("classroom_id", sa.String(length=32), nullable=False),
        sa.Column("enrollment_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "transfer_history",
            postgresql.JSONB(astext_type=sa.Text()),
            server_default=sa.text("'[]'::jsonb"),
            nullable=False,
        ),
        sa.Column("profile", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_students_school_id", "students", ["school_id"])
    op.create_index("ix_students_classroom_id", "students", ["classroom_id"])


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index("ix_students_classroom_id", table_name="students")
    op.drop_index("ix_students_school_id", table_name="students")
    op.drop_table("students")

    op.drop_index("ix_classrooms_school_id", table_name="classrooms")
    op.drop_table("classrooms")

    op.drop_table("schools")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")

    postgresql.ENUM(name="user_role").drop(op.get_bind(), checkfirst=True)
