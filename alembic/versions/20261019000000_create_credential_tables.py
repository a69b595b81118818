"""Create users, service_users, staff_access and membership_configs.

Revision ID: 20261019000000
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "20261019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONList = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="pending"),
        sa.Column("membership", sa.String(length=32), nullable=False, server_default="none"),
        sa.Column("page_access", JSONList, nullable=False, server_default="[]"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_username"), "users", ["username"], unique=True)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=True)

    op.create_table(
        "service_users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("username", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, server_default="service-standard"),
        sa.Column("department", sa.String(length=255), nullable=False, server_default=""),
        sa.Column("page_access", JSONList, nullable=False, server_default="[]"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("now()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
    )
    op.create_index(op.f("ix_service_users_username"), "service_users", ["username"], unique=True)

    op.create_table(
        "staff_access",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("service_user_id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("employee_id", sa.String(length=255), nullable=False),
        sa.Column("department", sa.String(length=255), nullable=False),
        sa.Column("scope", sa.String(length=64), nullable=False, server_default="laundry"),
        sa.ForeignKeyConstraint(["service_user_id"], ["service_users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("service_user_id"),
    )
    op.create_index(op.f("ix_staff_access_employee_id"), "staff_access", ["employee_id"], unique=True)

    op.create_table(
        "membership_configs",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("level", sa.String(length=32), nullable=False),
        sa.Column("pages", JSONList, nullable=False, server_default="[]"),
        sa.Column("monthly_price", sa.Float(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("level"),
    )


def downgrade() -> None:
    op.drop_table("membership_configs")
    op.drop_index(op.f("ix_staff_access_employee_id"), table_name="staff_access")
    op.drop_table("staff_access")
    op.drop_index(op.f("ix_service_users_username"), table_name="service_users")
    op.drop_table("service_users")
    op.drop_index(op.f("ix_users_email"), table_name="users")
    op.drop_index(op.f("ix_users_username"), table_name="users")
    op.drop_table("users")
