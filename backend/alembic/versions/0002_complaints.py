"""Complaints raised by players and owners.

Revision ID: 0002
Revises: 0001
Create Date: 2024-06-03
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None

complaint_type = sa.Enum(
    "PAYMENT_ISSUE",
    "BEHAVIOR_ISSUE",
    "NO_SHOW",
    "PROPERTY_DAMAGE",
    "RULE_VIOLATION",
    "OTHER",
    name="complainttype",
)
complaint_status = sa.Enum("PENDING", "RESOLVED", name="complaintstatus")
# created by 0001
user_role = postgresql.ENUM(
    "ADMIN", "OWNER", "PLAYER", name="userrole", create_type=False
)


def upgrade() -> None:
    op.create_table(
        "complaints",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "filed_by",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("filer_role", user_role, nullable=False),
        sa.Column(
            "venue_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("venues.id", ondelete="SET NULL"),
        ),
        sa.Column(
            "against_user_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="SET NULL"),
        ),
        sa.Column("against_name", sa.String(length=255)),
        sa.Column("complaint_type", complaint_type, nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("status", complaint_status, nullable=False),
        sa.Column("admin_note", sa.Text()),
        sa.Column(
            "reviewed_by_admin",
            sa.Boolean(),
            server_default=sa.false(),
            nullable=False,
        ),
        sa.Column("resolved_at", sa.DateTime(timezone=True)),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )
    op.create_index("ix_complaints_filed_by", "complaints", ["filed_by"])


def downgrade() -> None:
    op.drop_index("ix_complaints_filed_by", table_name="complaints")
    op.drop_table("complaints")
    bind = op.get_bind()
    for enum_type in (complaint_status, complaint_type):
        enum_type.drop(bind, checkfirst=True)
