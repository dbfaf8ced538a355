"""Users, venues, bookings and payments.

Revision ID: 0001
Revises:
Create Date: 2024-05-20
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

user_role = sa.Enum("ADMIN", "OWNER", "PLAYER", name="userrole")
user_status = sa.Enum("ACTIVE", "SUSPENDED", name="userstatus")
approval_status = sa.Enum("PENDING", "APPROVED", "REJECTED", name="approvalstatus")
booking_status = sa.Enum("PENDING", "CONFIRMED", "CANCELLED", name="bookingstatus")
payment_status = sa.Enum("PENDING", "PAID", name="paymentstatus")
payment_method = sa.Enum(
    "CASH", "JAZZCASH", "EASYPAISA", "BANK_TRANSFER", name="paymentmethod"
)


def _timestamps() -> list[sa.Column]:
    return [
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
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(length=320), nullable=False, unique=True),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=120), nullable=False),
        sa.Column("last_name", sa.String(length=120), nullable=False),
        sa.Column("phone_number", sa.String(length=32)),
        sa.Column("role", user_role, nullable=False),
        sa.Column("status", user_status, nullable=False),
        sa.Column("approval_status", approval_status, nullable=False),
        sa.Column("rejection_reason", sa.String(length=1024)),
        *_timestamps(),
    )

    op.create_table(
        "venues",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("address", sa.String(length=512)),
        sa.Column("sport_type", sa.String(length=64)),
        sa.Column("venue_type", sa.String(length=64)),
        sa.Column("description", sa.Text()),
        sa.Column("facilities", sa.JSON(), nullable=False),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=False),
        sa.Column("availability", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_venues_owner_id", "venues", ["owner_id"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "venue_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("venues.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "booked_by",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("booking_date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(length=32), nullable=False),
        sa.Column("duration_hours", sa.Integer(), nullable=False),
        sa.Column("price_per_hour", sa.Numeric(10, 2), nullable=False),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", booking_status, nullable=False),
        sa.Column("payment_status", payment_status, nullable=False),
        sa.Column("rejection_reason", sa.String(length=1024)),
        *_timestamps(),
    )
    op.create_index("ix_bookings_venue_id", "bookings", ["venue_id"])
    op.create_index(
        "ux_bookings_active_slot",
        "bookings",
        ["venue_id", "booking_date", "time"],
        unique=True,
        sqlite_where=sa.text("status != 'CANCELLED'"),
        postgresql_where=sa.text("status != 'CANCELLED'"),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column(
            "owner_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "venue_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("venues.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "booking_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("bookings.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column(
            "player_id",
            sa.Uuid(as_uuid=True),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("amount", sa.Numeric(12, 2), nullable=False),
        sa.Column("status", payment_status, nullable=False),
        sa.Column("payment_method", payment_method, nullable=False),
        sa.Column("transaction_id", sa.String(length=128)),
        sa.Column("screenshot_url", sa.String(length=1024)),
        sa.Column("slot_date", sa.Date(), nullable=False),
        sa.Column("slot_time", sa.String(length=32), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_payments_owner_id", "payments", ["owner_id"])


def downgrade() -> None:
    op.drop_index("ix_payments_owner_id", table_name="payments")
    op.drop_table("payments")
    op.drop_index("ux_bookings_active_slot", table_name="bookings")
    op.drop_index("ix_bookings_venue_id", table_name="bookings")
    op.drop_table("bookings")
    op.drop_index("ix_venues_owner_id", table_name="venues")
    op.drop_table("venues")
    op.drop_table("users")
    bind = op.get_bind()
    for enum_type in (
        payment_method,
        payment_status,
        booking_status,
        approval_status,
        user_status,
        user_role,
    ):
        enum_type.drop(bind, checkfirst=True)
