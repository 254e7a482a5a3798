"""Initial schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20261019_0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


account_type_enum = sa.Enum("member", "helper", "chef", name="account_type_enum", native_enum=False)
booking_status_enum = sa.Enum(
    "pending",
    "counter_offered",
    "accepted",
    "paid",
    "in_progress",
    "completed",
    "cancelled",
    name="booking_status_enum",
    native_enum=False,
)
payment_status_enum = sa.Enum("pending", "paid", "failed", name="payment_status_enum", native_enum=False)
earnings_status_enum = sa.Enum("pending", "paid", "cancelled", name="earnings_status_enum", native_enum=False)


def _id_col() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _created_col() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def _updated_col() -> sa.Column:
    return sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    op.create_table(
        "users",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("username", sa.String(length=128), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("account_type", account_type_enum, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("profile_completed", sa.Boolean(), nullable=False),
        sa.UniqueConstraint("phone", name="uq_users_phone"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "catalog_items",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price_cents", sa.Integer(), nullable=False),
        sa.Column("provider_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("tags", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.ForeignKeyConstraint(["provider_id"], ["users.id"], name="fk_catalog_items_provider_id_users", ondelete="SET NULL"),
    )
    op.create_index("ix_catalog_items_provider_id", "catalog_items", ["provider_id"], unique=False)

    op.create_table(
        "bookings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("catalog_item_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("custom_title", sa.String(length=255), nullable=True),
        sa.Column("custom_description", sa.Text(), nullable=True),
        sa.Column("member_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("worker_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("location", sa.String(length=512), nullable=True),
        sa.Column("offered_price_cents", sa.Integer(), nullable=True),
        sa.Column("counter_offer_cents", sa.Integer(), nullable=True),
        sa.Column("agreed_price_cents", sa.Integer(), nullable=True),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", booking_status_enum, nullable=False),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancellation_reason", sa.String(length=512), nullable=True),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["catalog_item_id"], ["catalog_items.id"], name="fk_bookings_catalog_item_id_catalog_items", ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["member_id"], ["users.id"], name="fk_bookings_member_id_users", ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["worker_id"], ["users.id"], name="fk_bookings_worker_id_users", ondelete="RESTRICT"),
    )
    op.create_index("ix_bookings_member_id", "bookings", ["member_id"], unique=False)
    op.create_index("ix_bookings_worker_id", "bookings", ["worker_id"], unique=False)
    op.create_index("ix_bookings_status", "bookings", ["status"], unique=False)

    op.create_table(
        "schedule_slots",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("worker_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("is_available", sa.Boolean(), nullable=False),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.ForeignKeyConstraint(["worker_id"], ["users.id"], name="fk_schedule_slots_worker_id_users", ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], name="fk_schedule_slots_booking_id_bookings", ondelete="SET NULL"),
    )
    op.create_index("ix_schedule_slots_worker_id", "schedule_slots", ["worker_id"], unique=False)
    op.create_index("ix_schedule_slots_booking_id", "schedule_slots", ["booking_id"], unique=False)
    op.create_index("ix_schedule_slots_worker_id_date", "schedule_slots", ["worker_id", "date"], unique=False)

    op.create_table(
        "payments",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("provider", sa.String(length=32), nullable=False),
        sa.Column("transaction_id", sa.String(length=128), nullable=True),
        sa.Column("status", payment_status_enum, nullable=False),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], name="fk_payments_booking_id_bookings", ondelete="RESTRICT"),
    )
    op.create_index("ix_payments_booking_id", "payments", ["booking_id"], unique=False)

    op.create_table(
        "earnings",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("worker_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("booking_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("amount_cents", sa.Integer(), nullable=False),
        sa.Column("status", earnings_status_enum, nullable=False),
        sa.Column("payout_date", sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["worker_id"], ["users.id"], name="fk_earnings_worker_id_users", ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["booking_id"], ["bookings.id"], name="fk_earnings_booking_id_bookings", ondelete="RESTRICT"),
    )
    op.create_index("ix_earnings_worker_id", "earnings", ["worker_id"], unique=False)
    op.create_index("ix_earnings_booking_id", "earnings", ["booking_id"], unique=False)
    op.create_index("ix_earnings_status", "earnings", ["status"], unique=False)

    op.create_table(
        "audit_logs",
        _id_col(),
        _created_col(),
        _updated_col(),
        sa.Column("actor_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("action", sa.String(length=128), nullable=False),
        sa.Column("entity_type", sa.String(length=64), nullable=False),
        sa.Column("entity_id", sa.String(length=64), nullable=True),
        sa.Column("payload", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.ForeignKeyConstraint(["actor_id"], ["users.id"], name="fk_audit_logs_actor_id_users", ondelete="SET NULL"),
    )
    op.create_index("ix_audit_logs_actor_id", "audit_logs", ["actor_id"], unique=False)
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"], unique=False)
    op.create_index("ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_logs_entity", table_name="audit_logs")
    op.drop_index("ix_audit_logs_action", table_name="audit_logs")
    op.drop_index("ix_audit_logs_actor_id", table_name="audit_logs")
    op.drop_table("audit_logs")

    op.drop_index("ix_earnings_status", table_name="earnings")
    op.drop_index("ix_earnings_booking_id", table_name="earnings")
    op.drop_index("ix_earnings_worker_id", table_name="earnings")
    op.drop_table("earnings")

    op.drop_index("ix_payments_booking_id", table_name="payments")
    op.drop_table("payments")

    op.drop_index("ix_schedule_slots_worker_id_date", table_name="schedule_slots")
    op.drop_index("ix_schedule_slots_booking_id", table_name="schedule_slots")
    op.drop_index("ix_schedule_slots_worker_id", table_name="schedule_slots")
    op.drop_table("schedule_slots")

    op.drop_index("ix_bookings_status", table_name="bookings")
    op.drop_index("ix_bookings_worker_id", table_name="bookings")
    op.drop_index("ix_bookings_member_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_catalog_items_provider_id", table_name="catalog_items")
    op.drop_table("catalog_items")

    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
