"""Settlement ORM models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Integer, String
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from juvo.core.database import Base, BaseModelMixin
from juvo.core.enums import EarningsStatusEnum, PaymentStatusEnum


class Payment(BaseModelMixin, Base):
    """Money received for a booking. Append-only."""

    __tablename__ = "payments"

    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    provider: Mapped[str] = mapped_column(String(32), default="stripe", nullable=False)
    transaction_id: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[PaymentStatusEnum] = mapped_column(
        SAEnum(PaymentStatusEnum, name="payment_status_enum", native_enum=False),
        default=PaymentStatusEnum.PENDING,
        nullable=False,
    )
    details: Mapped[dict] = mapped_column(JSONB, default=dict, nullable=False)


class Earnings(BaseModelMixin, Base):
    """Amount owed to a worker for a completed booking."""

    __tablename__ = "earnings"

    worker_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    booking_id: Mapped[UUID] = mapped_column(
        ForeignKey("bookings.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    amount_cents: Mapped[int] = mapped_column(Integer, nullable=False)
    status: Mapped[EarningsStatusEnum] = mapped_column(
        SAEnum(EarningsStatusEnum, name="earnings_status_enum", native_enum=False),
        default=EarningsStatusEnum.PENDING,
        nullable=False,
        index=True,
    )
    payout_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
