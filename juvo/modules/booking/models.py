"""Booking ORM models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum as SAEnum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from juvo.core.database import Base, BaseModelMixin
from juvo.core.enums import BookingStatusEnum


class Booking(BaseModelMixin, Base):
    """Service request negotiated between a member and a worker."""

    __tablename__ = "bookings"

    catalog_item_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("catalog_items.id", ondelete="SET NULL"),
        nullable=True,
    )
    custom_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    custom_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    member_id: Mapped[UUID] = mapped_column(ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    worker_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("users.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
    )

    location: Mapped[str | None] = mapped_column(String(512), nullable=True)
    offered_price_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    counter_offer_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    agreed_price_cents: Mapped[int | None] = mapped_column(Integer, nullable=True)
    scheduled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    status: Mapped[BookingStatusEnum] = mapped_column(
        SAEnum(BookingStatusEnum, name="booking_status_enum", native_enum=False),
        default=BookingStatusEnum.PENDING,
        nullable=False,
        index=True,
    )
    accepted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancelled_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    cancellation_reason: Mapped[str | None] = mapped_column(String(512), nullable=True)

    # Bumped on every UPDATE; a concurrent writer that read an older version
    # gets StaleDataError at flush.
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}
