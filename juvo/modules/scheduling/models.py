"""Scheduling ORM models."""

from __future__ import annotations

import datetime as dt
from uuid import UUID

from sqlalchemy import Boolean, Date, ForeignKey, Index, Time
from sqlalchemy.orm import Mapped, mapped_column

from juvo.core.database import Base, BaseModelMixin


class ScheduleSlot(BaseModelMixin, Base):
    """Worker calendar window, busy while linked to an active booking."""

    __tablename__ = "schedule_slots"
    __table_args__ = (Index("ix_schedule_slots_worker_id_date", "worker_id", "date"),)

    worker_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    start_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    end_time: Mapped[dt.time] = mapped_column(Time, nullable=False)
    is_available: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    booking_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
