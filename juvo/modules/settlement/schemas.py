"""Settlement schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from juvo.core.enums import EarningsStatusEnum, PaymentStatusEnum


class PaymentRead(BaseModel):
    """Payment response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    booking_id: UUID
    amount_cents: int
    provider: str
    transaction_id: str | None
    status: PaymentStatusEnum
    details: dict
    created_at: datetime


class EarningsRead(BaseModel):
    """Earnings response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    worker_id: UUID
    booking_id: UUID
    amount_cents: int
    status: EarningsStatusEnum
    payout_date: datetime | None
    created_at: datetime


class EarningsSummary(BaseModel):
    """Worker earnings totals."""

    pending_cents: int
    paid_cents: int
