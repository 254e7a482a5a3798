"""Booking schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from juvo.core.enums import BookingStatusEnum
from juvo.modules.settlement.schemas import EarningsRead, PaymentRead


class BookingCreate(BaseModel):
    """Create booking request (catalog item or custom request)."""

    catalog_item_id: UUID | None = None
    custom_title: str | None = Field(default=None, max_length=255)
    custom_description: str | None = None
    location: str | None = Field(default=None, max_length=512)
    # Price positivity is checked in BookingService so the error carries its code.
    offered_price_cents: int | None = None
    scheduled_at: datetime | None = None


class CounterOfferRequest(BaseModel):
    """Worker counter-offer request."""

    counter_offer_cents: int | None = None


class ConfirmPaymentRequest(BaseModel):
    """Gateway payment result reported by the member."""

    transaction_id: str | None = Field(default=None, max_length=128)
    amount_cents: int | None = Field(default=None, gt=0)
    provider: str | None = Field(default=None, min_length=1, max_length=32)


class BookingCancelRequest(BaseModel):
    """Cancel booking request."""

    reason: str | None = Field(default=None, max_length=512)


class BookingRead(BaseModel):
    """Booking response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    catalog_item_id: UUID | None
    custom_title: str | None
    custom_description: str | None
    member_id: UUID
    worker_id: UUID | None
    location: str | None
    offered_price_cents: int | None
    counter_offer_cents: int | None
    agreed_price_cents: int | None
    scheduled_at: datetime | None
    status: BookingStatusEnum
    accepted_at: datetime | None
    completed_at: datetime | None
    cancelled_at: datetime | None
    cancellation_reason: str | None
    created_at: datetime
    updated_at: datetime


class BookingCompletionRead(BaseModel):
    """Completed booking with the settlement it produced."""

    booking: BookingRead
    payment: PaymentRead
    earnings: EarningsRead


class PaymentConfirmationRead(BaseModel):
    """Paid booking with the recorded payment."""

    booking: BookingRead
    payment: PaymentRead
