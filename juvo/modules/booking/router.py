"""Booking API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from juvo.modules.audit.schemas import AuditLogRead
from juvo.modules.booking.schemas import (
    BookingCancelRequest,
    BookingCompletionRead,
    BookingCreate,
    BookingRead,
    ConfirmPaymentRequest,
    CounterOfferRequest,
    PaymentConfirmationRead,
)
from juvo.modules.booking.service import BookingService, get_booking_service
from juvo.modules.identity.service import get_current_actor
from juvo.modules.settlement.schemas import EarningsRead, PaymentRead
from juvo.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post("", response_model=BookingRead, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Create booking in PENDING state (members only)."""
    booking = await service.create_booking(payload, current_actor)
    return BookingRead.model_validate(booking)


@router.get("/mine", response_model=Page[BookingRead])
async def list_my_bookings(
    pagination=Depends(get_pagination_params),
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> Page[BookingRead]:
    """List bookings for current user."""
    items, total = await service.list_my_bookings(current_actor, pagination.limit, pagination.offset)
    serialized = [BookingRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/available", response_model=Page[BookingRead])
async def list_available_bookings(
    pagination=Depends(get_pagination_params),
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> Page[BookingRead]:
    """List open requests workers can accept or counter."""
    items, total = await service.list_available_bookings(
        current_actor,
        pagination.limit,
        pagination.offset,
    )
    serialized = [BookingRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/{booking_id}", response_model=BookingRead)
async def get_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    booking = await service.get_booking(booking_id, current_actor)
    return BookingRead.model_validate(booking)


@router.get("/{booking_id}/history", response_model=list[AuditLogRead])
async def get_booking_history(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> list[AuditLogRead]:
    """Applied transitions of a booking, oldest first."""
    logs = await service.get_history(booking_id, current_actor)
    return [AuditLogRead.model_validate(log) for log in logs]


@router.post("/{booking_id}/accept", response_model=BookingRead)
async def accept_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Accept a pending request at the offered price (workers)."""
    booking = await service.accept_booking(booking_id, current_actor)
    return BookingRead.model_validate(booking)


@router.post("/{booking_id}/counter-offer", response_model=BookingRead)
async def counter_offer(
    booking_id: UUID,
    payload: CounterOfferRequest,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Propose a different price for a pending request (workers)."""
    booking = await service.counter_offer(booking_id, payload, current_actor)
    return BookingRead.model_validate(booking)


@router.post("/{booking_id}/accept-counter", response_model=BookingRead)
async def accept_counter_offer(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Accept the worker's counter-offer (booking member)."""
    booking = await service.accept_counter_offer(booking_id, current_actor)
    return BookingRead.model_validate(booking)


@router.post("/{booking_id}/start", response_model=BookingRead)
async def start_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Start an accepted job (assigned worker)."""
    booking = await service.start_booking(booking_id, current_actor)
    return BookingRead.model_validate(booking)


@router.post("/{booking_id}/complete", response_model=BookingCompletionRead)
async def complete_booking(
    booking_id: UUID,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingCompletionRead:
    """Complete a job and record its settlement (assigned worker)."""
    completion = await service.complete_booking(booking_id, current_actor)
    return BookingCompletionRead(
        booking=BookingRead.model_validate(completion.booking),
        payment=PaymentRead.model_validate(completion.payment),
        earnings=EarningsRead.model_validate(completion.earnings),
    )


@router.post("/{booking_id}/confirm-payment", response_model=PaymentConfirmationRead)
async def confirm_payment(
    booking_id: UUID,
    payload: ConfirmPaymentRequest,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> PaymentConfirmationRead:
    """Record a gateway payment for the booking (booking member)."""
    confirmation = await service.confirm_payment(booking_id, payload, current_actor)
    return PaymentConfirmationRead(
        booking=BookingRead.model_validate(confirmation.booking),
        payment=PaymentRead.model_validate(confirmation.payment),
    )


@router.post("/{booking_id}/cancel", response_model=BookingRead)
async def cancel_booking(
    booking_id: UUID,
    payload: BookingCancelRequest,
    service: BookingService = Depends(get_booking_service),
    current_actor=Depends(get_current_actor),
) -> BookingRead:
    """Cancel booking (member, or assigned worker once negotiated)."""
    booking = await service.cancel_booking(booking_id, payload, current_actor)
    return BookingRead.model_validate(booking)
