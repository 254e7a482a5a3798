"""Booking business logic layer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.config import get_settings
from juvo.core.database import get_db_session
from juvo.core.enums import BookingStatusEnum, BookingTransitionEnum
from juvo.core.metrics import record_booking_transition
from juvo.modules.audit.models import AuditLog
from juvo.modules.audit.repository import AuditRepository
from juvo.modules.booking.models import Booking
from juvo.modules.booking.repository import OPEN_STATUSES, BookingRepository
from juvo.modules.booking.schemas import (
    BookingCancelRequest,
    BookingCreate,
    ConfirmPaymentRequest,
    CounterOfferRequest,
)
from juvo.modules.booking.transitions import guard_transition, is_owner
from juvo.modules.catalog.repository import CatalogRepository
from juvo.modules.catalog.service import CatalogService
from juvo.modules.identity.actors import Actor, ActorKind
from juvo.modules.scheduling.repository import SchedulingRepository
from juvo.modules.scheduling.service import ScheduleLedger, build_schedule_ledger
from juvo.modules.settlement.models import Earnings, Payment
from juvo.modules.settlement.repository import SettlementRepository
from juvo.modules.settlement.service import (
    SettlementRecorder,
    build_settlement_recorder,
    settlement_amount,
)
from juvo.shared.exceptions import (
    ForbiddenException,
    InvalidInputException,
    NotFoundException,
    PreconditionFailedException,
    ScheduleConflictException,
)
from juvo.shared.utils import ensure_utc, utc_now

logger = logging.getLogger(__name__)

# Slots stay reserved only while the booking is in one of these states.
SLOT_HOLDING_STATUSES = frozenset({BookingStatusEnum.ACCEPTED, BookingStatusEnum.IN_PROGRESS})


@dataclass(slots=True)
class BookingCompletion:
    booking: Booking
    payment: Payment
    earnings: Earnings


@dataclass(slots=True)
class PaymentConfirmation:
    booking: Booking
    payment: Payment


class BookingService:
    """Booking state machine: negotiation, execution and settlement.

    Every public transition runs inside the caller's request transaction:
    the booking row is locked first, all guards run before the first write,
    and dependent writes (schedule slot, settlement records) share the same
    session, so a failure anywhere rolls the whole transition back.
    """

    def __init__(
        self,
        booking_repository: BookingRepository,
        schedule_ledger: ScheduleLedger,
        settlement_recorder: SettlementRecorder,
        catalog_service: CatalogService,
        audit_repository: AuditRepository,
        *,
        confirm_payment_requires_completion: bool = False,
        default_payment_provider: str = "razorpay",
    ) -> None:
        self.booking_repository = booking_repository
        self.schedule_ledger = schedule_ledger
        self.settlement_recorder = settlement_recorder
        self.catalog_service = catalog_service
        self.audit_repository = audit_repository
        self.confirm_payment_requires_completion = confirm_payment_requires_completion
        self.default_payment_provider = default_payment_provider

    async def _load_for_update(self, booking_id: UUID) -> Booking:
        booking = await self.booking_repository.get_booking_for_update(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        return booking

    async def _record_transition(
        self,
        booking: Booking,
        actor: Actor,
        transition: BookingTransitionEnum,
        from_status: BookingStatusEnum,
        **details,
    ) -> None:
        await self.audit_repository.create_audit_log(
            actor_id=actor.id,
            action=f"booking.{transition.value}",
            entity_type="booking",
            entity_id=str(booking.id),
            payload={
                "from_status": str(from_status),
                "to_status": str(booking.status),
                **details,
            },
        )
        record_booking_transition(transition.value)
        logger.info(
            "Booking %s %s -> %s by %s %s",
            booking.id,
            from_status,
            booking.status,
            actor.kind,
            actor.id,
        )

    async def _release_slot(self, booking: Booking) -> None:
        if booking.scheduled_at is None or booking.worker_id is None:
            return
        on_date, _, _ = self.schedule_ledger.slot_window(booking.scheduled_at)
        await self.schedule_ledger.release(booking.worker_id, on_date, booking.id)

    async def create_booking(self, payload: BookingCreate, actor: Actor) -> Booking:
        """Create a pending booking for a catalog item or a custom request."""
        if actor.kind != ActorKind.MEMBER:
            raise ForbiddenException("Only members can create bookings", code="only_members")

        custom_title = payload.custom_title.strip() if payload.custom_title else None
        has_catalog = payload.catalog_item_id is not None
        if has_catalog == bool(custom_title):
            raise InvalidInputException(
                "Provide either a catalog service or a custom request title, not both",
                code="service_or_custom_required",
            )

        worker_id: UUID | None = None
        offered_price_cents = payload.offered_price_cents
        if has_catalog:
            entry = await self.catalog_service.resolve(payload.catalog_item_id)
            worker_id = entry.owner_id
            if offered_price_cents is None:
                offered_price_cents = entry.price_cents

        if offered_price_cents is None or offered_price_cents <= 0:
            raise InvalidInputException("Offered price must be positive", code="offered_price_required")

        booking = await self.booking_repository.create_booking(
            member_id=actor.id,
            worker_id=worker_id,
            catalog_item_id=payload.catalog_item_id,
            custom_title=None if has_catalog else custom_title,
            custom_description=None if has_catalog else payload.custom_description,
            location=payload.location,
            offered_price_cents=offered_price_cents,
            scheduled_at=ensure_utc(payload.scheduled_at) if payload.scheduled_at else None,
        )
        await self.audit_repository.create_audit_log(
            actor_id=actor.id,
            action="booking.create",
            entity_type="booking",
            entity_id=str(booking.id),
            payload={
                "catalog_item_id": str(booking.catalog_item_id) if booking.catalog_item_id else None,
                "offered_price_cents": booking.offered_price_cents,
            },
        )
        record_booking_transition("create")
        return booking

    async def get_booking(self, booking_id: UUID, actor: Actor) -> Booking:
        """Return booking visible to its participants or to workers while open."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        if is_owner(booking, actor):
            return booking
        if actor.kind == ActorKind.WORKER and booking.status in OPEN_STATUSES:
            return booking
        raise ForbiddenException("You cannot view this booking", code="not_authorized")

    async def get_history(self, booking_id: UUID, actor: Actor) -> list[AuditLog]:
        """Audit trail of a booking, for its member and assigned worker only."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        if not is_owner(booking, actor):
            raise ForbiddenException("You cannot view this booking history", code="not_authorized")
        return await self.audit_repository.list_entity_logs("booking", str(booking.id))

    async def list_my_bookings(self, actor: Actor, limit: int, offset: int) -> tuple[list[Booking], int]:
        """Members see bookings they created, workers the ones assigned to them."""
        return await self.booking_repository.list_bookings(actor.id, actor.kind, limit, offset)

    async def list_available_bookings(
        self,
        actor: Actor,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        """List pending and counter-offered requests for workers."""
        if actor.kind != ActorKind.WORKER:
            raise ForbiddenException("Only workers can browse requests", code="helpers_only")
        return await self.booking_repository.list_open_bookings(limit, offset)

    async def accept_booking(self, booking_id: UUID, actor: Actor) -> Booking:
        """Worker accepts the member's offered price directly."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        target = guard_transition(booking, actor, BookingTransitionEnum.ACCEPT)

        if not actor.profile_completed:
            raise PreconditionFailedException(
                "Please complete your profile before accepting jobs",
                code="profile_incomplete",
            )
        if not actor.is_verified:
            raise PreconditionFailedException(
                "Your account must be verified by admin before accepting jobs",
                code="account_not_verified",
            )

        window = None
        if booking.scheduled_at is not None:
            window = self.schedule_ledger.slot_window(booking.scheduled_at)
            await self.schedule_ledger.lock_calendar(actor.id)
            if await self.schedule_ledger.has_conflict(actor.id, *window):
                raise ScheduleConflictException("This time slot is already booked in your schedule")

        superseded_counter = booking.counter_offer_cents
        booking.status = target
        booking.worker_id = actor.id
        booking.agreed_price_cents = booking.offered_price_cents
        booking.counter_offer_cents = None
        booking.accepted_at = utc_now()
        await self.booking_repository.save(booking)

        if window is not None:
            on_date, start_time, end_time = window
            await self.schedule_ledger.reserve(actor.id, on_date, start_time, end_time, booking.id)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.ACCEPT,
            from_status,
            agreed_price_cents=booking.agreed_price_cents,
            superseded_counter_offer_cents=superseded_counter,
        )
        return booking

    async def counter_offer(
        self,
        booking_id: UUID,
        payload: CounterOfferRequest,
        actor: Actor,
    ) -> Booking:
        """Worker proposes a different price for a pending request."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        if payload.counter_offer_cents is None or payload.counter_offer_cents <= 0:
            raise InvalidInputException("Counter-offer must be positive", code="invalid_counter_offer")
        target = guard_transition(booking, actor, BookingTransitionEnum.COUNTER_OFFER)

        booking.status = target
        booking.worker_id = actor.id
        booking.counter_offer_cents = payload.counter_offer_cents
        await self.booking_repository.save(booking)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.COUNTER_OFFER,
            from_status,
            counter_offer_cents=booking.counter_offer_cents,
        )
        return booking

    async def accept_counter_offer(self, booking_id: UUID, actor: Actor) -> Booking:
        """Member agrees to the worker's counter-offer."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        target = guard_transition(booking, actor, BookingTransitionEnum.ACCEPT_COUNTER)

        booking.status = target
        booking.agreed_price_cents = booking.counter_offer_cents
        booking.accepted_at = utc_now()
        await self.booking_repository.save(booking)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.ACCEPT_COUNTER,
            from_status,
            agreed_price_cents=booking.agreed_price_cents,
        )
        return booking

    async def start_booking(self, booking_id: UUID, actor: Actor) -> Booking:
        """Assigned worker starts the job."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        booking.status = guard_transition(booking, actor, BookingTransitionEnum.START)
        await self.booking_repository.save(booking)

        await self._record_transition(booking, actor, BookingTransitionEnum.START, from_status)
        return booking

    async def complete_booking(self, booking_id: UUID, actor: Actor) -> BookingCompletion:
        """Complete the job, settle it and free the worker's slot as one unit."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        target = guard_transition(booking, actor, BookingTransitionEnum.COMPLETE)
        amount_cents = settlement_amount(booking)

        booking.status = target
        booking.completed_at = utc_now()
        await self.booking_repository.save(booking)

        payment, earnings = await self.settlement_recorder.record_completion(booking, completed_by=actor.id)
        await self._release_slot(booking)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.COMPLETE,
            from_status,
            amount_cents=amount_cents,
            payment_id=str(payment.id),
            earnings_id=str(earnings.id),
        )
        return BookingCompletion(booking=booking, payment=payment, earnings=earnings)

    async def confirm_payment(
        self,
        booking_id: UUID,
        payload: ConfirmPaymentRequest,
        actor: Actor,
    ) -> PaymentConfirmation:
        """Record the gateway payment reported by the booking's member."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        target = guard_transition(
            booking,
            actor,
            BookingTransitionEnum.CONFIRM_PAYMENT,
            strict_payment=self.confirm_payment_requires_completion,
        )
        amount_cents = payload.amount_cents or settlement_amount(booking)
        provider = payload.provider or self.default_payment_provider

        booking.status = target
        if booking.agreed_price_cents is None:
            booking.agreed_price_cents = amount_cents
        await self.booking_repository.save(booking)

        payment = await self.settlement_recorder.record_payment_confirmation(
            booking,
            amount_cents=amount_cents,
            provider=provider,
            transaction_id=payload.transaction_id,
            paid_by=actor.id,
        )
        if from_status in SLOT_HOLDING_STATUSES:
            await self._release_slot(booking)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.CONFIRM_PAYMENT,
            from_status,
            amount_cents=amount_cents,
            provider=provider,
            transaction_id=payload.transaction_id,
        )
        return PaymentConfirmation(booking=booking, payment=payment)

    async def cancel_booking(
        self,
        booking_id: UUID,
        payload: BookingCancelRequest,
        actor: Actor,
    ) -> Booking:
        """Cancel an open or accepted booking and free any reserved slot."""
        booking = await self._load_for_update(booking_id)
        from_status = booking.status
        target = guard_transition(booking, actor, BookingTransitionEnum.CANCEL)

        booking.status = target
        booking.agreed_price_cents = None
        booking.cancelled_at = utc_now()
        booking.cancellation_reason = payload.reason
        await self.booking_repository.save(booking)

        if from_status in SLOT_HOLDING_STATUSES:
            await self._release_slot(booking)

        await self._record_transition(
            booking,
            actor,
            BookingTransitionEnum.CANCEL,
            from_status,
            reason=payload.reason,
        )
        return booking


async def get_booking_service(session: AsyncSession = Depends(get_db_session)) -> BookingService:
    """Dependency provider for booking service."""
    settings = get_settings()
    return BookingService(
        booking_repository=BookingRepository(session),
        schedule_ledger=build_schedule_ledger(SchedulingRepository(session)),
        settlement_recorder=build_settlement_recorder(SettlementRepository(session)),
        catalog_service=CatalogService(CatalogRepository(session)),
        audit_repository=AuditRepository(session),
        confirm_payment_requires_completion=settings.booking_confirm_payment_requires_completion,
        default_payment_provider=settings.settlement_default_payment_provider,
    )
