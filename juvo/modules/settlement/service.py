"""Settlement business logic layer."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.config import get_settings
from juvo.core.database import get_db_session
from juvo.core.enums import EarningsStatusEnum, PaymentStatusEnum
from juvo.modules.booking.models import Booking
from juvo.modules.booking.repository import BookingRepository
from juvo.modules.identity.actors import Actor, ActorKind
from juvo.modules.settlement.models import Earnings, Payment
from juvo.modules.settlement.repository import SettlementRepository
from juvo.shared.exceptions import ForbiddenException, InvalidStateException, NotFoundException
from juvo.shared.utils import utc_now


def settlement_amount(booking: Booking) -> int:
    """Agreed price, falling back to the member's offer."""
    if booking.agreed_price_cents is not None:
        return booking.agreed_price_cents
    if booking.offered_price_cents is not None:
        return booking.offered_price_cents
    raise InvalidStateException("Booking has no price to settle", code="booking_price_missing")


class SettlementRecorder:
    """Append-only writer for payment and earnings records.

    Callers guarantee each method runs at most once per booking transition;
    the recorder never looks at earlier rows.
    """

    def __init__(self, repository: SettlementRepository, completion_provider: str = "stripe") -> None:
        self.repository = repository
        self.completion_provider = completion_provider

    async def record_completion(self, booking: Booking, completed_by: UUID) -> tuple[Payment, Earnings]:
        """Write the paid payment and pending earnings for a completed job."""
        amount_cents = settlement_amount(booking)
        if booking.worker_id is None:
            raise InvalidStateException("Booking has no assigned worker", code="worker_missing")

        payment = await self.repository.create_payment(
            booking_id=booking.id,
            amount_cents=amount_cents,
            provider=self.completion_provider,
            transaction_id=None,
            status=PaymentStatusEnum.PAID,
            details={"completed_by": str(completed_by)},
        )
        earnings = await self.repository.create_earnings(
            worker_id=booking.worker_id,
            booking_id=booking.id,
            amount_cents=amount_cents,
            status=EarningsStatusEnum.PENDING,
        )
        return payment, earnings

    async def record_payment_confirmation(
        self,
        booking: Booking,
        amount_cents: int,
        provider: str,
        transaction_id: str | None,
        paid_by: UUID,
    ) -> Payment:
        """Write the payment reported by the checkout gateway."""
        return await self.repository.create_payment(
            booking_id=booking.id,
            amount_cents=amount_cents,
            provider=provider,
            transaction_id=transaction_id,
            status=PaymentStatusEnum.PAID,
            details={"paid_by": str(paid_by), "paid_at": utc_now().isoformat()},
        )


class SettlementService:
    """Read access to the settlement ledger."""

    def __init__(
        self,
        repository: SettlementRepository,
        booking_repository: BookingRepository,
    ) -> None:
        self.repository = repository
        self.booking_repository = booking_repository

    async def list_booking_payments(self, booking_id: UUID, actor: Actor) -> list[Payment]:
        """List payments of a booking for its member or assigned worker."""
        booking = await self.booking_repository.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("Booking not found")
        if actor.id not in (booking.member_id, booking.worker_id):
            raise ForbiddenException("You cannot view payments of this booking", code="not_authorized")
        return await self.repository.list_booking_payments(booking_id)

    async def list_my_earnings(
        self,
        actor: Actor,
        status: EarningsStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Earnings], int]:
        if actor.kind != ActorKind.WORKER:
            raise ForbiddenException("Only workers have earnings", code="helpers_only")
        return await self.repository.list_worker_earnings(actor.id, status, limit, offset)

    async def earnings_summary(self, actor: Actor) -> dict[str, int]:
        """Totals of pending and paid-out earnings in cents."""
        if actor.kind != ActorKind.WORKER:
            raise ForbiddenException("Only workers have earnings", code="helpers_only")
        return {
            "pending_cents": await self.repository.sum_worker_earnings(actor.id, EarningsStatusEnum.PENDING),
            "paid_cents": await self.repository.sum_worker_earnings(actor.id, EarningsStatusEnum.PAID),
        }


def build_settlement_recorder(repository: SettlementRepository) -> SettlementRecorder:
    return SettlementRecorder(repository, completion_provider=get_settings().settlement_completion_provider)


async def get_settlement_service(session: AsyncSession = Depends(get_db_session)) -> SettlementService:
    """Dependency provider for settlement read service."""
    return SettlementService(
        repository=SettlementRepository(session),
        booking_repository=BookingRepository(session),
    )
