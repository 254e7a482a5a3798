"""Settlement repository layer.

Only inserts and reads: payment and earnings rows are never updated here.
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.enums import EarningsStatusEnum, PaymentStatusEnum
from juvo.modules.settlement.models import Earnings, Payment


class SettlementRepository:
    """DB access methods for settlement ledger."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_payment(
        self,
        booking_id: UUID,
        amount_cents: int,
        provider: str,
        transaction_id: str | None,
        status: PaymentStatusEnum,
        details: dict,
    ) -> Payment:
        payment = Payment(
            booking_id=booking_id,
            amount_cents=amount_cents,
            provider=provider,
            transaction_id=transaction_id,
            status=status,
            details=details,
        )
        self.session.add(payment)
        await self.session.flush()
        return payment

    async def create_earnings(
        self,
        worker_id: UUID,
        booking_id: UUID,
        amount_cents: int,
        status: EarningsStatusEnum,
    ) -> Earnings:
        earnings = Earnings(
            worker_id=worker_id,
            booking_id=booking_id,
            amount_cents=amount_cents,
            status=status,
        )
        self.session.add(earnings)
        await self.session.flush()
        return earnings

    async def list_booking_payments(self, booking_id: UUID) -> list[Payment]:
        stmt = (
            select(Payment)
            .where(Payment.booking_id == booking_id)
            .order_by(Payment.created_at.asc())
        )
        return (await self.session.scalars(stmt)).all()

    async def list_worker_earnings(
        self,
        worker_id: UUID,
        status: EarningsStatusEnum | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Earnings], int]:
        base_stmt: Select[tuple[Earnings]] = select(Earnings).where(Earnings.worker_id == worker_id)
        if status is not None:
            base_stmt = base_stmt.where(Earnings.status == status)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Earnings.created_at.desc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return items, total

    async def sum_worker_earnings(self, worker_id: UUID, status: EarningsStatusEnum) -> int:
        stmt = select(func.coalesce(func.sum(Earnings.amount_cents), 0)).where(
            Earnings.worker_id == worker_id,
            Earnings.status == status,
        )
        return int((await self.session.scalar(stmt)) or 0)
