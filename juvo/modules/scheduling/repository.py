"""Scheduling repository layer."""

from __future__ import annotations

from datetime import date, time
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.modules.identity.models import User
from juvo.modules.scheduling.models import ScheduleSlot


class SchedulingRepository:
    """DB access for scheduling domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_slot(
        self,
        worker_id: UUID,
        on_date: date,
        start_time: time,
        end_time: time,
        booking_id: UUID | None,
        is_available: bool,
    ) -> ScheduleSlot:
        slot = ScheduleSlot(
            worker_id=worker_id,
            date=on_date,
            start_time=start_time,
            end_time=end_time,
            booking_id=booking_id,
            is_available=is_available,
        )
        self.session.add(slot)
        await self.session.flush()
        return slot

    async def lock_worker_calendar(self, worker_id: UUID) -> None:
        """Row-lock the worker's account until the transaction ends.

        Conflict checks for one worker then run one at a time even when no
        slot row exists yet for the date.
        """
        stmt = select(User.id).where(User.id == worker_id).with_for_update()
        await self.session.execute(stmt)

    async def list_busy_slots(self, worker_id: UUID, on_date: date) -> list[ScheduleSlot]:
        stmt = select(ScheduleSlot).where(
            ScheduleSlot.worker_id == worker_id,
            ScheduleSlot.date == on_date,
            ScheduleSlot.is_available.is_(False),
        )
        return (await self.session.scalars(stmt)).all()

    async def list_booking_slots(
        self,
        worker_id: UUID,
        on_date: date,
        booking_id: UUID,
    ) -> list[ScheduleSlot]:
        stmt = select(ScheduleSlot).where(
            ScheduleSlot.worker_id == worker_id,
            ScheduleSlot.date == on_date,
            ScheduleSlot.booking_id == booking_id,
        )
        return (await self.session.scalars(stmt)).all()

    async def list_worker_slots(
        self,
        worker_id: UUID,
        on_date: date | None,
        limit: int,
        offset: int,
    ) -> tuple[list[ScheduleSlot], int]:
        base_stmt: Select[tuple[ScheduleSlot]] = select(ScheduleSlot).where(
            ScheduleSlot.worker_id == worker_id,
        )
        if on_date is not None:
            base_stmt = base_stmt.where(ScheduleSlot.date == on_date)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = (
            base_stmt.order_by(ScheduleSlot.date.asc(), ScheduleSlot.start_time.asc())
            .limit(limit)
            .offset(offset)
        )
        items = (await self.session.scalars(stmt)).all()
        return items, total

    async def free_slot(self, slot: ScheduleSlot) -> ScheduleSlot:
        slot.is_available = True
        slot.booking_id = None
        await self.session.flush()
        return slot
