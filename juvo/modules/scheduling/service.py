"""Scheduling business logic layer."""

from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.config import get_settings
from juvo.core.database import get_db_session
from juvo.modules.identity.actors import Actor, ActorKind
from juvo.modules.scheduling.models import ScheduleSlot
from juvo.modules.scheduling.repository import SchedulingRepository
from juvo.shared.exceptions import ForbiddenException, ScheduleConflictException
from juvo.shared.utils import day_window

logger = logging.getLogger(__name__)


def _overlaps(start_a: time, end_a: time, start_b: time, end_b: time) -> bool:
    return start_a < end_b and start_b < end_a


class ScheduleLedger:
    """Per-worker calendar of busy and free windows.

    With the ``date`` policy any busy slot on a day blocks the whole day for
    that worker. The ``interval`` policy only rejects overlapping windows.
    """

    def __init__(
        self,
        repository: SchedulingRepository,
        *,
        conflict_policy: str = "date",
        default_slot_hours: int = 2,
    ) -> None:
        self.repository = repository
        self.conflict_policy = conflict_policy
        self.default_slot_duration = timedelta(hours=default_slot_hours)

    def slot_window(self, scheduled_at: datetime) -> tuple[date, time, time]:
        """Return (date, start, end) for a booking starting at ``scheduled_at``."""
        return day_window(scheduled_at, self.default_slot_duration)

    async def lock_calendar(self, worker_id: UUID) -> None:
        """Serialize check-then-reserve for one worker within the transaction."""
        await self.repository.lock_worker_calendar(worker_id)

    async def has_conflict(
        self,
        worker_id: UUID,
        on_date: date,
        start_time: time | None = None,
        end_time: time | None = None,
    ) -> bool:
        busy = await self.repository.list_busy_slots(worker_id, on_date)
        if not busy:
            return False
        if self.conflict_policy != "interval" or start_time is None or end_time is None:
            return True
        return any(_overlaps(start_time, end_time, slot.start_time, slot.end_time) for slot in busy)

    async def reserve(
        self,
        worker_id: UUID,
        on_date: date,
        start_time: time,
        end_time: time,
        booking_id: UUID,
    ) -> ScheduleSlot:
        """Create an unavailable slot linked to the booking."""
        if await self.has_conflict(worker_id, on_date, start_time, end_time):
            raise ScheduleConflictException("This time slot is already booked in your schedule")
        slot = await self.repository.create_slot(
            worker_id=worker_id,
            on_date=on_date,
            start_time=start_time,
            end_time=end_time,
            booking_id=booking_id,
            is_available=False,
        )
        logger.info("Reserved slot %s for worker %s booking %s", slot.id, worker_id, booking_id)
        return slot

    async def release(self, worker_id: UUID, on_date: date, booking_id: UUID) -> int:
        """Free slots held by the booking. Returns how many were released."""
        slots = await self.repository.list_booking_slots(worker_id, on_date, booking_id)
        for slot in slots:
            await self.repository.free_slot(slot)
        return len(slots)

    async def list_worker_slots(
        self,
        actor: Actor,
        on_date: date | None,
        limit: int,
        offset: int,
    ) -> tuple[list[ScheduleSlot], int]:
        """List the calling worker's own calendar."""
        if actor.kind != ActorKind.WORKER:
            raise ForbiddenException("Only workers have a schedule", code="helpers_only")
        return await self.repository.list_worker_slots(actor.id, on_date, limit, offset)


def build_schedule_ledger(repository: SchedulingRepository) -> ScheduleLedger:
    """Build ledger configured from settings."""
    settings = get_settings()
    return ScheduleLedger(
        repository,
        conflict_policy=settings.schedule_conflict_policy,
        default_slot_hours=settings.schedule_default_slot_hours,
    )


async def get_schedule_ledger(session: AsyncSession = Depends(get_db_session)) -> ScheduleLedger:
    """Dependency provider for schedule ledger."""
    return build_schedule_ledger(SchedulingRepository(session))
