"""Booking repository layer."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from juvo.core.enums import BookingStatusEnum
from juvo.modules.booking.models import Booking
from juvo.modules.identity.actors import ActorKind
from juvo.shared.exceptions import InvalidStateException

OPEN_STATUSES = (BookingStatusEnum.PENDING, BookingStatusEnum.COUNTER_OFFERED)


class BookingRepository:
    """DB operations for booking domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_booking(
        self,
        member_id: UUID,
        worker_id: UUID | None,
        catalog_item_id: UUID | None,
        custom_title: str | None,
        custom_description: str | None,
        location: str | None,
        offered_price_cents: int | None,
        scheduled_at: datetime | None,
    ) -> Booking:
        booking = Booking(
            member_id=member_id,
            worker_id=worker_id,
            catalog_item_id=catalog_item_id,
            custom_title=custom_title,
            custom_description=custom_description,
            location=location,
            offered_price_cents=offered_price_cents,
            scheduled_at=scheduled_at,
            status=BookingStatusEnum.PENDING,
        )
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def get_booking_by_id(self, booking_id: UUID) -> Booking | None:
        stmt = select(Booking).where(Booking.id == booking_id)
        return await self.session.scalar(stmt)

    async def get_booking_for_update(self, booking_id: UUID) -> Booking | None:
        """Load booking with a row lock held until the request transaction ends."""
        stmt = (
            select(Booking)
            .where(Booking.id == booking_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        return await self.session.scalar(stmt)

    async def list_bookings(
        self,
        user_id: UUID,
        actor_kind: ActorKind,
        limit: int,
        offset: int,
    ) -> tuple[list[Booking], int]:
        base_stmt: Select[tuple[Booking]] = select(Booking)

        if actor_kind == ActorKind.MEMBER:
            base_stmt = base_stmt.where(Booking.member_id == user_id)
        else:
            base_stmt = base_stmt.where(Booking.worker_id == user_id)

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Booking.created_at.desc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return items, total

    async def list_open_bookings(self, limit: int, offset: int) -> tuple[list[Booking], int]:
        base_stmt: Select[tuple[Booking]] = select(Booking).where(Booking.status.in_(OPEN_STATUSES))

        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Booking.created_at.desc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return items, total

    async def save(self, booking: Booking) -> Booking:
        try:
            await self.session.flush()
        except StaleDataError as exc:
            raise InvalidStateException(
                "Booking was changed by another request",
                code="request_already_processed",
            ) from exc
        return booking
