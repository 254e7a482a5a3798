"""Scheduling API router."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query

from juvo.modules.identity.service import get_current_actor
from juvo.modules.scheduling.schemas import ScheduleSlotRead
from juvo.modules.scheduling.service import ScheduleLedger, get_schedule_ledger
from juvo.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/scheduling", tags=["scheduling"])


@router.get("/my", response_model=Page[ScheduleSlotRead])
async def list_my_schedule(
    on_date: date | None = Query(default=None, alias="date"),
    pagination=Depends(get_pagination_params),
    ledger: ScheduleLedger = Depends(get_schedule_ledger),
    current_actor=Depends(get_current_actor),
) -> Page[ScheduleSlotRead]:
    """List schedule slots of the current worker."""
    items, total = await ledger.list_worker_slots(
        current_actor,
        on_date,
        pagination.limit,
        pagination.offset,
    )
    serialized = [ScheduleSlotRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)
