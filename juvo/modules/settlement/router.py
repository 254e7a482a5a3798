"""Settlement API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from juvo.core.enums import EarningsStatusEnum
from juvo.modules.identity.service import get_current_actor
from juvo.modules.settlement.schemas import EarningsRead, EarningsSummary, PaymentRead
from juvo.modules.settlement.service import SettlementService, get_settlement_service
from juvo.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("/bookings/{booking_id}/payments", response_model=list[PaymentRead])
async def list_booking_payments(
    booking_id: UUID,
    service: SettlementService = Depends(get_settlement_service),
    current_actor=Depends(get_current_actor),
) -> list[PaymentRead]:
    """List payments recorded for a booking."""
    payments = await service.list_booking_payments(booking_id, current_actor)
    return [PaymentRead.model_validate(item) for item in payments]


@router.get("/earnings/my", response_model=Page[EarningsRead])
async def list_my_earnings(
    earnings_status: EarningsStatusEnum | None = Query(default=None, alias="status"),
    pagination=Depends(get_pagination_params),
    service: SettlementService = Depends(get_settlement_service),
    current_actor=Depends(get_current_actor),
) -> Page[EarningsRead]:
    """List earnings of the current worker."""
    items, total = await service.list_my_earnings(
        current_actor,
        earnings_status,
        pagination.limit,
        pagination.offset,
    )
    serialized = [EarningsRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/earnings/my/summary", response_model=EarningsSummary)
async def my_earnings_summary(
    service: SettlementService = Depends(get_settlement_service),
    current_actor=Depends(get_current_actor),
) -> EarningsSummary:
    return EarningsSummary(**await service.earnings_summary(current_actor))
