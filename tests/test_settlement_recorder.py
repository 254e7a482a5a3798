from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from juvo.core.enums import EarningsStatusEnum, PaymentStatusEnum
from juvo.modules.identity.actors import MemberActor, WorkerActor
from juvo.modules.settlement.service import SettlementRecorder, SettlementService, settlement_amount
from juvo.shared.exceptions import ForbiddenException, InvalidStateException, NotFoundException


class FakeSettlementRepository:
    def __init__(self) -> None:
        self.payments: list[SimpleNamespace] = []
        self.earnings: list[SimpleNamespace] = []

    async def create_payment(self, **kwargs) -> SimpleNamespace:
        payment = SimpleNamespace(id=uuid4(), **kwargs)
        self.payments.append(payment)
        return payment

    async def create_earnings(self, **kwargs) -> SimpleNamespace:
        earnings = SimpleNamespace(id=uuid4(), **kwargs)
        self.earnings.append(earnings)
        return earnings

    async def list_booking_payments(self, booking_id):
        return [payment for payment in self.payments if payment.booking_id == booking_id]

    async def sum_worker_earnings(self, worker_id, status):
        return sum(
            item.amount_cents
            for item in self.earnings
            if item.worker_id == worker_id and item.status == status
        )


class FakeBookingRepository:
    def __init__(self, bookings) -> None:
        self.bookings = {booking.id: booking for booking in bookings}

    async def get_booking_by_id(self, booking_id):
        return self.bookings.get(booking_id)


def make_booking(**overrides) -> SimpleNamespace:
    values = {
        "id": uuid4(),
        "member_id": uuid4(),
        "worker_id": uuid4(),
        "offered_price_cents": 5000,
        "agreed_price_cents": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


def test_settlement_amount_prefers_agreed_price() -> None:
    assert settlement_amount(make_booking(agreed_price_cents=6000)) == 6000
    assert settlement_amount(make_booking()) == 5000


def test_settlement_amount_requires_some_price() -> None:
    with pytest.raises(InvalidStateException) as exc:
        settlement_amount(make_booking(offered_price_cents=None))
    assert exc.value.code == "booking_price_missing"


@pytest.mark.asyncio
async def test_record_completion_writes_paid_payment_and_pending_earnings() -> None:
    repo = FakeSettlementRepository()
    recorder = SettlementRecorder(repo, completion_provider="stripe")
    booking = make_booking(agreed_price_cents=6000)
    completed_by = booking.worker_id

    payment, earnings = await recorder.record_completion(booking, completed_by=completed_by)

    assert payment.status == PaymentStatusEnum.PAID
    assert payment.amount_cents == 6000
    assert payment.provider == "stripe"
    assert payment.details == {"completed_by": str(completed_by)}
    assert earnings.status == EarningsStatusEnum.PENDING
    assert earnings.amount_cents == 6000
    assert earnings.worker_id == booking.worker_id


@pytest.mark.asyncio
async def test_record_completion_requires_assigned_worker() -> None:
    repo = FakeSettlementRepository()
    recorder = SettlementRecorder(repo)

    with pytest.raises(InvalidStateException) as exc:
        await recorder.record_completion(make_booking(worker_id=None), completed_by=uuid4())

    assert exc.value.code == "worker_missing"
    assert repo.payments == []


@pytest.mark.asyncio
async def test_participants_list_booking_payments() -> None:
    booking = make_booking()
    repo = FakeSettlementRepository()
    await SettlementRecorder(repo).record_completion(booking, completed_by=booking.worker_id)
    service = SettlementService(repo, FakeBookingRepository([booking]))

    member_view = await service.list_booking_payments(booking.id, MemberActor(id=booking.member_id))
    assert len(member_view) == 1

    with pytest.raises(ForbiddenException):
        await service.list_booking_payments(booking.id, WorkerActor(id=uuid4()))
    with pytest.raises(NotFoundException):
        await service.list_booking_payments(uuid4(), MemberActor(id=booking.member_id))


@pytest.mark.asyncio
async def test_earnings_summary_for_workers_only() -> None:
    booking = make_booking()
    repo = FakeSettlementRepository()
    await SettlementRecorder(repo).record_completion(booking, completed_by=booking.worker_id)
    service = SettlementService(repo, FakeBookingRepository([booking]))

    summary = await service.earnings_summary(WorkerActor(id=booking.worker_id))
    assert summary == {"pending_cents": 5000, "paid_cents": 0}

    with pytest.raises(ForbiddenException):
        await service.earnings_summary(MemberActor(id=booking.member_id))
