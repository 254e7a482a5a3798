from __future__ import annotations

import itertools
from types import SimpleNamespace
from uuid import uuid4

import pytest

from juvo.core.enums import BookingStatusEnum as Status
from juvo.core.enums import BookingTransitionEnum as Transition
from juvo.modules.booking.transitions import (
    STRICT_PAYMENT_SOURCES,
    TRANSITIONS,
    allowed_actor_kinds,
    guard_transition,
    next_status,
)
from juvo.modules.identity.actors import ActorKind, MemberActor, WorkerActor
from juvo.shared.exceptions import ForbiddenException, InvalidStateException


def make_booking(status: Status, *, member_id=None, worker_id=None) -> SimpleNamespace:
    return SimpleNamespace(
        id=uuid4(),
        status=status,
        member_id=member_id or uuid4(),
        worker_id=worker_id,
    )


def test_every_combination_outside_the_table_is_rejected() -> None:
    for status, kind, transition in itertools.product(Status, ActorKind, Transition):
        key = (status, kind, transition)
        if key in TRANSITIONS:
            assert next_status(status, kind, transition) == TRANSITIONS[key]
            continue
        with pytest.raises(InvalidStateException):
            next_status(status, kind, transition)


def test_negotiation_paths() -> None:
    assert next_status(Status.PENDING, ActorKind.WORKER, Transition.ACCEPT) == Status.ACCEPTED
    assert next_status(Status.PENDING, ActorKind.WORKER, Transition.COUNTER_OFFER) == Status.COUNTER_OFFERED
    assert next_status(Status.COUNTER_OFFERED, ActorKind.MEMBER, Transition.ACCEPT_COUNTER) == Status.ACCEPTED
    assert next_status(Status.ACCEPTED, ActorKind.WORKER, Transition.START) == Status.IN_PROGRESS
    assert next_status(Status.ACCEPTED, ActorKind.WORKER, Transition.COMPLETE) == Status.COMPLETED
    assert next_status(Status.IN_PROGRESS, ActorKind.WORKER, Transition.COMPLETE) == Status.COMPLETED


def test_accepting_a_countered_request_reports_already_processed() -> None:
    with pytest.raises(InvalidStateException) as exc:
        next_status(Status.COUNTER_OFFERED, ActorKind.WORKER, Transition.ACCEPT)
    assert exc.value.code == "request_already_processed"


def test_cancelled_and_completed_are_terminal_for_negotiation() -> None:
    for status in (Status.CANCELLED, Status.COMPLETED):
        reachable = {
            transition
            for (source, _, transition) in TRANSITIONS
            if source == status
        }
        assert reachable == {Transition.CONFIRM_PAYMENT}


@pytest.mark.parametrize("status", list(Status))
def test_strict_payment_only_from_accepted_in_progress_or_completed(status: Status) -> None:
    if status in STRICT_PAYMENT_SOURCES:
        assert (
            next_status(status, ActorKind.MEMBER, Transition.CONFIRM_PAYMENT, strict_payment=True)
            == Status.PAID
        )
        return
    with pytest.raises(InvalidStateException) as exc:
        next_status(status, ActorKind.MEMBER, Transition.CONFIRM_PAYMENT, strict_payment=True)
    assert exc.value.code == "booking_not_payable"


def test_actor_kinds_per_transition() -> None:
    assert allowed_actor_kinds(Transition.ACCEPT) == {ActorKind.WORKER}
    assert allowed_actor_kinds(Transition.ACCEPT_COUNTER) == {ActorKind.MEMBER}
    assert allowed_actor_kinds(Transition.CANCEL) == {ActorKind.MEMBER, ActorKind.WORKER}


def test_guard_checks_role_before_state() -> None:
    booking = make_booking(Status.COMPLETED)

    with pytest.raises(ForbiddenException) as exc:
        guard_transition(booking, MemberActor(id=booking.member_id), Transition.START)
    assert exc.value.code == "helpers_only"


def test_guard_checks_ownership_before_state() -> None:
    booking = make_booking(Status.PENDING)

    with pytest.raises(ForbiddenException) as exc:
        guard_transition(booking, MemberActor(id=uuid4()), Transition.CANCEL)
    assert exc.value.code == "not_authorized"


def test_guard_lets_any_worker_accept_open_request() -> None:
    booking = make_booking(Status.PENDING)

    assert guard_transition(booking, WorkerActor(id=uuid4()), Transition.ACCEPT) == Status.ACCEPTED


def test_assigned_worker_may_cancel_accepted_booking() -> None:
    worker = WorkerActor(id=uuid4())
    booking = make_booking(Status.ACCEPTED, worker_id=worker.id)

    assert guard_transition(booking, worker, Transition.CANCEL) == Status.CANCELLED
