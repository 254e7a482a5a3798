"""Legal booking transitions.

The whole state machine is ``TRANSITIONS``: a lookup keyed by
``(current status, actor kind, requested transition)`` that yields the next
status. Anything missing from the table is illegal.
"""

from __future__ import annotations

from juvo.core.enums import BookingStatusEnum as Status
from juvo.core.enums import BookingTransitionEnum as Transition
from juvo.modules.identity.actors import Actor, ActorKind
from juvo.shared.exceptions import ForbiddenException, InvalidStateException

TransitionKey = tuple[Status, ActorKind, Transition]

TRANSITIONS: dict[TransitionKey, Status] = {
    (Status.PENDING, ActorKind.WORKER, Transition.ACCEPT): Status.ACCEPTED,
    (Status.PENDING, ActorKind.WORKER, Transition.COUNTER_OFFER): Status.COUNTER_OFFERED,
    (Status.COUNTER_OFFERED, ActorKind.MEMBER, Transition.ACCEPT_COUNTER): Status.ACCEPTED,
    (Status.ACCEPTED, ActorKind.WORKER, Transition.START): Status.IN_PROGRESS,
    (Status.ACCEPTED, ActorKind.WORKER, Transition.COMPLETE): Status.COMPLETED,
    (Status.IN_PROGRESS, ActorKind.WORKER, Transition.COMPLETE): Status.COMPLETED,
    (Status.PENDING, ActorKind.MEMBER, Transition.CANCEL): Status.CANCELLED,
    (Status.COUNTER_OFFERED, ActorKind.MEMBER, Transition.CANCEL): Status.CANCELLED,
    (Status.ACCEPTED, ActorKind.MEMBER, Transition.CANCEL): Status.CANCELLED,
    (Status.COUNTER_OFFERED, ActorKind.WORKER, Transition.CANCEL): Status.CANCELLED,
    (Status.ACCEPTED, ActorKind.WORKER, Transition.CANCEL): Status.CANCELLED,
}
# Payment confirmation carries no status precondition unless strict mode is on.
TRANSITIONS.update(
    {(status, ActorKind.MEMBER, Transition.CONFIRM_PAYMENT): Status.PAID for status in Status},
)

STRICT_PAYMENT_SOURCES = frozenset({Status.ACCEPTED, Status.IN_PROGRESS, Status.COMPLETED})

# Transitions only the booking's own member or assigned worker may perform.
OWNER_ONLY = frozenset(
    {
        Transition.ACCEPT_COUNTER,
        Transition.START,
        Transition.COMPLETE,
        Transition.CONFIRM_PAYMENT,
        Transition.CANCEL,
    },
)

_STATE_ERROR_CODES: dict[Transition, str] = {
    Transition.ACCEPT: "request_already_processed",
    Transition.COUNTER_OFFER: "request_already_processed",
    Transition.ACCEPT_COUNTER: "no_counter_offer",
    Transition.START: "booking_not_accepted",
    Transition.COMPLETE: "booking_not_ready_for_completion",
    Transition.CONFIRM_PAYMENT: "booking_not_payable",
    Transition.CANCEL: "booking_not_cancellable",
}


def allowed_actor_kinds(transition: Transition) -> frozenset[ActorKind]:
    """Actor kinds that appear in the table for this transition."""
    return frozenset(kind for (_, kind, name) in TRANSITIONS if name == transition)


def is_owner(booking, actor: Actor) -> bool:
    if actor.kind == ActorKind.MEMBER:
        return booking.member_id == actor.id
    return booking.worker_id is not None and booking.worker_id == actor.id


def next_status(
    current: Status,
    actor_kind: ActorKind,
    transition: Transition,
    *,
    strict_payment: bool = False,
) -> Status:
    """Look up the target status or raise ``InvalidStateException``."""
    target = TRANSITIONS.get((current, actor_kind, transition))
    if transition == Transition.CONFIRM_PAYMENT and strict_payment and current not in STRICT_PAYMENT_SOURCES:
        target = None
    if target is None:
        raise InvalidStateException(
            f"Cannot {transition.value} a booking in status {current.value}",
            code=_STATE_ERROR_CODES[transition],
        )
    return target


def guard_transition(
    booking,
    actor: Actor,
    transition: Transition,
    *,
    strict_payment: bool = False,
) -> Status:
    """Check role, ownership and state for ``transition``; return the target status."""
    if actor.kind not in allowed_actor_kinds(transition):
        code = "helpers_only" if actor.kind == ActorKind.MEMBER else "members_only"
        raise ForbiddenException(f"{actor.kind.value} cannot {transition.value} bookings", code=code)
    if transition in OWNER_ONLY and not is_owner(booking, actor):
        raise ForbiddenException("You cannot manage this booking", code="not_authorized")
    return next_status(booking.status, actor.kind, transition, strict_payment=strict_payment)
