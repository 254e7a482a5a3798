"""Core enums used across modules."""

from enum import StrEnum


class AccountTypeEnum(StrEnum):
    """Account types issued by the identity provider."""

    MEMBER = "member"
    HELPER = "helper"
    CHEF = "chef"


class BookingStatusEnum(StrEnum):
    """Booking lifecycle status."""

    PENDING = "pending"
    COUNTER_OFFERED = "counter_offered"
    ACCEPTED = "accepted"
    PAID = "paid"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class BookingTransitionEnum(StrEnum):
    """Actions that move a booking between states."""

    ACCEPT = "accept"
    COUNTER_OFFER = "counter_offer"
    ACCEPT_COUNTER = "accept_counter"
    START = "start"
    COMPLETE = "complete"
    CONFIRM_PAYMENT = "confirm_payment"
    CANCEL = "cancel"


class PaymentStatusEnum(StrEnum):
    """Payment record status."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"


class EarningsStatusEnum(StrEnum):
    """Worker earnings status."""

    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
