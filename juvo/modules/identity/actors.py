"""Capability-tagged actors.

Every request is performed by exactly one actor variant. Booking guards are
keyed by ``ActorKind`` rather than by raw account type strings, so helper and
chef accounts share the worker capabilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias
from uuid import UUID

from juvo.core.enums import AccountTypeEnum


class ActorKind(StrEnum):
    MEMBER = "member"
    WORKER = "worker"


@dataclass(frozen=True, slots=True)
class MemberActor:
    """Member requesting and paying for services."""

    id: UUID

    @property
    def kind(self) -> ActorKind:
        return ActorKind.MEMBER


@dataclass(frozen=True, slots=True)
class WorkerActor:
    """Helper or chef fulfilling bookings."""

    id: UUID
    account_type: AccountTypeEnum = AccountTypeEnum.HELPER
    profile_completed: bool = False
    is_verified: bool = False

    @property
    def kind(self) -> ActorKind:
        return ActorKind.WORKER


Actor: TypeAlias = MemberActor | WorkerActor

WORKER_ACCOUNT_TYPES = frozenset({AccountTypeEnum.HELPER, AccountTypeEnum.CHEF})


def actor_from_user(user) -> Actor:
    """Build the actor variant for a persisted user."""
    if user.account_type in WORKER_ACCOUNT_TYPES:
        return WorkerActor(
            id=user.id,
            account_type=AccountTypeEnum(user.account_type),
            profile_completed=bool(user.profile_completed),
            is_verified=bool(user.is_verified),
        )
    return MemberActor(id=user.id)
