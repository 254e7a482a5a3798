from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest
from fastapi import HTTPException

from juvo.core.enums import AccountTypeEnum
from juvo.core.security import create_access_token
from juvo.modules.catalog.schemas import CatalogItemCreate
from juvo.modules.catalog.service import CatalogService
from juvo.modules.identity.actors import ActorKind, MemberActor, WorkerActor, actor_from_user
from juvo.modules.identity.service import IdentityService
from juvo.shared.exceptions import ForbiddenException, NotFoundException


def make_user(account_type: AccountTypeEnum, **overrides) -> SimpleNamespace:
    values = {
        "id": uuid4(),
        "account_type": account_type,
        "is_active": True,
        "is_verified": False,
        "profile_completed": False,
    }
    values.update(overrides)
    return SimpleNamespace(**values)


class FakeIdentityRepository:
    def __init__(self, users) -> None:
        self.users = {user.id: user for user in users}

    async def get_user_by_id(self, user_id):
        return self.users.get(user_id)


class FakeCatalogRepository:
    def __init__(self) -> None:
        self.items = []

    async def get_item_by_id(self, item_id):
        return None

    async def create_item(self, **kwargs):
        item = SimpleNamespace(id=uuid4(), **kwargs)
        self.items.append(item)
        return item


def test_member_account_becomes_member_actor() -> None:
    actor = actor_from_user(make_user(AccountTypeEnum.MEMBER))

    assert isinstance(actor, MemberActor)
    assert actor.kind == ActorKind.MEMBER


@pytest.mark.parametrize("account_type", [AccountTypeEnum.HELPER, AccountTypeEnum.CHEF])
def test_helper_and_chef_share_worker_capabilities(account_type: AccountTypeEnum) -> None:
    user = make_user(account_type, is_verified=True, profile_completed=True)

    actor = actor_from_user(user)

    assert isinstance(actor, WorkerActor)
    assert actor.kind == ActorKind.WORKER
    assert actor.account_type == account_type
    assert actor.is_verified is True
    assert actor.profile_completed is True


@pytest.mark.asyncio
async def test_access_token_resolves_active_user() -> None:
    user = make_user(AccountTypeEnum.MEMBER)
    service = IdentityService(FakeIdentityRepository([user]))

    resolved = await service.get_user_from_access_token(create_access_token(str(user.id)))

    assert resolved is user


@pytest.mark.asyncio
async def test_non_access_token_is_rejected() -> None:
    user = make_user(AccountTypeEnum.MEMBER)
    service = IdentityService(FakeIdentityRepository([user]))

    with pytest.raises(HTTPException) as exc:
        await service.get_user_from_access_token(create_access_token(str(user.id), type="refresh"))
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_malformed_subject_is_rejected() -> None:
    service = IdentityService(FakeIdentityRepository([]))

    with pytest.raises(HTTPException) as exc:
        await service.get_user_from_access_token(create_access_token("not-a-uuid"))
    assert exc.value.status_code == 401


@pytest.mark.asyncio
async def test_inactive_or_unknown_user_is_rejected() -> None:
    inactive = make_user(AccountTypeEnum.HELPER, is_active=False)
    service = IdentityService(FakeIdentityRepository([inactive]))

    with pytest.raises(ForbiddenException):
        await service.get_user_from_access_token(create_access_token(str(inactive.id)))
    with pytest.raises(ForbiddenException) as exc:
        await service.get_user_from_access_token(create_access_token(str(uuid4())))
    assert exc.value.code == "user_not_found"


@pytest.mark.asyncio
async def test_only_workers_publish_catalog_items() -> None:
    repo = FakeCatalogRepository()
    service = CatalogService(repo)
    payload = CatalogItemCreate(title="Weekly meal prep", price_cents=8000, tags=["cooking"])

    with pytest.raises(ForbiddenException) as exc:
        await service.create_item(payload, MemberActor(id=uuid4()))
    assert exc.value.code == "not_provider"

    worker = WorkerActor(id=uuid4(), account_type=AccountTypeEnum.CHEF)
    item = await service.create_item(payload, worker)
    assert item.provider_id == worker.id
    assert item.price_cents == 8000


@pytest.mark.asyncio
async def test_resolving_unknown_catalog_item() -> None:
    with pytest.raises(NotFoundException) as exc:
        await CatalogService(FakeCatalogRepository()).resolve(uuid4())
    assert exc.value.code == "service_not_found"
