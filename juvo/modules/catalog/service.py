"""Catalog business logic layer."""

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.core.database import get_db_session
from juvo.modules.catalog.models import CatalogItem
from juvo.modules.catalog.repository import CatalogRepository
from juvo.modules.catalog.schemas import CatalogItemCreate
from juvo.modules.identity.actors import Actor, ActorKind
from juvo.shared.exceptions import ForbiddenException, NotFoundException


@dataclass(frozen=True, slots=True)
class CatalogEntry:
    """What a booking needs to know about a catalog item."""

    item_id: UUID
    owner_id: UUID | None
    price_cents: int


class CatalogService:
    """Catalog domain service."""

    def __init__(self, repository: CatalogRepository) -> None:
        self.repository = repository

    async def resolve(self, item_id: UUID) -> CatalogEntry:
        """Resolve catalog item to its owner and price."""
        item = await self.repository.get_item_by_id(item_id)
        if item is None:
            raise NotFoundException("Service not found", code="service_not_found")
        return CatalogEntry(item_id=item.id, owner_id=item.provider_id, price_cents=item.price_cents)

    async def get_item(self, item_id: UUID) -> CatalogItem:
        item = await self.repository.get_item_by_id(item_id)
        if item is None:
            raise NotFoundException("Service not found", code="service_not_found")
        return item

    async def create_item(self, payload: CatalogItemCreate, actor: Actor) -> CatalogItem:
        """Publish a new offering owned by the calling worker."""
        if actor.kind != ActorKind.WORKER:
            raise ForbiddenException("Only workers can publish services", code="not_provider")
        return await self.repository.create_item(
            title=payload.title,
            description=payload.description,
            price_cents=payload.price_cents,
            provider_id=actor.id,
            tags=payload.tags,
        )

    async def list_items(self, limit: int, offset: int) -> tuple[list[CatalogItem], int]:
        return await self.repository.list_items(limit=limit, offset=offset)


async def get_catalog_service(session: AsyncSession = Depends(get_db_session)) -> CatalogService:
    """Dependency provider for catalog service."""
    return CatalogService(CatalogRepository(session))
