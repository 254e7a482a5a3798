"""Catalog repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from juvo.modules.catalog.models import CatalogItem


class CatalogRepository:
    """DB operations for catalog domain."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_item(
        self,
        title: str,
        description: str | None,
        price_cents: int,
        provider_id: UUID,
        tags: list[str],
    ) -> CatalogItem:
        item = CatalogItem(
            title=title,
            description=description,
            price_cents=price_cents,
            provider_id=provider_id,
            tags=tags,
        )
        self.session.add(item)
        await self.session.flush()
        return item

    async def get_item_by_id(self, item_id: UUID) -> CatalogItem | None:
        stmt = select(CatalogItem).where(CatalogItem.id == item_id)
        return await self.session.scalar(stmt)

    async def list_items(self, limit: int, offset: int) -> tuple[list[CatalogItem], int]:
        base_stmt: Select[tuple[CatalogItem]] = select(CatalogItem)
        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(CatalogItem.created_at.desc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return items, total
