"""Catalog API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from juvo.modules.catalog.schemas import CatalogItemCreate, CatalogItemRead
from juvo.modules.catalog.service import CatalogService, get_catalog_service
from juvo.modules.identity.service import get_current_actor
from juvo.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("", response_model=Page[CatalogItemRead])
async def list_catalog_items(
    pagination=Depends(get_pagination_params),
    service: CatalogService = Depends(get_catalog_service),
) -> Page[CatalogItemRead]:
    """List published services."""
    items, total = await service.list_items(pagination.limit, pagination.offset)
    serialized = [CatalogItemRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/{item_id}", response_model=CatalogItemRead)
async def get_catalog_item(
    item_id: UUID,
    service: CatalogService = Depends(get_catalog_service),
) -> CatalogItemRead:
    item = await service.get_item(item_id)
    return CatalogItemRead.model_validate(item)


@router.post("", response_model=CatalogItemRead, status_code=status.HTTP_201_CREATED)
async def create_catalog_item(
    payload: CatalogItemCreate,
    service: CatalogService = Depends(get_catalog_service),
    current_actor=Depends(get_current_actor),
) -> CatalogItemRead:
    """Publish a service offering (workers only)."""
    item = await service.create_item(payload, current_actor)
    return CatalogItemRead.model_validate(item)
