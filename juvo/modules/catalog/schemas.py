"""Catalog schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class CatalogItemCreate(BaseModel):
    """Create catalog item request."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    price_cents: int = Field(default=0, ge=0)
    tags: list[str] = Field(default_factory=list)


class CatalogItemRead(BaseModel):
    """Catalog item response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None
    price_cents: int
    provider_id: UUID | None
    tags: list[str]
    created_at: datetime
    updated_at: datetime
