"""Experts catalogue schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from app.core.enums import ServiceTypeEnum
from app.modules.identity.schemas import ProfileRead


class ExpertCard(BaseModel):
    """Compact expert representation for marketplace grids and search."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    first_name: str | None
    last_name: str | None
    bio: str | None
    location: str | None
    profile_image_url: str | None
    preview_image_url: str | None
    specialties: list[str] | None
    starting_price: Decimal | None
    expert_rank: int | None


class CategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    sort_order: int | None


class ServiceCreate(BaseModel):
    """Create expert service request."""

    title: str = Field(min_length=1, max_length=255)
    description: str | None = None
    service_type: ServiceTypeEnum
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    availability_slots: int = Field(default=1, ge=0)
    is_active: bool = True


class ServiceUpdate(BaseModel):
    """Partial update of an expert service."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    service_type: ServiceTypeEnum | None = None
    price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    availability_slots: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class ServiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    expert_id: UUID
    title: str
    description: str | None
    service_type: ServiceTypeEnum
    price: Decimal
    availability_slots: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class VideoCreate(BaseModel):
    url: HttpUrl


class VideoRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    expert_id: UUID
    url: str
    created_at: datetime


class ExpertDetail(BaseModel):
    """Public expert page: profile, bookable services and videos."""

    profile: ProfileRead
    services: list[ServiceRead]
    videos: list[VideoRead]
