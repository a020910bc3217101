"""Identity schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class ProfileRead(BaseModel):
    """Profile response schema."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    bio: str | None
    profile_bio: str | None
    location: str | None
    home_country: str | None
    specialties: list[str] | None
    starting_price: Decimal | None
    profile_image_url: str | None
    preview_image_url: str | None
    linkedin_url: str | None
    instagram_url: str | None
    facebook_url: str | None
    is_expert: bool
    expert_rank: int | None
    created_at: datetime
    updated_at: datetime


class ProfileUpdate(BaseModel):
    """Editable part of the caller's own profile."""

    model_config = ConfigDict(extra="forbid")

    first_name: str | None = Field(default=None, max_length=128)
    last_name: str | None = Field(default=None, max_length=128)
    bio: str | None = None
    profile_bio: str | None = None
    location: str | None = Field(default=None, max_length=255)
    home_country: str | None = Field(default=None, max_length=128)
    specialties: list[str] | None = Field(default=None, max_length=20)
    starting_price: Decimal | None = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    profile_image_url: str | None = Field(default=None, max_length=1024)
    preview_image_url: str | None = Field(default=None, max_length=1024)
    linkedin_url: str | None = Field(default=None, max_length=1024)
    instagram_url: str | None = Field(default=None, max_length=1024)
    facebook_url: str | None = Field(default=None, max_length=1024)
