"""Community schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.core.enums import WaitlistStatusEnum


class SuggestionCreate(BaseModel):
    """Suggest an expert to invite."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1, max_length=255)
    reason: str = Field(min_length=1, max_length=4000)
    category: str | None = Field(default=None, max_length=128)


class SuggestionRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    reason: str
    category: str | None
    submitted_by: UUID | None
    created_at: datetime


class WaitlistCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: EmailStr
    first_name: str | None = Field(default=None, max_length=128)
    last_name: str | None = Field(default=None, max_length=128)
    reason: str | None = Field(default=None, max_length=4000)


class WaitlistRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: EmailStr
    first_name: str | None
    last_name: str | None
    status: WaitlistStatusEnum
    created_at: datetime
