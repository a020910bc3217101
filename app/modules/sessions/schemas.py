"""Session lifecycle schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.core.enums import ServiceTypeEnum, SessionStatusEnum


class BookingCreate(BaseModel):
    """Purchase of an expert service by the current user."""

    expert_id: UUID
    service_id: UUID
    price_paid: Decimal = Field(ge=0, max_digits=10, decimal_places=2)


class SessionInfo(BaseModel):
    """Descriptor of a session started from a booking."""

    booking_id: UUID
    session_started_at: datetime
    chat_enabled: bool
    auto_completion_date: datetime | None
    status: SessionStatusEnum


class SessionCompleteRequest(BaseModel):
    expert_notes: str | None = Field(default=None, max_length=4000)


class SessionCompletionResult(BaseModel):
    booking_id: UUID
    completed: bool


class ChatPermissionRead(BaseModel):
    user_id: UUID
    expert_id: UUID
    allowed: bool


class ActiveSessionRead(BaseModel):
    """Active session summary shown in inbox sidebars."""

    model_config = ConfigDict(from_attributes=True)

    booking_id: UUID
    created_at: datetime
    chat_enabled: bool
    auto_completion_date: datetime | None
    status: SessionStatusEnum
    service_title: str
    service_type: ServiceTypeEnum
    counterpart_id: UUID
    counterpart_first_name: str | None
    counterpart_last_name: str | None


class ExpiredSessionsSweepResult(BaseModel):
    completed: int
