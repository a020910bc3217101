"""Messaging schemas."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.enums import ConversationStatusEnum, MessageTypeEnum


class ConversationRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    expert_id: UUID
    booking_id: UUID | None
    status: ConversationStatusEnum
    created_at: datetime
    updated_at: datetime


class MessageCreate(BaseModel):
    """Send message request."""

    content: str = Field(min_length=1, max_length=4000)

    @field_validator("content")
    @classmethod
    def reject_blank_content(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Message content must not be blank")
        return value


class MessageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str
    message_type: MessageTypeEnum
    is_edited: bool
    created_at: datetime
