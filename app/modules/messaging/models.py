"""Messaging ORM models."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin, str_enum
from app.core.enums import ConversationStatusEnum, MessageTypeEnum


class Conversation(BaseModelMixin, Base):
    """1:1 channel between a client and an expert, usually opened by a booking."""

    __tablename__ = "conversations"

    user_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    expert_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    booking_id: Mapped[UUID | None] = mapped_column(
        ForeignKey("bookings.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    status: Mapped[ConversationStatusEnum] = mapped_column(
        str_enum(ConversationStatusEnum, "conversation_status_enum"),
        default=ConversationStatusEnum.ACTIVE,
        nullable=False,
    )


class Message(BaseModelMixin, Base):
    __tablename__ = "messages"

    conversation_id: Mapped[UUID] = mapped_column(
        ForeignKey("conversations.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    sender_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    message_type: Mapped[MessageTypeEnum] = mapped_column(
        str_enum(MessageTypeEnum, "message_type_enum"),
        default=MessageTypeEnum.TEXT,
        nullable=False,
    )
    is_edited: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
