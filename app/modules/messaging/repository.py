"""Messaging repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ConversationStatusEnum, MessageTypeEnum
from app.modules.messaging.models import Conversation, Message
from app.shared.utils import utc_now


class MessagingRepository:
    """DB operations for conversations and messages."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_conversation(
        self,
        user_id: UUID,
        expert_id: UUID,
        booking_id: UUID | None,
        status: ConversationStatusEnum = ConversationStatusEnum.ACTIVE,
    ) -> Conversation:
        conversation = Conversation(
            user_id=user_id,
            expert_id=expert_id,
            booking_id=booking_id,
            status=status,
        )
        self.session.add(conversation)
        await self.session.flush()
        return conversation

    async def get_conversation_by_id(self, conversation_id: UUID) -> Conversation | None:
        return await self.session.scalar(select(Conversation).where(Conversation.id == conversation_id))

    async def list_conversations_for_participant(
        self,
        participant_id: UUID,
        limit: int,
        offset: int,
    ) -> tuple[list[Conversation], int]:
        base_stmt: Select[tuple[Conversation]] = select(Conversation).where(
            or_(Conversation.user_id == participant_id, Conversation.expert_id == participant_id),
        )
        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Conversation.updated_at.desc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return list(items), total

    async def list_messages(self, conversation_id: UUID, limit: int, offset: int) -> tuple[list[Message], int]:
        base_stmt: Select[tuple[Message]] = select(Message).where(Message.conversation_id == conversation_id)
        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = base_stmt.order_by(Message.created_at.asc()).limit(limit).offset(offset)
        items = (await self.session.scalars(stmt)).all()
        return list(items), total

    async def create_message(
        self,
        conversation: Conversation,
        sender_id: UUID,
        content: str,
        message_type: MessageTypeEnum = MessageTypeEnum.TEXT,
    ) -> Message:
        message = Message(
            conversation_id=conversation.id,
            sender_id=sender_id,
            content=content,
            message_type=message_type,
        )
        self.session.add(message)
        # Bump the conversation so inbox ordering follows the latest message.
        conversation.updated_at = utc_now()
        await self.session.flush()
        return message
