"""Messaging business logic layer."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.enums import ConversationStatusEnum
from app.modules.identity.models import Profile
from app.modules.messaging.models import Conversation, Message
from app.modules.messaging.repository import MessagingRepository
from app.modules.messaging.schemas import MessageCreate
from app.modules.sessions.repository import SessionsRepository
from app.modules.sessions.service import SessionService
from app.shared.exceptions import BusinessRuleException, NotFoundException, UnauthorizedException


class MessagingService:
    """Conversation inbox; sending is gated by the session chat permission."""

    def __init__(self, repository: MessagingRepository, session_service: SessionService) -> None:
        self.repository = repository
        self.session_service = session_service

    async def _get_conversation_for_participant(self, conversation_id: UUID, actor: Profile) -> Conversation:
        conversation = await self.repository.get_conversation_by_id(conversation_id)
        if conversation is None:
            raise NotFoundException("Conversation not found")
        if actor.id not in (conversation.user_id, conversation.expert_id):
            raise UnauthorizedException("You are not a participant of this conversation")
        return conversation

    async def list_conversations(self, actor: Profile, limit: int, offset: int) -> tuple[list[Conversation], int]:
        return await self.repository.list_conversations_for_participant(actor.id, limit, offset)

    async def list_messages(
        self,
        conversation_id: UUID,
        actor: Profile,
        limit: int,
        offset: int,
    ) -> tuple[list[Message], int]:
        conversation = await self._get_conversation_for_participant(conversation_id, actor)
        return await self.repository.list_messages(conversation.id, limit, offset)

    async def send_message(self, conversation_id: UUID, payload: MessageCreate, actor: Profile) -> Message:
        """Post a message if the pair still has a live session."""
        conversation = await self._get_conversation_for_participant(conversation_id, actor)
        if conversation.status != ConversationStatusEnum.ACTIVE:
            raise BusinessRuleException("Conversation is closed")

        allowed = await self.session_service.check_chat_permission(conversation.user_id, conversation.expert_id)
        if not allowed:
            raise BusinessRuleException("Chat is not enabled for this conversation")

        return await self.repository.create_message(conversation, actor.id, payload.content)


async def get_messaging_service(session: AsyncSession = Depends(get_db_session)) -> MessagingService:
    """Dependency provider for messaging service."""
    repository = MessagingRepository(session)
    return MessagingService(
        repository=repository,
        session_service=SessionService(SessionsRepository(session), repository),
    )
