from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest

from app.core.enums import ConversationStatusEnum
from app.modules.messaging.schemas import MessageCreate
from app.modules.messaging.service import MessagingService
from app.shared.exceptions import BusinessRuleException, NotFoundException, UnauthorizedException


@dataclass
class FakeConversation:
    id: UUID
    user_id: UUID
    expert_id: UUID
    status: ConversationStatusEnum = ConversationStatusEnum.ACTIVE


@dataclass
class FakeMessage:
    id: UUID
    conversation_id: UUID
    sender_id: UUID
    content: str


@dataclass
class FakeMessagingRepository:
    conversations: dict[UUID, FakeConversation]
    messages: list[FakeMessage] = field(default_factory=list)

    async def get_conversation_by_id(self, conversation_id: UUID) -> FakeConversation | None:
        return self.conversations.get(conversation_id)

    async def list_messages(self, conversation_id: UUID, limit: int, offset: int) -> tuple[list[FakeMessage], int]:
        items = [item for item in self.messages if item.conversation_id == conversation_id]
        return items[offset : offset + limit], len(items)

    async def create_message(self, conversation: FakeConversation, sender_id: UUID, content: str) -> FakeMessage:
        message = FakeMessage(id=uuid4(), conversation_id=conversation.id, sender_id=sender_id, content=content)
        self.messages.append(message)
        return message


class FakeSessionService:
    def __init__(self, allowed: bool) -> None:
        self.allowed = allowed
        self.calls: list[tuple[UUID, UUID]] = []

    async def check_chat_permission(self, user_id: UUID, expert_id: UUID) -> bool:
        self.calls.append((user_id, expert_id))
        return self.allowed


def _build(allowed: bool = True, status: ConversationStatusEnum = ConversationStatusEnum.ACTIVE):
    conversation = FakeConversation(id=uuid4(), user_id=uuid4(), expert_id=uuid4(), status=status)
    repository = FakeMessagingRepository({conversation.id: conversation})
    session_service = FakeSessionService(allowed)
    return MessagingService(repository, session_service), repository, session_service, conversation


@pytest.mark.asyncio
async def test_participant_can_send_message_while_chat_is_enabled() -> None:
    service, repository, session_service, conversation = _build(allowed=True)
    expert = SimpleNamespace(id=conversation.expert_id)

    message = await service.send_message(conversation.id, MessageCreate(content="Hello!"), expert)

    assert message.sender_id == expert.id
    assert repository.messages == [message]
    assert session_service.calls == [(conversation.user_id, conversation.expert_id)]


@pytest.mark.asyncio
async def test_send_message_rejected_when_chat_permission_denied() -> None:
    service, repository, _, conversation = _build(allowed=False)

    with pytest.raises(BusinessRuleException, match="Chat is not enabled"):
        await service.send_message(
            conversation.id,
            MessageCreate(content="Still there?"),
            SimpleNamespace(id=conversation.user_id),
        )
    assert repository.messages == []


@pytest.mark.asyncio
async def test_send_message_rejected_for_closed_conversation() -> None:
    service, _, session_service, conversation = _build(status=ConversationStatusEnum.CLOSED)

    with pytest.raises(BusinessRuleException):
        await service.send_message(
            conversation.id,
            MessageCreate(content="Hi"),
            SimpleNamespace(id=conversation.user_id),
        )
    assert session_service.calls == []


@pytest.mark.asyncio
async def test_outsider_cannot_read_or_write_conversation() -> None:
    service, _, _, conversation = _build()
    outsider = SimpleNamespace(id=uuid4())

    with pytest.raises(UnauthorizedException):
        await service.list_messages(conversation.id, outsider, limit=20, offset=0)
    with pytest.raises(UnauthorizedException):
        await service.send_message(conversation.id, MessageCreate(content="Hi"), outsider)


@pytest.mark.asyncio
async def test_unknown_conversation_raises_not_found() -> None:
    service, _, _, _ = _build()

    with pytest.raises(NotFoundException):
        await service.list_messages(uuid4(), SimpleNamespace(id=uuid4()), limit=20, offset=0)


def test_blank_message_content_is_rejected() -> None:
    with pytest.raises(ValueError):
        MessageCreate(content="   ")
