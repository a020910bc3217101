"""Messaging API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.modules.identity.models import Profile
from app.modules.identity.service import get_current_profile
from app.modules.messaging.schemas import ConversationRead, MessageCreate, MessageRead
from app.modules.messaging.service import MessagingService, get_messaging_service
from app.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/messaging", tags=["messaging"])


@router.get("/conversations", response_model=Page[ConversationRead])
async def list_my_conversations(
    pagination=Depends(get_pagination_params),
    service: MessagingService = Depends(get_messaging_service),
    current_profile: Profile = Depends(get_current_profile),
) -> Page[ConversationRead]:
    """List conversations where the caller is a participant."""
    items, total = await service.list_conversations(current_profile, pagination.limit, pagination.offset)
    serialized = [ConversationRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/conversations/{conversation_id}/messages", response_model=Page[MessageRead])
async def list_messages(
    conversation_id: UUID,
    pagination=Depends(get_pagination_params),
    service: MessagingService = Depends(get_messaging_service),
    current_profile: Profile = Depends(get_current_profile),
) -> Page[MessageRead]:
    items, total = await service.list_messages(
        conversation_id,
        current_profile,
        pagination.limit,
        pagination.offset,
    )
    serialized = [MessageRead.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.post(
    "/conversations/{conversation_id}/messages",
    response_model=MessageRead,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    conversation_id: UUID,
    payload: MessageCreate,
    service: MessagingService = Depends(get_messaging_service),
    current_profile: Profile = Depends(get_current_profile),
) -> MessageRead:
    """Send a message while the booking session allows chat."""
    message = await service.send_message(conversation_id, payload, current_profile)
    return MessageRead.model_validate(message)
