"""Sessions API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, status

from app.modules.identity.models import Profile
from app.modules.identity.service import get_current_profile, require_admin, require_expert
from app.modules.sessions.schemas import (
    ActiveSessionRead,
    BookingCreate,
    ChatPermissionRead,
    ExpiredSessionsSweepResult,
    SessionCompleteRequest,
    SessionCompletionResult,
    SessionInfo,
)
from app.modules.sessions.service import SessionService, get_session_service

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/bookings", response_model=SessionInfo, status_code=status.HTTP_201_CREATED)
async def create_booking(
    payload: BookingCreate,
    service: SessionService = Depends(get_session_service),
    current_profile: Profile = Depends(get_current_profile),
) -> SessionInfo:
    """Book a service and start the chat session."""
    return await service.create_booking(payload, current_profile)


@router.get("/chat-permission/{expert_id}", response_model=ChatPermissionRead)
async def get_chat_permission(
    expert_id: UUID,
    service: SessionService = Depends(get_session_service),
    current_profile: Profile = Depends(get_current_profile),
) -> ChatPermissionRead:
    allowed = await service.check_chat_permission(current_profile.id, expert_id)
    return ChatPermissionRead(user_id=current_profile.id, expert_id=expert_id, allowed=allowed)


@router.post("/{booking_id}/complete", response_model=SessionCompletionResult)
async def complete_session(
    booking_id: UUID,
    payload: SessionCompleteRequest | None = None,
    service: SessionService = Depends(get_session_service),
    current_expert: Profile = Depends(require_expert),
) -> SessionCompletionResult:
    """Expert closes a 30-minute or 1-hour session."""
    expert_notes = payload.expert_notes if payload is not None else None
    completed = await service.complete_session(booking_id, current_expert, expert_notes)
    return SessionCompletionResult(booking_id=booking_id, completed=completed)


@router.get("/active", response_model=list[ActiveSessionRead])
async def list_my_active_sessions(
    service: SessionService = Depends(get_session_service),
    current_profile: Profile = Depends(get_current_profile),
) -> list[ActiveSessionRead]:
    """Active sessions where the caller is the client."""
    return await service.list_user_active_sessions(current_profile.id)


@router.get("/expert/active", response_model=list[ActiveSessionRead])
async def list_expert_active_sessions(
    service: SessionService = Depends(get_session_service),
    current_expert: Profile = Depends(require_expert),
) -> list[ActiveSessionRead]:
    """Active sessions where the caller is the expert."""
    return await service.list_expert_active_sessions(current_expert.id)


@router.post("/expire", response_model=ExpiredSessionsSweepResult)
async def expire_sessions(
    service: SessionService = Depends(get_session_service),
    _: Profile = Depends(require_admin),
) -> ExpiredSessionsSweepResult:
    """Run the expiry sweep on demand (same as the worker)."""
    return ExpiredSessionsSweepResult(completed=await service.expire_sessions())
