"""Community API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from app.modules.community.schemas import SuggestionCreate, SuggestionRead, WaitlistCreate, WaitlistRead
from app.modules.community.service import CommunityService, get_community_service
from app.modules.identity.models import Profile
from app.modules.identity.service import get_optional_profile

router = APIRouter(prefix="/community", tags=["community"])


@router.post("/expert-suggestions", response_model=SuggestionRead, status_code=status.HTTP_201_CREATED)
async def suggest_expert(
    payload: SuggestionCreate,
    service: CommunityService = Depends(get_community_service),
    current_profile: Profile | None = Depends(get_optional_profile),
) -> SuggestionRead:
    """Suggest a new expert for the marketplace."""
    suggestion = await service.suggest_expert(payload, current_profile)
    return SuggestionRead.model_validate(suggestion)


@router.post("/waitlist", response_model=WaitlistRead, status_code=status.HTTP_201_CREATED)
async def join_waitlist(
    payload: WaitlistCreate,
    service: CommunityService = Depends(get_community_service),
) -> WaitlistRead:
    entry = await service.join_waitlist(payload)
    return WaitlistRead.model_validate(entry)
