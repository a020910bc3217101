"""Identity API router."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.modules.identity.models import Profile
from app.modules.identity.schemas import ProfileRead, ProfileUpdate
from app.modules.identity.service import IdentityService, get_current_profile, get_identity_service

router = APIRouter(prefix="/identity", tags=["identity"])


@router.get("/profiles/me", response_model=ProfileRead)
async def get_my_profile(current_profile: Profile = Depends(get_current_profile)) -> ProfileRead:
    """Return profile of authenticated account."""
    return ProfileRead.model_validate(current_profile)


@router.patch("/profiles/me", response_model=ProfileRead)
async def update_my_profile(
    payload: ProfileUpdate,
    service: IdentityService = Depends(get_identity_service),
    current_profile: Profile = Depends(get_current_profile),
) -> ProfileRead:
    """Edit own profile fields."""
    profile = await service.update_own_profile(current_profile, payload)
    return ProfileRead.model_validate(profile)
