"""Identity business logic layer."""

from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.core.security import decode_token, oauth2_scheme, optional_oauth2_scheme
from app.modules.identity.models import Profile
from app.modules.identity.repository import IdentityRepository
from app.modules.identity.schemas import ProfileUpdate
from app.shared.exceptions import AuthenticationException, UnauthorizedException


class IdentityService:
    """Resolves callers to profiles and edits the caller's own profile."""

    def __init__(self, repository: IdentityRepository) -> None:
        self.repository = repository

    async def get_profile_from_access_token(self, token: str) -> Profile:
        """Resolve profile from an auth provider access token."""
        payload = decode_token(token)
        if payload.get("type", "access") != "access":
            raise AuthenticationException("Invalid access token")

        subject = payload.get("sub")
        if not subject:
            raise AuthenticationException("Token subject is missing")

        profile = await self.repository.get_profile_by_user_id(str(subject))
        if profile is None:
            raise UnauthorizedException("Profile not found for current account")
        return profile

    async def update_own_profile(self, profile: Profile, payload: ProfileUpdate) -> Profile:
        """Apply a partial update to the caller's own profile."""
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            return profile
        return await self.repository.update_profile(profile, **changes)


async def get_identity_service(session: AsyncSession = Depends(get_db_session)) -> IdentityService:
    """Dependency to provide identity service."""
    return IdentityService(IdentityRepository(session))


async def get_current_profile(
    token: str = Depends(oauth2_scheme),
    service: IdentityService = Depends(get_identity_service),
) -> Profile:
    """Resolve currently authenticated profile from bearer token."""
    return await service.get_profile_from_access_token(token)


async def get_optional_profile(
    token: str | None = Depends(optional_oauth2_scheme),
    service: IdentityService = Depends(get_identity_service),
) -> Profile | None:
    """Resolve the caller when a bearer token is present, anonymous otherwise."""
    if not token:
        return None
    return await service.get_profile_from_access_token(token)


async def require_expert(current_profile: Profile = Depends(get_current_profile)) -> Profile:
    if not current_profile.is_expert:
        raise UnauthorizedException("Only experts can perform this operation")
    return current_profile


async def require_admin(current_profile: Profile = Depends(get_current_profile)) -> Profile:
    if not current_profile.is_admin:
        raise UnauthorizedException("Only administrators can perform this operation")
    return current_profile
