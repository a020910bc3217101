"""Identity repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.identity.models import Profile


class IdentityRepository:
    """DB operations for profiles."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_profile_by_id(self, profile_id: UUID) -> Profile | None:
        return await self.session.scalar(select(Profile).where(Profile.id == profile_id))

    async def get_profile_by_user_id(self, user_id: str) -> Profile | None:
        return await self.session.scalar(select(Profile).where(Profile.user_id == user_id))

    async def update_profile(self, profile: Profile, **changes) -> Profile:
        for key, value in changes.items():
            setattr(profile, key, value)
        await self.session.flush()
        return profile
