"""Community business logic layer."""

from __future__ import annotations

import logging

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db_session
from app.modules.community.models import ExpertSuggestion, WaitlistEntry
from app.modules.community.repository import CommunityRepository
from app.modules.community.schemas import SuggestionCreate, WaitlistCreate
from app.modules.identity.models import Profile
from app.shared.exceptions import ConflictException

logger = logging.getLogger(__name__)


class CommunityService:
    """Expert suggestions and waitlist sign-ups."""

    def __init__(self, repository: CommunityRepository) -> None:
        self.repository = repository

    async def suggest_expert(self, payload: SuggestionCreate, actor: Profile | None) -> ExpertSuggestion:
        """Store a suggestion; anonymous visitors are allowed."""
        suggestion = await self.repository.create_suggestion(
            name=payload.name,
            reason=payload.reason,
            category=payload.category or None,
            submitted_by=actor.id if actor is not None else None,
        )
        logger.info("Expert suggestion %s received", suggestion.id)
        return suggestion

    async def join_waitlist(self, payload: WaitlistCreate) -> WaitlistEntry:
        email = str(payload.email).lower()
        existing = await self.repository.get_waitlist_entry_by_email(email)
        if existing is not None:
            raise ConflictException("Email is already on the waitlist")

        return await self.repository.create_waitlist_entry(
            email=email,
            first_name=payload.first_name or None,
            last_name=payload.last_name or None,
            reason=payload.reason or None,
        )


async def get_community_service(session: AsyncSession = Depends(get_db_session)) -> CommunityService:
    """Dependency provider for community service."""
    return CommunityService(CommunityRepository(session))
