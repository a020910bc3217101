"""Community repository layer."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.modules.community.models import ExpertSuggestion, WaitlistEntry


class CommunityRepository:
    """DB operations for suggestions and waitlist."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_suggestion(
        self,
        name: str,
        reason: str,
        category: str | None,
        submitted_by: UUID | None,
    ) -> ExpertSuggestion:
        suggestion = ExpertSuggestion(
            name=name,
            reason=reason,
            category=category,
            submitted_by=submitted_by,
        )
        self.session.add(suggestion)
        await self.session.flush()
        return suggestion

    async def get_waitlist_entry_by_email(self, email: str) -> WaitlistEntry | None:
        stmt = select(WaitlistEntry).where(func.lower(WaitlistEntry.email) == email.lower())
        return await self.session.scalar(stmt)

    async def create_waitlist_entry(
        self,
        email: str,
        first_name: str | None,
        last_name: str | None,
        reason: str | None,
    ) -> WaitlistEntry:
        entry = WaitlistEntry(email=email, first_name=first_name, last_name=last_name, reason=reason)
        self.session.add(entry)
        await self.session.flush()
        return entry
