from __future__ import annotations

from dataclasses import dataclass, field
from types import SimpleNamespace
from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from app.core.enums import WaitlistStatusEnum
from app.modules.community.schemas import SuggestionCreate, WaitlistCreate
from app.modules.community.service import CommunityService
from app.shared.exceptions import ConflictException


@dataclass
class FakeSuggestion:
    id: UUID
    name: str
    reason: str
    category: str | None
    submitted_by: UUID | None


@dataclass
class FakeWaitlistEntry:
    id: UUID
    email: str
    first_name: str | None
    last_name: str | None
    reason: str | None
    status: WaitlistStatusEnum = WaitlistStatusEnum.PENDING


@dataclass
class FakeCommunityRepository:
    suggestions: list[FakeSuggestion] = field(default_factory=list)
    waitlist: dict[str, FakeWaitlistEntry] = field(default_factory=dict)

    async def create_suggestion(
        self,
        name: str,
        reason: str,
        category: str | None,
        submitted_by: UUID | None,
    ) -> FakeSuggestion:
        suggestion = FakeSuggestion(
            id=uuid4(),
            name=name,
            reason=reason,
            category=category,
            submitted_by=submitted_by,
        )
        self.suggestions.append(suggestion)
        return suggestion

    async def get_waitlist_entry_by_email(self, email: str) -> FakeWaitlistEntry | None:
        return self.waitlist.get(email.lower())

    async def create_waitlist_entry(
        self,
        email: str,
        first_name: str | None,
        last_name: str | None,
        reason: str | None,
    ) -> FakeWaitlistEntry:
        entry = FakeWaitlistEntry(
            id=uuid4(),
            email=email,
            first_name=first_name,
            last_name=last_name,
            reason=reason,
        )
        self.waitlist[email] = entry
        return entry


@pytest.mark.asyncio
async def test_suggestion_records_submitter_when_authenticated() -> None:
    repository = FakeCommunityRepository()
    actor = SimpleNamespace(id=uuid4())

    suggestion = await CommunityService(repository).suggest_expert(
        SuggestionCreate(name="  Jane Doe ", reason="Great running coach", category=""),
        actor,
    )

    assert suggestion.name == "Jane Doe"
    assert suggestion.category is None
    assert suggestion.submitted_by == actor.id


@pytest.mark.asyncio
async def test_anonymous_suggestion_is_accepted() -> None:
    repository = FakeCommunityRepository()

    suggestion = await CommunityService(repository).suggest_expert(
        SuggestionCreate(name="John", reason="Writes great books", category="Creative"),
        None,
    )

    assert suggestion.submitted_by is None
    assert repository.suggestions == [suggestion]


def test_suggestion_requires_non_blank_name_and_reason() -> None:
    with pytest.raises(ValidationError):
        SuggestionCreate(name="   ", reason="because")
    with pytest.raises(ValidationError):
        SuggestionCreate(name="Jane", reason="")


@pytest.mark.asyncio
async def test_join_waitlist_normalizes_email_and_rejects_duplicates() -> None:
    repository = FakeCommunityRepository()
    service = CommunityService(repository)

    entry = await service.join_waitlist(WaitlistCreate(email="Fan@Example.com", first_name="Fan"))

    assert entry.email == "fan@example.com"
    assert entry.status == WaitlistStatusEnum.PENDING

    with pytest.raises(ConflictException):
        await service.join_waitlist(WaitlistCreate(email="fan@example.com"))
