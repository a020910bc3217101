"""Session lifecycle SQL run against a real (SQLite) database."""

from __future__ import annotations

from collections.abc import AsyncIterator
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.modules  # noqa: F401
from app.core.database import Base
from app.core.enums import ServiceTypeEnum, SessionStatusEnum
from app.modules.experts.models import ExpertService
from app.modules.identity.models import Profile
from app.modules.messaging.repository import MessagingRepository
from app.modules.sessions.models import Booking
from app.modules.sessions.repository import SessionsRepository
from app.modules.sessions.schemas import BookingCreate
from app.modules.sessions.service import SessionService
from app.shared.exceptions import NotFoundException

FIXED_NOW = datetime(2026, 2, 19, 12, 0, tzinfo=UTC)


@dataclass
class Marketplace:
    client: Profile
    expert: Profile
    other_expert: Profile
    hourly: ExpertService
    weekly: ExpertService
    retired: ExpertService
    foreign: ExpertService


@pytest_asyncio.fixture()
async def db_session() -> AsyncIterator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture()
async def marketplace(db_session: AsyncSession) -> Marketplace:
    client = Profile(user_id="client", email="client@example.com", first_name="Ada", last_name="Client")
    expert = Profile(
        user_id="expert",
        email="expert@example.com",
        first_name="Grace",
        last_name="Expert",
        is_expert=True,
    )
    other_expert = Profile(user_id="other", email="other@example.com", first_name="Alan", is_expert=True)
    db_session.add_all([client, expert, other_expert])
    await db_session.flush()

    def _service(owner: Profile, title: str, service_type: ServiceTypeEnum, is_active: bool = True) -> ExpertService:
        return ExpertService(
            expert_id=owner.id,
            title=title,
            service_type=service_type,
            price=Decimal("60.00"),
            availability_slots=3,
            is_active=is_active,
        )

    hourly = _service(expert, "Deep dive", ServiceTypeEnum.ONE_HOUR)
    weekly = _service(expert, "Week of chat", ServiceTypeEnum.ONE_WEEK)
    retired = _service(expert, "Old call", ServiceTypeEnum.THIRTY_MINUTES, is_active=False)
    foreign = _service(other_expert, "Someone else's call", ServiceTypeEnum.ONE_HOUR)
    db_session.add_all([hourly, weekly, retired, foreign])
    await db_session.flush()
    return Marketplace(client, expert, other_expert, hourly, weekly, retired, foreign)


async def _start(
    repository: SessionsRepository,
    market: Marketplace,
    service: ExpertService,
    *,
    created_at: datetime,
    auto_completion_date: datetime | None = None,
) -> Booking:
    booking = await repository.create_booking(
        user_id=market.client.id,
        expert_id=service.expert_id,
        service_id=service.id,
        price_paid=Decimal("60.00"),
        status=SessionStatusEnum.CONFIRMED,
    )
    booking.created_at = created_at
    return await repository.start_session(booking, auto_completion_date)


@pytest.mark.asyncio
async def test_service_type_lookup_is_scoped_to_active_services_of_the_expert(
    db_session: AsyncSession,
    marketplace: Marketplace,
) -> None:
    repository = SessionsRepository(db_session)

    hourly_type = await repository.get_service_type(marketplace.hourly.id, marketplace.expert.id)
    assert hourly_type == ServiceTypeEnum.ONE_HOUR
    assert await repository.get_service_type(marketplace.foreign.id, marketplace.expert.id) is None
    assert await repository.get_service_type(marketplace.retired.id, marketplace.expert.id) is None


@pytest.mark.asyncio
async def test_booking_another_experts_service_does_not_open_chat(
    db_session: AsyncSession,
    marketplace: Marketplace,
) -> None:
    service = SessionService(SessionsRepository(db_session), MessagingRepository(db_session))
    client = SimpleNamespace(id=marketplace.client.id)

    with pytest.raises(NotFoundException):
        await service.create_booking(
            BookingCreate(
                expert_id=marketplace.expert.id,
                service_id=marketplace.foreign.id,
                price_paid=Decimal("60.00"),
            ),
            client,
        )
    with pytest.raises(NotFoundException):
        await service.create_booking(
            BookingCreate(
                expert_id=marketplace.expert.id,
                service_id=marketplace.retired.id,
                price_paid=Decimal("60.00"),
            ),
            client,
        )

    assert await service.check_chat_permission(marketplace.client.id, marketplace.expert.id) is False


@pytest.mark.asyncio
async def test_complete_expert_session_updates_only_owned_per_session_booking(
    db_session: AsyncSession,
    marketplace: Marketplace,
) -> None:
    repository = SessionsRepository(db_session)
    hourly = await _start(repository, marketplace, marketplace.hourly, created_at=FIXED_NOW)
    weekly = await _start(
        repository,
        marketplace,
        marketplace.weekly,
        created_at=FIXED_NOW + timedelta(minutes=1),
        auto_completion_date=FIXED_NOW + timedelta(days=7),
    )

    assert await repository.complete_expert_session(hourly.id, marketplace.other_expert.id, "notes") is False
    assert await repository.complete_expert_session(weekly.id, marketplace.expert.id, "notes") is False
    assert await repository.complete_expert_session(uuid4(), marketplace.expert.id, "notes") is False
    assert await repository.complete_expert_session(hourly.id, marketplace.expert.id, "Covered the agenda") is True
    assert await repository.complete_expert_session(hourly.id, marketplace.expert.id, None) is False

    await db_session.refresh(hourly)
    await db_session.refresh(weekly)
    assert hourly.status == SessionStatusEnum.COMPLETED
    assert hourly.chat_enabled is False
    assert hourly.notes == "Covered the agenda"
    assert weekly.status == SessionStatusEnum.IN_PROGRESS
    assert weekly.chat_enabled is True


@pytest.mark.asyncio
async def test_list_active_sessions_joins_service_and_counterpart(
    db_session: AsyncSession,
    marketplace: Marketplace,
) -> None:
    repository = SessionsRepository(db_session)
    weekly = await _start(
        repository,
        marketplace,
        marketplace.weekly,
        created_at=FIXED_NOW + timedelta(minutes=5),
        auto_completion_date=FIXED_NOW + timedelta(days=7),
    )
    hourly = await _start(repository, marketplace, marketplace.hourly, created_at=FIXED_NOW)
    closed = await _start(repository, marketplace, marketplace.hourly, created_at=FIXED_NOW + timedelta(minutes=9))
    await repository.complete_expert_session(closed.id, marketplace.expert.id, None)

    user_rows = await repository.list_active_sessions(user_id=marketplace.client.id)
    expert_rows = await repository.list_active_sessions(expert_id=marketplace.expert.id)

    assert [row[0].id for row in user_rows] == [hourly.id, weekly.id]
    assert tuple(user_rows[0])[1:] == ("Deep dive", ServiceTypeEnum.ONE_HOUR, "Grace", "Expert")
    assert [row[0].id for row in expert_rows] == [hourly.id, weekly.id]
    assert tuple(expert_rows[1])[1:] == ("Week of chat", ServiceTypeEnum.ONE_WEEK, "Ada", "Client")
    assert await repository.list_active_sessions(expert_id=marketplace.other_expert.id) == []

    with pytest.raises(ValueError):
        await repository.list_active_sessions()


@pytest.mark.asyncio
async def test_complete_expired_sessions_includes_boundary_and_is_idempotent(
    db_session: AsyncSession,
    marketplace: Marketplace,
) -> None:
    repository = SessionsRepository(db_session)
    due = await _start(
        repository,
        marketplace,
        marketplace.weekly,
        created_at=FIXED_NOW - timedelta(days=7),
        auto_completion_date=FIXED_NOW,
    )
    later = await _start(
        repository,
        marketplace,
        marketplace.weekly,
        created_at=FIXED_NOW,
        auto_completion_date=FIXED_NOW + timedelta(days=7),
    )
    hourly = await _start(repository, marketplace, marketplace.hourly, created_at=FIXED_NOW)

    assert await repository.complete_expired_sessions(FIXED_NOW) == [due.id]
    assert await repository.complete_expired_sessions(FIXED_NOW) == []

    for booking in (due, later, hourly):
        await db_session.refresh(booking)
    assert due.status == SessionStatusEnum.COMPLETED
    assert due.chat_enabled is False
    assert later.status == SessionStatusEnum.IN_PROGRESS
    assert hourly.status == SessionStatusEnum.IN_PROGRESS
