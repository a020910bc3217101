"""Session lifecycle repository layer."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from sqlalchemy import Row, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ServiceTypeEnum, SessionStatusEnum
from app.modules.experts.models import ExpertService
from app.modules.identity.models import Profile
from app.modules.sessions.models import Booking

PER_SESSION_SERVICE_TYPES = tuple(item for item in ServiceTypeEnum if item.is_per_session)


class SessionsRepository:
    """DB operations for bookings and their session state."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_booking(
        self,
        user_id: UUID,
        expert_id: UUID,
        service_id: UUID,
        price_paid: Decimal,
        status: SessionStatusEnum,
    ) -> Booking:
        booking = Booking(
            user_id=user_id,
            expert_id=expert_id,
            service_id=service_id,
            price_paid=price_paid,
            status=status,
        )
        self.session.add(booking)
        await self.session.flush()
        return booking

    async def get_service_type(self, service_id: UUID, expert_id: UUID) -> ServiceTypeEnum | None:
        """Type of an active service offered by this expert, None for anything else."""
        stmt = select(ExpertService.service_type).where(
            ExpertService.id == service_id,
            ExpertService.expert_id == expert_id,
            ExpertService.is_active.is_(True),
        )
        return await self.session.scalar(stmt)

    async def start_session(self, booking: Booking, auto_completion_date: datetime | None) -> Booking:
        booking.status = SessionStatusEnum.IN_PROGRESS
        booking.auto_completion_date = auto_completion_date
        await self.session.flush()
        return booking

    async def find_chat_enabled_booking(self, user_id: UUID, expert_id: UUID) -> Booking | None:
        """Return the newest in-progress, chat-enabled booking for the pair."""
        stmt = (
            select(Booking)
            .where(
                Booking.user_id == user_id,
                Booking.expert_id == expert_id,
                Booking.status == SessionStatusEnum.IN_PROGRESS,
                Booking.chat_enabled.is_(True),
            )
            .order_by(Booking.created_at.desc())
            .limit(1)
        )
        return await self.session.scalar(stmt)

    async def complete_expert_session(
        self,
        booking_id: UUID,
        expert_id: UUID,
        expert_notes: str | None,
    ) -> bool:
        """Close a per-session booking owned by the expert in one conditional update."""
        per_session_services = select(ExpertService.id).where(
            ExpertService.service_type.in_(PER_SESSION_SERVICE_TYPES),
        )
        stmt = (
            update(Booking)
            .where(
                Booking.id == booking_id,
                Booking.expert_id == expert_id,
                Booking.status == SessionStatusEnum.IN_PROGRESS,
                Booking.service_id.in_(per_session_services.scalar_subquery()),
            )
            .values(
                status=SessionStatusEnum.COMPLETED,
                chat_enabled=False,
                notes=func.coalesce(expert_notes, Booking.notes),
            )
            .returning(Booking.id)
            .execution_options(synchronize_session="fetch")
        )
        completed_id = (await self.session.execute(stmt)).scalar_one_or_none()
        return completed_id is not None

    async def list_active_sessions(
        self,
        *,
        user_id: UUID | None = None,
        expert_id: UUID | None = None,
    ) -> list[Row[Any]]:
        """Active sessions of one party, joined with service and counterpart names.

        Rows are ``(Booking, service_title, service_type, counterpart_first_name,
        counterpart_last_name)``.
        """
        if (user_id is None) == (expert_id is None):
            raise ValueError("Exactly one of user_id or expert_id must be given")

        if user_id is not None:
            party_filter = Booking.user_id == user_id
            counterpart_join = Profile.id == Booking.expert_id
        else:
            party_filter = Booking.expert_id == expert_id
            counterpart_join = Profile.id == Booking.user_id

        stmt = (
            select(
                Booking,
                ExpertService.title,
                ExpertService.service_type,
                Profile.first_name,
                Profile.last_name,
            )
            .join(ExpertService, ExpertService.id == Booking.service_id)
            .join(Profile, counterpart_join)
            .where(
                party_filter,
                Booking.status == SessionStatusEnum.IN_PROGRESS,
                Booking.chat_enabled.is_(True),
            )
            .order_by(Booking.created_at.asc())
        )
        return list((await self.session.execute(stmt)).all())

    async def complete_expired_sessions(self, now: datetime) -> list[UUID]:
        stmt = (
            update(Booking)
            .where(
                Booking.status == SessionStatusEnum.IN_PROGRESS,
                Booking.auto_completion_date.is_not(None),
                Booking.auto_completion_date <= now,
            )
            .values(status=SessionStatusEnum.COMPLETED, chat_enabled=False)
            .returning(Booking.id)
            .execution_options(synchronize_session=False)
        )
        return list((await self.session.scalars(stmt)).all())

    async def reset(self) -> None:
        """Drop a failed transaction so the session stays usable."""
        await self.session.rollback()
