"""Session lifecycle business logic layer.

A booking starts its session immediately: it is inserted as ``confirmed``,
moved to ``in_progress`` in the same flow and gets a conversation. Weekly and
monthly services carry an ``auto_completion_date`` and are closed by the
expiry sweep; per-session services stay open until the expert completes them.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.core.enums import ConversationStatusEnum, ServiceTypeEnum, SessionStatusEnum
from app.core.metrics import record_session_started, record_sessions_completed
from app.modules.identity.models import Profile
from app.modules.messaging.repository import MessagingRepository
from app.modules.sessions.repository import SessionsRepository
from app.modules.sessions.schemas import ActiveSessionRead, BookingCreate, SessionInfo
from app.shared.exceptions import NotFoundException
from app.shared.utils import ensure_utc, utc_now

settings = get_settings()
logger = logging.getLogger(__name__)


def compute_auto_completion_date(service_type: ServiceTypeEnum, started_at: datetime) -> datetime | None:
    """Return when a session of this type closes by itself, or None for per-session types."""
    if service_type == ServiceTypeEnum.ONE_WEEK:
        return started_at + timedelta(days=settings.session_week_duration_days)
    if service_type == ServiceTypeEnum.ONE_MONTH:
        return started_at + timedelta(days=settings.session_month_duration_days)
    return None


class SessionService:
    """Turns purchases into chat-enabled sessions and closes them out."""

    def __init__(
        self,
        sessions_repository: SessionsRepository,
        messaging_repository: MessagingRepository,
    ) -> None:
        self.sessions_repository = sessions_repository
        self.messaging_repository = messaging_repository

    async def create_booking(self, payload: BookingCreate, actor: Profile) -> SessionInfo:
        """Book a service and start its session right away.

        The steps are not compensated: a failure after the insert leaves the
        earlier writes to the surrounding transaction.
        """
        booking = await self.sessions_repository.create_booking(
            user_id=actor.id,
            expert_id=payload.expert_id,
            service_id=payload.service_id,
            price_paid=payload.price_paid,
            status=SessionStatusEnum.CONFIRMED,
        )

        service_type = await self.sessions_repository.get_service_type(payload.service_id, payload.expert_id)
        if service_type is None:
            raise NotFoundException("Service not found for this expert")

        auto_completion_date = compute_auto_completion_date(ServiceTypeEnum(service_type), utc_now())
        booking = await self.sessions_repository.start_session(booking, auto_completion_date)

        await self.messaging_repository.create_conversation(
            user_id=actor.id,
            expert_id=payload.expert_id,
            booking_id=booking.id,
            status=ConversationStatusEnum.ACTIVE,
        )

        record_session_started(str(service_type))
        logger.info(
            "Session started for booking %s (service_type=%s, auto_completion_date=%s)",
            booking.id,
            service_type,
            auto_completion_date,
        )
        return SessionInfo(
            booking_id=booking.id,
            session_started_at=booking.created_at,
            chat_enabled=booking.chat_enabled,
            auto_completion_date=booking.auto_completion_date,
            status=booking.status,
        )

    async def check_chat_permission(self, user_id: UUID, expert_id: UUID) -> bool:
        """Whether the pair has a live session; any lookup error denies."""
        try:
            booking = await self.sessions_repository.find_chat_enabled_booking(user_id, expert_id)
        except Exception:
            logger.exception("Chat permission lookup failed for user %s and expert %s", user_id, expert_id)
            await self.sessions_repository.reset()
            return False

        if booking is None:
            return False
        # Read-time expiry: the row may still be in_progress until the sweep runs.
        if booking.auto_completion_date is not None and utc_now() > ensure_utc(booking.auto_completion_date):
            return False
        return True

    async def complete_session(
        self,
        booking_id: UUID,
        actor: Profile,
        expert_notes: str | None = None,
    ) -> bool:
        """Expert closes a per-session booking; False covers every refusal and error."""
        notes = (expert_notes or "").strip() or None
        try:
            completed = await self.sessions_repository.complete_expert_session(booking_id, actor.id, notes)
        except Exception:
            logger.exception("Completing session for booking %s failed", booking_id)
            await self.sessions_repository.reset()
            return False

        if completed:
            record_sessions_completed("manual")
            logger.info("Session for booking %s completed by expert %s", booking_id, actor.id)
        return completed

    async def list_user_active_sessions(self, user_id: UUID) -> list[ActiveSessionRead]:
        return await self._list_active_sessions(user_id=user_id)

    async def list_expert_active_sessions(self, expert_id: UUID) -> list[ActiveSessionRead]:
        return await self._list_active_sessions(expert_id=expert_id)

    async def _list_active_sessions(
        self,
        *,
        user_id: UUID | None = None,
        expert_id: UUID | None = None,
    ) -> list[ActiveSessionRead]:
        try:
            rows = await self.sessions_repository.list_active_sessions(user_id=user_id, expert_id=expert_id)
        except Exception:
            logger.exception("Listing active sessions failed (user=%s, expert=%s)", user_id, expert_id)
            await self.sessions_repository.reset()
            return []

        sessions = []
        for booking, service_title, service_type, first_name, last_name in rows:
            sessions.append(
                ActiveSessionRead(
                    booking_id=booking.id,
                    created_at=booking.created_at,
                    chat_enabled=booking.chat_enabled,
                    auto_completion_date=booking.auto_completion_date,
                    status=booking.status,
                    service_title=service_title,
                    service_type=service_type,
                    counterpart_id=booking.expert_id if user_id is not None else booking.user_id,
                    counterpart_first_name=first_name,
                    counterpart_last_name=last_name,
                ),
            )
        return sessions

    async def expire_sessions(self) -> int:
        """Complete every in-progress session whose auto-completion date has passed."""
        try:
            completed_ids = await self.sessions_repository.complete_expired_sessions(utc_now())
        except Exception:
            logger.exception("Expired sessions sweep failed")
            await self.sessions_repository.reset()
            return 0

        record_sessions_completed("expiry", len(completed_ids))
        if completed_ids:
            logger.info("Auto-completed %s expired sessions", len(completed_ids))
        return len(completed_ids)


async def get_session_service(session: AsyncSession = Depends(get_db_session)) -> SessionService:
    """Dependency provider for session service."""
    return SessionService(
        sessions_repository=SessionsRepository(session),
        messaging_repository=MessagingRepository(session),
    )
