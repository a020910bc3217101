"""Session lifecycle ORM models."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Numeric, Text, true
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin, str_enum
from app.core.enums import SessionStatusEnum


class Booking(BaseModelMixin, Base):
    """Purchase of an expert service; doubles as the chat-enabled session record."""

    __tablename__ = "bookings"
    __table_args__ = (CheckConstraint("price_paid >= 0", name="price_paid_non_negative"),)

    user_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    expert_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id: Mapped[UUID] = mapped_column(
        ForeignKey("expert_services.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    price_paid: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    status: Mapped[SessionStatusEnum] = mapped_column(
        str_enum(SessionStatusEnum, "session_status_enum"),
        default=SessionStatusEnum.CONFIRMED,
        nullable=False,
        index=True,
    )
    # Chat is on from row creation; only completion turns it off.
    chat_enabled: Mapped[bool] = mapped_column(Boolean, default=True, server_default=true(), nullable=False)
    auto_completion_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, index=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
