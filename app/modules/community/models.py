"""Community ORM models: expert suggestions and waitlist sign-ups."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import AppendOnlyModelMixin, Base, str_enum
from app.core.enums import WaitlistStatusEnum


class ExpertSuggestion(AppendOnlyModelMixin, Base):
    """Visitor suggestion of an expert to onboard."""

    __tablename__ = "expert_suggestions"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(128), nullable=True)
    submitted_by: Mapped[UUID | None] = mapped_column(
        ForeignKey("profiles.id", ondelete="SET NULL"),
        nullable=True,
    )


class WaitlistEntry(AppendOnlyModelMixin, Base):
    __tablename__ = "waitlist"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[WaitlistStatusEnum] = mapped_column(
        str_enum(WaitlistStatusEnum, "waitlist_status_enum"),
        default=WaitlistStatusEnum.PENDING,
        nullable=False,
    )
