"""Experts catalogue ORM models."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import AppendOnlyModelMixin, Base, BaseModelMixin, str_enum
from app.core.enums import ServiceTypeEnum

if TYPE_CHECKING:
    from app.modules.identity.models import Profile


class ExpertService(BaseModelMixin, Base):
    """Service offered by an expert; its type decides the session completion policy."""

    __tablename__ = "expert_services"

    expert_id: Mapped[UUID] = mapped_column(
        ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    service_type: Mapped[ServiceTypeEnum] = mapped_column(
        str_enum(ServiceTypeEnum, "service_type_enum"),
        nullable=False,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    availability_slots: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    expert: Mapped["Profile"] = relationship()


class ExpertCategory(AppendOnlyModelMixin, Base):
    """Marketplace category used for filtering experts."""

    __tablename__ = "expert_categories"

    name: Mapped[str] = mapped_column(String(128), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int | None] = mapped_column(Integer, nullable=True)


class ExpertCategoryAssociation(AppendOnlyModelMixin, Base):
    __tablename__ = "expert_category_associations"
    __table_args__ = (UniqueConstraint("expert_id", "category_id", name="uq_expert_category_pair"),)

    expert_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id: Mapped[UUID] = mapped_column(
        ForeignKey("expert_categories.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )


class ExpertVideo(AppendOnlyModelMixin, Base):
    __tablename__ = "expert_videos"

    expert_id: Mapped[UUID] = mapped_column(ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    url: Mapped[str] = mapped_column(String(1024), nullable=False)
