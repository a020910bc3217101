"""Identity ORM models."""

from __future__ import annotations

from decimal import Decimal

from sqlalchemy import JSON, Boolean, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, BaseModelMixin


class Profile(BaseModelMixin, Base):
    """Marketplace profile of an authenticated account (client or expert)."""

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    first_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    last_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    home_country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    specialties: Mapped[list[str] | None] = mapped_column(
        ARRAY(String(128)).with_variant(JSON(), "sqlite"),
        nullable=True,
    )
    starting_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)

    profile_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    preview_image_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    linkedin_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    instagram_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    facebook_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    is_expert: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False, index=True)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    # Lower rank is listed first; unranked experts go last.
    expert_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
