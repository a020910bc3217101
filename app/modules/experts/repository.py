"""Experts repository layer."""

from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from sqlalchemy import Select, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import ServiceTypeEnum
from app.modules.experts.models import ExpertCategory, ExpertCategoryAssociation, ExpertService, ExpertVideo
from app.modules.identity.models import Profile
from app.shared.utils import escape_like


class ExpertsRepository:
    """DB operations for the experts catalogue."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _experts_stmt(self, query: str | None, category_name: str | None) -> Select[tuple[Profile]]:
        stmt: Select[tuple[Profile]] = select(Profile).where(Profile.is_expert.is_(True))
        if category_name:
            stmt = (
                stmt.join(ExpertCategoryAssociation, ExpertCategoryAssociation.expert_id == Profile.id)
                .join(ExpertCategory, ExpertCategory.id == ExpertCategoryAssociation.category_id)
                .where(ExpertCategory.name == category_name)
            )
        if query:
            pattern = f"%{escape_like(query)}%"
            stmt = stmt.where(
                or_(
                    Profile.first_name.ilike(pattern, escape="\\"),
                    Profile.last_name.ilike(pattern, escape="\\"),
                    Profile.bio.ilike(pattern, escape="\\"),
                ),
            )
        return stmt

    async def list_experts(
        self,
        query: str | None,
        category_name: str | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Profile], int]:
        base_stmt = self._experts_stmt(query, category_name)
        count_stmt = select(func.count()).select_from(base_stmt.subquery())
        total = int((await self.session.scalar(count_stmt)) or 0)

        stmt = (
            base_stmt.order_by(Profile.expert_rank.asc().nulls_last(), Profile.created_at.asc())
            .limit(limit)
            .offset(offset)
        )
        items = (await self.session.scalars(stmt)).all()
        return list(items), total

    async def search_experts_by_name(self, query: str, limit: int) -> list[Profile]:
        pattern = f"%{escape_like(query)}%"
        stmt = (
            select(Profile)
            .where(
                Profile.is_expert.is_(True),
                or_(
                    Profile.first_name.ilike(pattern, escape="\\"),
                    Profile.last_name.ilike(pattern, escape="\\"),
                ),
            )
            .order_by(Profile.expert_rank.asc().nulls_last())
            .limit(limit)
        )
        return list((await self.session.scalars(stmt)).all())

    async def get_expert(self, expert_id: UUID) -> Profile | None:
        stmt = select(Profile).where(Profile.id == expert_id, Profile.is_expert.is_(True))
        return await self.session.scalar(stmt)

    async def list_categories(self) -> list[ExpertCategory]:
        stmt = select(ExpertCategory).order_by(ExpertCategory.sort_order.asc().nulls_last(), ExpertCategory.name)
        return list((await self.session.scalars(stmt)).all())

    async def list_services(self, expert_id: UUID, *, active_only: bool) -> list[ExpertService]:
        stmt = select(ExpertService).where(ExpertService.expert_id == expert_id)
        if active_only:
            stmt = stmt.where(ExpertService.is_active.is_(True))
        stmt = stmt.order_by(ExpertService.price.asc(), ExpertService.created_at.asc())
        return list((await self.session.scalars(stmt)).all())

    async def get_service_by_id(self, service_id: UUID) -> ExpertService | None:
        return await self.session.scalar(select(ExpertService).where(ExpertService.id == service_id))

    async def create_service(
        self,
        expert_id: UUID,
        title: str,
        description: str | None,
        service_type: ServiceTypeEnum,
        price: Decimal,
        availability_slots: int,
        is_active: bool,
    ) -> ExpertService:
        service = ExpertService(
            expert_id=expert_id,
            title=title,
            description=description,
            service_type=service_type,
            price=price,
            availability_slots=availability_slots,
            is_active=is_active,
        )
        self.session.add(service)
        await self.session.flush()
        return service

    async def update_service(self, service: ExpertService, **changes) -> ExpertService:
        for key, value in changes.items():
            setattr(service, key, value)
        await self.session.flush()
        return service

    async def delete_service(self, service: ExpertService) -> None:
        await self.session.delete(service)
        await self.session.flush()

    async def list_videos(self, expert_id: UUID) -> list[ExpertVideo]:
        stmt = select(ExpertVideo).where(ExpertVideo.expert_id == expert_id).order_by(ExpertVideo.created_at.asc())
        return list((await self.session.scalars(stmt)).all())

    async def get_video_by_id(self, video_id: UUID) -> ExpertVideo | None:
        return await self.session.scalar(select(ExpertVideo).where(ExpertVideo.id == video_id))

    async def create_video(self, expert_id: UUID, url: str) -> ExpertVideo:
        video = ExpertVideo(expert_id=expert_id, url=url)
        self.session.add(video)
        await self.session.flush()
        return video

    async def delete_video(self, video: ExpertVideo) -> None:
        await self.session.delete(video)
        await self.session.flush()
