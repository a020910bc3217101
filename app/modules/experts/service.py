"""Experts catalogue business logic layer."""

from __future__ import annotations

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db_session
from app.modules.experts.models import ExpertCategory, ExpertService, ExpertVideo
from app.modules.experts.repository import ExpertsRepository
from app.modules.experts.schemas import ExpertDetail, ServiceCreate, ServiceRead, ServiceUpdate, VideoRead
from app.modules.identity.models import Profile
from app.modules.identity.schemas import ProfileRead
from app.shared.exceptions import NotFoundException, UnauthorizedException

settings = get_settings()


class ExpertsService:
    """Marketplace browsing and expert self-management."""

    def __init__(self, repository: ExpertsRepository) -> None:
        self.repository = repository

    async def list_experts(
        self,
        query: str | None,
        category: str | None,
        limit: int,
        offset: int,
    ) -> tuple[list[Profile], int]:
        """List experts ranked ascending, optionally filtered by category and text."""
        query = (query or "").strip() or None
        category = (category or "").strip() or None
        return await self.repository.list_experts(query, category, limit, offset)

    async def search_experts(self, query: str) -> list[Profile]:
        """Quick name search used by the header search box."""
        query = query.strip()
        if not query:
            return []
        return await self.repository.search_experts_by_name(query, settings.expert_search_limit)

    async def get_expert_detail(self, expert_id: UUID) -> ExpertDetail:
        expert = await self.repository.get_expert(expert_id)
        if expert is None:
            raise NotFoundException("Expert not found")

        services = await self.repository.list_services(expert.id, active_only=True)
        videos = await self.repository.list_videos(expert.id)
        return ExpertDetail(
            profile=ProfileRead.model_validate(expert),
            services=[ServiceRead.model_validate(item) for item in services],
            videos=[VideoRead.model_validate(item) for item in videos],
        )

    async def list_categories(self) -> list[ExpertCategory]:
        return await self.repository.list_categories()

    async def list_own_services(self, actor: Profile) -> list[ExpertService]:
        """List all services of the acting expert, inactive ones included."""
        return await self.repository.list_services(actor.id, active_only=False)

    async def _get_owned_service(self, service_id: UUID, actor: Profile) -> ExpertService:
        service = await self.repository.get_service_by_id(service_id)
        if service is None:
            raise NotFoundException("Service not found")
        if service.expert_id != actor.id:
            raise UnauthorizedException("You cannot manage this service")
        return service

    async def create_service(self, payload: ServiceCreate, actor: Profile) -> ExpertService:
        return await self.repository.create_service(
            expert_id=actor.id,
            title=payload.title.strip(),
            description=payload.description,
            service_type=payload.service_type,
            price=payload.price,
            availability_slots=payload.availability_slots,
            is_active=payload.is_active,
        )

    async def update_service(self, service_id: UUID, payload: ServiceUpdate, actor: Profile) -> ExpertService:
        service = await self._get_owned_service(service_id, actor)
        return await self.repository.update_service(service, **payload.model_dump(exclude_none=True))

    async def delete_service(self, service_id: UUID, actor: Profile) -> None:
        service = await self._get_owned_service(service_id, actor)
        await self.repository.delete_service(service)

    async def add_video(self, url: str, actor: Profile) -> ExpertVideo:
        return await self.repository.create_video(actor.id, url)

    async def delete_video(self, video_id: UUID, actor: Profile) -> None:
        video = await self.repository.get_video_by_id(video_id)
        if video is None:
            raise NotFoundException("Video not found")
        if video.expert_id != actor.id:
            raise UnauthorizedException("You cannot manage this video")
        await self.repository.delete_video(video)


async def get_experts_service(session: AsyncSession = Depends(get_db_session)) -> ExpertsService:
    """Dependency provider for experts service."""
    return ExpertsService(ExpertsRepository(session))
