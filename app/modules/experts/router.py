"""Experts API router."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.modules.experts.schemas import (
    CategoryRead,
    ExpertCard,
    ExpertDetail,
    ServiceCreate,
    ServiceRead,
    ServiceUpdate,
    VideoCreate,
    VideoRead,
)
from app.modules.experts.service import ExpertsService, get_experts_service
from app.modules.identity.models import Profile
from app.modules.identity.service import require_expert
from app.shared.pagination import Page, build_page, get_pagination_params

router = APIRouter(prefix="/experts", tags=["experts"])


@router.get("", response_model=Page[ExpertCard])
async def list_experts(
    q: str | None = Query(default=None, max_length=100),
    category: str | None = Query(default=None, max_length=128),
    pagination=Depends(get_pagination_params),
    service: ExpertsService = Depends(get_experts_service),
) -> Page[ExpertCard]:
    """Marketplace listing ordered by expert rank."""
    items, total = await service.list_experts(q, category, pagination.limit, pagination.offset)
    serialized = [ExpertCard.model_validate(item) for item in items]
    return build_page(serialized, total, pagination)


@router.get("/search", response_model=list[ExpertCard])
async def search_experts(
    q: str = Query(default="", max_length=100),
    service: ExpertsService = Depends(get_experts_service),
) -> list[ExpertCard]:
    items = await service.search_experts(q)
    return [ExpertCard.model_validate(item) for item in items]


@router.get("/categories", response_model=list[CategoryRead])
async def list_categories(service: ExpertsService = Depends(get_experts_service)) -> list[CategoryRead]:
    return [CategoryRead.model_validate(item) for item in await service.list_categories()]


@router.get("/me/services", response_model=list[ServiceRead])
async def list_my_services(
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> list[ServiceRead]:
    """List own services, inactive ones included."""
    return [ServiceRead.model_validate(item) for item in await service.list_own_services(current_expert)]


@router.post("/me/services", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
async def create_service(
    payload: ServiceCreate,
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> ServiceRead:
    created = await service.create_service(payload, current_expert)
    return ServiceRead.model_validate(created)


@router.patch("/me/services/{service_id}", response_model=ServiceRead)
async def update_service(
    service_id: UUID,
    payload: ServiceUpdate,
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> ServiceRead:
    updated = await service.update_service(service_id, payload, current_expert)
    return ServiceRead.model_validate(updated)


@router.delete("/me/services/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_service(
    service_id: UUID,
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> None:
    await service.delete_service(service_id, current_expert)


@router.post("/me/videos", response_model=VideoRead, status_code=status.HTTP_201_CREATED)
async def add_video(
    payload: VideoCreate,
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> VideoRead:
    video = await service.add_video(str(payload.url), current_expert)
    return VideoRead.model_validate(video)


@router.delete("/me/videos/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: UUID,
    service: ExpertsService = Depends(get_experts_service),
    current_expert: Profile = Depends(require_expert),
) -> None:
    await service.delete_video(video_id, current_expert)


@router.get("/{expert_id}", response_model=ExpertDetail)
async def get_expert(
    expert_id: UUID,
    service: ExpertsService = Depends(get_experts_service),
) -> ExpertDetail:
    """Public expert page."""
    return await service.get_expert_detail(expert_id)
