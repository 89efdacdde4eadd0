"""Headquarters (sede) routes"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, UploadFile, File, status

from ...api.dependencies import (
    get_unit_of_work, require_roles, get_storage_service, get_geocoding_service,
)
from ...application.dtos.headquarters_dtos import (
    CreateHeadquartersDto, UpdateHeadquartersDto, HeadquartersDto, MapDto,
)
from ...application.dtos.project_dtos import ProjectDto
from ...application.use_cases.headquarters_map import HeadquartersMapUseCase
from ...application.use_cases.manage_projects import ListProjectsUseCase
from ...core.config import settings
from ...domain.entities.headquarters import Headquarters
from ...domain.entities.user import User
from ...domain.enums import RoleName, HeadquartersStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import HeadquartersId, UserId
from ...infrastructure.external_services.geocoding_service import GeocodingService
from ...infrastructure.external_services.storage_service import StorageService, timestamped_path

logger = logging.getLogger(__name__)

router = APIRouter()

headquarters_managers = require_roles(RoleName.ADMIN, RoleName.DIRECTOR)


async def _get_or_404(unit_of_work: IUnitOfWork, headquarters_id: UUID) -> Headquarters:
    headquarters = await unit_of_work.headquarters.get_by_id(HeadquartersId(headquarters_id))
    if not headquarters:
        raise HTTPException(status_code=404, detail="Headquarters not found")
    return headquarters


@router.get("/", response_model=List[HeadquartersDto])
async def list_headquarters(
    search: Optional[str] = Query(None, description="Matches name or address"),
    status: Optional[str] = Query("all", pattern="^(all|active|inactive)$"),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        headquarters = await unit_of_work.headquarters.list(search=search, status=status)
    return [HeadquartersDto.from_entity(h) for h in headquarters]


@router.get("/stats")
async def headquarters_stats(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    async with unit_of_work:
        headquarters = await unit_of_work.headquarters.list()
    active = len([h for h in headquarters if h.is_active])
    return {"total": len(headquarters), "active": active, "inactive": len(headquarters) - active}


@router.get("/map", response_model=MapDto)
async def headquarters_map(
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    geocoding_service: GeocodingService = Depends(get_geocoding_service)
):
    """Map markers for active headquarters"""
    return await HeadquartersMapUseCase(unit_of_work, geocoding_service).execute()


@router.get("/{headquarters_id}", response_model=HeadquartersDto)
async def get_headquarters(headquarters_id: UUID, unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    async with unit_of_work:
        headquarters = await _get_or_404(unit_of_work, headquarters_id)
    return HeadquartersDto.from_entity(headquarters)


@router.post("/", response_model=HeadquartersDto, status_code=status.HTTP_201_CREATED)
async def create_headquarters(
    request: CreateHeadquartersDto,
    current_user: User = Depends(headquarters_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Create a headquarters; the creator is its director unless an admin names one"""
    director_id = current_user.id
    if request.user_id and current_user.is_admin:
        director_id = UserId(request.user_id)
    try:
        headquarters = Headquarters.create(
            name=request.name,
            address=request.address,
            city=request.city,
            status=request.status,
            user_id=director_id,
        )
        async with unit_of_work:
            await unit_of_work.headquarters.add(headquarters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    logger.info("Created headquarters %s", headquarters.id)
    return HeadquartersDto.from_entity(headquarters)


@router.put("/{headquarters_id}", response_model=HeadquartersDto)
async def update_headquarters(
    headquarters_id: UUID,
    request: UpdateHeadquartersDto,
    current_user: User = Depends(headquarters_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    fields = request.model_dump(exclude_unset=True)
    if fields.get("user_id"):
        fields["user_id"] = UserId(fields["user_id"])
    try:
        async with unit_of_work:
            headquarters = await _get_or_404(unit_of_work, headquarters_id)
            headquarters.update(**fields)
            await unit_of_work.headquarters.update(headquarters)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return HeadquartersDto.from_entity(headquarters)


@router.patch("/{headquarters_id}/toggle-status", response_model=HeadquartersDto)
async def toggle_headquarters_status(
    headquarters_id: UUID,
    current_user: User = Depends(headquarters_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        headquarters = await _get_or_404(unit_of_work, headquarters_id)
        headquarters.toggle_status()
        await unit_of_work.headquarters.update(headquarters)
    return HeadquartersDto.from_entity(headquarters)


@router.delete("/{headquarters_id}")
async def delete_headquarters(
    headquarters_id: UUID,
    current_user: User = Depends(headquarters_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    try:
        async with unit_of_work:
            await unit_of_work.headquarters.delete(HeadquartersId(headquarters_id))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Headquarters deleted successfully"}


@router.post("/{headquarters_id}/image", response_model=HeadquartersDto)
async def upload_headquarters_image(
    headquarters_id: UUID,
    file: UploadFile = File(...),
    current_user: User = Depends(headquarters_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    storage_service: StorageService = Depends(get_storage_service)
):
    if file.content_type not in settings.ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail=f"Unsupported image type: {file.content_type}")
    data = await file.read()

    async with unit_of_work:
        headquarters = await _get_or_404(unit_of_work, headquarters_id)
        try:
            url = await storage_service.upload_file(
                data, timestamped_path(f"headquarters/{headquarters_id}", file.filename), file.content_type
            )
        except RuntimeError as e:
            raise HTTPException(status_code=500, detail=str(e))
        previous = headquarters.image_url
        headquarters.update(image_url=url)
        await unit_of_work.headquarters.update(headquarters)

    if previous:
        await storage_service.delete_file(previous)
    return HeadquartersDto.from_entity(headquarters)


@router.get("/{headquarters_id}/beneficiaries/count")
async def count_headquarters_beneficiaries(
    headquarters_id: UUID,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        counts = await unit_of_work.beneficiaries.count_by("headquarters_id", HeadquartersId(headquarters_id))
    return {"headquarters_id": headquarters_id, "count": counts.get(str(headquarters_id), 0)}


@router.get("/{headquarters_id}/projects", response_model=List[ProjectDto])
async def list_headquarters_projects(
    headquarters_id: UUID,
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return await ListProjectsUseCase(unit_of_work).execute(headquarters_id=HeadquartersId(headquarters_id))
