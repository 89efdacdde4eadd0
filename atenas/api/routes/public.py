"""Public landing-page data, no authentication"""

from typing import List

from fastapi import APIRouter, Depends

from ...api.dependencies import get_unit_of_work, get_geocoding_service
from ...application.dtos.headquarters_dtos import HeadquartersDto, MapDto
from ...application.dtos.project_dtos import ProjectDto
from ...application.use_cases.headquarters_map import HeadquartersMapUseCase
from ...application.use_cases.manage_projects import ListProjectsUseCase
from ...domain.enums import ProjectStatus
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.geocoding_service import GeocodingService

router = APIRouter()


@router.get("/projects", response_model=List[ProjectDto])
async def active_projects(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    """Active projects with their funding progress"""
    return await ListProjectsUseCase(unit_of_work).execute(status=ProjectStatus.ACTIVE.value)


@router.get("/headquarters", response_model=List[HeadquartersDto])
async def active_headquarters(unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    async with unit_of_work:
        headquarters = await unit_of_work.headquarters.list(status="active")
    return [HeadquartersDto.from_entity(h) for h in headquarters]


@router.get("/headquarters/map", response_model=MapDto)
async def headquarters_map(
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    geocoding_service: GeocodingService = Depends(get_geocoding_service)
):
    return await HeadquartersMapUseCase(unit_of_work, geocoding_service).execute()
