"""Project routes"""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...api.dependencies import get_unit_of_work, require_roles
from ...application.dtos.project_dtos import CreateProjectDto, UpdateProjectDto, ProjectDto
from ...application.use_cases.manage_projects import (
    ListProjectsUseCase, GetProjectUseCase, CreateProjectUseCase, UpdateProjectUseCase,
)
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ProjectId, HeadquartersId

logger = logging.getLogger(__name__)

router = APIRouter()

project_managers = require_roles(RoleName.ADMIN, RoleName.DIRECTOR)


@router.get("/", response_model=List[ProjectDto])
async def list_projects(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    status: Optional[str] = Query(None),
    type: Optional[str] = Query(None),
    headquarters_id: Optional[UUID] = Query(None),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Projects with raised amount and progress, newest first"""
    return await ListProjectsUseCase(unit_of_work).execute(
        search=search,
        category=category,
        status=status,
        type=type,
        headquarters_id=HeadquartersId(headquarters_id) if headquarters_id else None,
    )


@router.get("/{project_id}", response_model=ProjectDto)
async def get_project(project_id: UUID, unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    try:
        return await GetProjectUseCase(unit_of_work).execute(ProjectId(project_id))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/{project_id}/raised")
async def get_project_raised(project_id: UUID, unit_of_work: IUnitOfWork = Depends(get_unit_of_work)):
    """Sum of approved donations"""
    async with unit_of_work:
        raised = await unit_of_work.donations.raised_by_project([ProjectId(project_id)])
    return {"project_id": project_id, "raised": raised.get(ProjectId(project_id), Decimal("0"))}


@router.post("/", response_model=ProjectDto, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: CreateProjectDto,
    current_user: User = Depends(project_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    try:
        return await CreateProjectUseCase(unit_of_work).execute(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Project creation failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to create project: {e}")


@router.put("/{project_id}", response_model=ProjectDto)
async def update_project(
    project_id: UUID,
    request: UpdateProjectDto,
    current_user: User = Depends(project_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    try:
        return await UpdateProjectUseCase(unit_of_work).execute(ProjectId(project_id), request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Project update failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update project: {e}")


@router.delete("/{project_id}")
async def delete_project(
    project_id: UUID,
    current_user: User = Depends(project_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    try:
        async with unit_of_work:
            await unit_of_work.projects.delete(ProjectId(project_id))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Project deleted successfully"}


@router.post("/{project_id}/headquarters/{headquarters_id}")
async def assign_headquarters(
    project_id: UUID,
    headquarters_id: UUID,
    current_user: User = Depends(project_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        if not await unit_of_work.projects.get_by_id(ProjectId(project_id)):
            raise HTTPException(status_code=404, detail="Project not found")
        if not await unit_of_work.headquarters.get_by_id(HeadquartersId(headquarters_id)):
            raise HTTPException(status_code=404, detail="Headquarters not found")
        await unit_of_work.projects.assign_headquarters(ProjectId(project_id), HeadquartersId(headquarters_id))
    return {"message": "Headquarters assigned"}


@router.delete("/{project_id}/headquarters/{headquarters_id}")
async def unassign_headquarters(
    project_id: UUID,
    headquarters_id: UUID,
    current_user: User = Depends(project_managers),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        await unit_of_work.projects.unassign_headquarters(ProjectId(project_id), HeadquartersId(headquarters_id))
    return {"message": "Headquarters unassigned"}
