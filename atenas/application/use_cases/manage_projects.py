"""Project use cases"""

import logging
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from ...domain.entities.project import Project
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import ProjectId, HeadquartersId
from ...application.dtos.project_dtos import CreateProjectDto, UpdateProjectDto, ProjectDto

logger = logging.getLogger(__name__)


class ListProjectsUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        headquarters_id: Optional[HeadquartersId] = None,
    ) -> List[ProjectDto]:
        async with self.unit_of_work:
            projects = await self.unit_of_work.projects.list(
                search=search, category=category, status=status, type=type, headquarters_id=headquarters_id,
            )
            raised = await self.unit_of_work.donations.raised_by_project([p.id for p in projects])
        return [ProjectDto.from_entity(p, raised.get(p.id, Decimal("0"))) for p in projects]


class GetProjectUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, project_id: ProjectId) -> ProjectDto:
        async with self.unit_of_work:
            project = await self.unit_of_work.projects.get_by_id(project_id)
            if not project:
                raise LookupError("Project not found")
            raised = await self.unit_of_work.donations.raised_by_project([project_id])
        return ProjectDto.from_entity(project, raised.get(project_id, Decimal("0")))


class CreateProjectUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateProjectDto) -> ProjectDto:
        fields = request.model_dump(exclude={"headquarters_id"})
        async with self.unit_of_work:
            project = Project.create(**fields)
            if request.headquarters_id:
                headquarters_id = HeadquartersId(request.headquarters_id)
                if not await self.unit_of_work.headquarters.get_by_id(headquarters_id):
                    raise LookupError("Headquarters not found")
                project.headquarters_ids = [headquarters_id]
            await self.unit_of_work.projects.add(project)

        logger.info("Created project %s", project.id)
        return ProjectDto.from_entity(project)


class UpdateProjectUseCase:

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, project_id: ProjectId, request: UpdateProjectDto) -> ProjectDto:
        fields = request.model_dump(exclude_unset=True)
        new_headquarters = fields.pop("headquarters_id", None)

        async with self.unit_of_work:
            project = await self.unit_of_work.projects.get_by_id(project_id)
            if not project:
                raise LookupError("Project not found")
            project.update(**fields)
            await self.unit_of_work.projects.update(project)

            if new_headquarters is not None:
                if new_headquarters == "":
                    project.headquarters_ids = []
                else:
                    headquarters_id = HeadquartersId(UUID(new_headquarters))
                    if not await self.unit_of_work.headquarters.get_by_id(headquarters_id):
                        raise LookupError("Headquarters not found")
                    project.headquarters_ids = [headquarters_id]
                await self.unit_of_work.projects.set_headquarters(project_id, project.headquarters_ids)

            raised = await self.unit_of_work.donations.raised_by_project([project_id])
        return ProjectDto.from_entity(project, raised.get(project_id, Decimal("0")))
