"""Project DTOs"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import date
from decimal import Decimal
from uuid import UUID

from ...domain.entities.project import Project
from ...domain.enums import ProjectStatus


class CreateProjectDto(BaseModel):
    name: str = Field(min_length=3)
    category: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    finance_goal: Optional[Decimal] = Field(default=None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: ProjectStatus = ProjectStatus.ACTIVE
    headquarters_id: Optional[UUID] = None


class UpdateProjectDto(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3)
    category: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    finance_goal: Optional[Decimal] = Field(default=None, ge=0)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: Optional[ProjectStatus] = None
    # None keeps assignments, "" clears them, an id replaces them
    headquarters_id: Optional[str] = None


class ProjectDto(BaseModel):
    project_id: UUID
    name: str
    category: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None
    finance_goal: Optional[Decimal] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    status: str
    headquarters_ids: List[UUID] = []
    raised: Decimal = Decimal("0")
    progress: int = 0

    @classmethod
    def from_entity(cls, project: Project, raised: Decimal = Decimal("0")) -> "ProjectDto":
        return cls(
            project_id=project.id.value,
            name=project.name,
            category=project.category,
            type=project.type,
            description=project.description,
            finance_goal=project.finance_goal,
            start_date=project.start_date,
            end_date=project.end_date,
            status=project.status.value,
            headquarters_ids=[hq.value for hq in project.headquarters_ids],
            raised=raised,
            progress=project.progress(raised),
        )
