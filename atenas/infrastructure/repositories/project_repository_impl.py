"""Project repository implementation"""

from decimal import Decimal
from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import or_

from ...domain.repositories.project_repository import IProjectRepository
from ...domain.entities.project import Project
from ...domain.enums import ProjectStatus
from ...domain.value_objects.entity_ids import ProjectId, HeadquartersId
from ..orm.project_model import ProjectModel
from ..orm.headquarters_model import HeadquartersProjectModel
from ..orm.beneficiary_model import BeneficiaryProjectModel
from ..orm.donation_model import DonationModel


class ProjectRepositoryImpl(IProjectRepository):

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, project_id: ProjectId) -> Optional[Project]:
        model = self.session.query(ProjectModel).filter(ProjectModel.project_id == project_id.value).first()
        return self._map_to_entity(model) if model else None

    async def add(self, project: Project) -> Project:
        model = ProjectModel(project_id=project.id.value)
        self._update_model_from_entity(model, project)
        self.session.add(model)
        self.session.flush()
        if project.headquarters_ids:
            await self.set_headquarters(project.id, project.headquarters_ids)
        return project

    async def update(self, project: Project) -> Project:
        model = self.session.query(ProjectModel).filter(ProjectModel.project_id == project.id.value).first()
        if not model:
            raise LookupError("Project not found")
        self._update_model_from_entity(model, project)
        self.session.flush()
        return project

    async def delete(self, project_id: ProjectId) -> None:
        model = self.session.query(ProjectModel).filter(ProjectModel.project_id == project_id.value).first()
        if not model:
            raise LookupError("Project not found")
        has_donations = (
            self.session.query(DonationModel.donation_id)
            .filter(DonationModel.project_id == project_id.value)
            .first()
        )
        if has_donations:
            raise ValueError("No se puede eliminar un proyecto con donaciones registradas")
        self.session.query(HeadquartersProjectModel).filter(
            HeadquartersProjectModel.project_id == project_id.value
        ).delete(synchronize_session=False)
        self.session.query(BeneficiaryProjectModel).filter(
            BeneficiaryProjectModel.project_id == project_id.value
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.flush()

    async def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        headquarters_id: Optional[HeadquartersId] = None,
    ) -> List[Project]:
        query = self.session.query(ProjectModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(ProjectModel.name.ilike(pattern), ProjectModel.description.ilike(pattern)))
        if category and category != "all":
            query = query.filter(ProjectModel.category == category)
        if status and status != "all":
            query = query.filter(ProjectModel.status == status)
        if type and type != "all":
            query = query.filter(ProjectModel.type == type)
        if headquarters_id:
            query = query.join(
                HeadquartersProjectModel, HeadquartersProjectModel.project_id == ProjectModel.project_id
            ).filter(HeadquartersProjectModel.headquarters_id == headquarters_id.value)
        # NULL start dates sort last on both backends
        models = query.order_by(ProjectModel.start_date.is_(None), ProjectModel.start_date.desc()).all()
        return [self._map_to_entity(model) for model in models]

    async def set_headquarters(self, project_id: ProjectId, headquarters_ids: List[HeadquartersId]) -> None:
        self.session.query(HeadquartersProjectModel).filter(
            HeadquartersProjectModel.project_id == project_id.value
        ).delete(synchronize_session=False)
        for headquarters_id in dict.fromkeys(headquarters_ids):
            self.session.add(HeadquartersProjectModel(
                headquarters_id=headquarters_id.value,
                project_id=project_id.value,
            ))
        self.session.flush()

    async def assign_headquarters(self, project_id: ProjectId, headquarters_id: HeadquartersId) -> None:
        exists = self.session.query(HeadquartersProjectModel).filter(
            HeadquartersProjectModel.project_id == project_id.value,
            HeadquartersProjectModel.headquarters_id == headquarters_id.value,
        ).first()
        if not exists:
            self.session.add(HeadquartersProjectModel(
                headquarters_id=headquarters_id.value,
                project_id=project_id.value,
            ))
            self.session.flush()

    async def unassign_headquarters(self, project_id: ProjectId, headquarters_id: HeadquartersId) -> None:
        self.session.query(HeadquartersProjectModel).filter(
            HeadquartersProjectModel.project_id == project_id.value,
            HeadquartersProjectModel.headquarters_id == headquarters_id.value,
        ).delete(synchronize_session=False)
        self.session.flush()

    def _headquarters_ids(self, project_id) -> List[HeadquartersId]:
        rows = self.session.query(HeadquartersProjectModel.headquarters_id).filter(
            HeadquartersProjectModel.project_id == project_id
        ).all()
        return [HeadquartersId(row[0]) for row in rows]

    def _update_model_from_entity(self, model: ProjectModel, project: Project) -> None:
        model.name = project.name
        model.category = project.category
        model.type = project.type
        model.description = project.description
        model.finance_goal = project.finance_goal
        model.start_date = project.start_date
        model.end_date = project.end_date
        model.status = project.status.value

    def _map_to_entity(self, model: ProjectModel) -> Project:
        return Project(
            id=ProjectId(model.project_id),
            name=model.name,
            category=model.category,
            type=model.type,
            description=model.description,
            finance_goal=Decimal(str(model.finance_goal)) if model.finance_goal is not None else None,
            start_date=model.start_date,
            end_date=model.end_date,
            status=ProjectStatus(model.status),
            headquarters_ids=self._headquarters_ids(model.project_id),
        )
