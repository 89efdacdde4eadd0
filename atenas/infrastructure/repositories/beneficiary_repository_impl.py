"""Beneficiary repository implementation"""

from typing import Optional, List, Dict, Set
from sqlalchemy.orm import Session
from sqlalchemy import or_, func

from ...domain.repositories.beneficiary_repository import IBeneficiaryRepository
from ...domain.entities.beneficiary import Beneficiary
from ...domain.enums import BeneficiaryStatus
from ...domain.value_objects.entity_ids import BeneficiaryId, HeadquartersId, ProjectId
from ..orm.beneficiary_model import BeneficiaryModel, BeneficiaryProjectModel


FIELDS = (
    "first_name", "last_name", "birth_date", "category", "phone", "registry_date", "sex",
    "performance", "attendance", "guardian", "address", "emergency_contact", "medical_info",
    "observation", "photo_url",
)

GROUPABLE = {
    "headquarters_id": BeneficiaryModel.headquarters_id,
    "category": BeneficiaryModel.category,
    "status": BeneficiaryModel.status,
}


class BeneficiaryRepositoryImpl(IBeneficiaryRepository):

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, beneficiary_id: BeneficiaryId) -> Optional[Beneficiary]:
        model = self._get_model(beneficiary_id)
        return self._map_to_entity(model) if model else None

    async def add(self, beneficiary: Beneficiary) -> Beneficiary:
        model = BeneficiaryModel(beneficiary_id=beneficiary.id.value)
        self._update_model_from_entity(model, beneficiary)
        self.session.add(model)
        self.session.flush()
        return beneficiary

    async def update(self, beneficiary: Beneficiary) -> Beneficiary:
        model = self._get_model(beneficiary.id)
        if not model:
            raise LookupError("Beneficiary not found")
        self._update_model_from_entity(model, beneficiary)
        self.session.flush()
        return beneficiary

    async def delete(self, beneficiary_id: BeneficiaryId) -> None:
        model = self._get_model(beneficiary_id)
        if not model:
            raise LookupError("Beneficiary not found")
        self.session.query(BeneficiaryProjectModel).filter(
            BeneficiaryProjectModel.beneficiary_id == beneficiary_id.value
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.flush()

    async def list(
        self,
        search: Optional[str] = None,
        headquarters_id: Optional[HeadquartersId] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        performance_below: Optional[float] = None,
        attendance_below: Optional[float] = None,
    ) -> List[Beneficiary]:
        query = self.session.query(BeneficiaryModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(
                BeneficiaryModel.first_name.ilike(pattern),
                BeneficiaryModel.last_name.ilike(pattern),
                BeneficiaryModel.guardian.ilike(pattern),
            ))
        if headquarters_id:
            query = query.filter(BeneficiaryModel.headquarters_id == headquarters_id.value)
        if category and category != "all":
            query = query.filter(BeneficiaryModel.category == category)
        if status and status != "all":
            query = query.filter(BeneficiaryModel.status == status)
        if performance_below is not None:
            query = query.filter(BeneficiaryModel.performance < performance_below)
        if attendance_below is not None:
            query = query.filter(BeneficiaryModel.attendance < attendance_below)
        models = query.order_by(BeneficiaryModel.registry_date.desc(), BeneficiaryModel.last_name).all()
        return [self._map_to_entity(model) for model in models]

    async def count_by(self, column: str, headquarters_id: Optional[HeadquartersId] = None) -> Dict[str, int]:
        if column not in GROUPABLE:
            raise ValueError(f"Cannot group beneficiaries by {column}")
        group_column = GROUPABLE[column]
        query = self.session.query(group_column, func.count(BeneficiaryModel.beneficiary_id))
        if headquarters_id:
            query = query.filter(BeneficiaryModel.headquarters_id == headquarters_id.value)
        rows = query.group_by(group_column).all()
        return {str(key): count for key, count in rows}

    async def ids_for_projects(self, project_ids: List[ProjectId]) -> Set[BeneficiaryId]:
        if not project_ids:
            return set()
        rows = (
            self.session.query(BeneficiaryProjectModel.beneficiary_id)
            .filter(BeneficiaryProjectModel.project_id.in_([pid.value for pid in project_ids]))
            .distinct()
            .all()
        )
        return {BeneficiaryId(row[0]) for row in rows}

    def _get_model(self, beneficiary_id: BeneficiaryId) -> Optional[BeneficiaryModel]:
        return (
            self.session.query(BeneficiaryModel)
            .filter(BeneficiaryModel.beneficiary_id == beneficiary_id.value)
            .first()
        )

    def _update_model_from_entity(self, model: BeneficiaryModel, beneficiary: Beneficiary) -> None:
        for name in FIELDS:
            setattr(model, name, getattr(beneficiary, name))
        model.headquarters_id = beneficiary.headquarters_id.value
        model.status = beneficiary.status.value

    def _map_to_entity(self, model: BeneficiaryModel) -> Beneficiary:
        return Beneficiary(
            id=BeneficiaryId(model.beneficiary_id),
            headquarters_id=HeadquartersId(model.headquarters_id),
            status=BeneficiaryStatus(model.status),
            created_at=model.created_at,
            **{name: getattr(model, name) for name in FIELDS},
        )
