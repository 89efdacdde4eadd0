"""Headquarters repository implementation"""

from typing import Optional, List
from sqlalchemy.orm import Session
from sqlalchemy import or_

from ...domain.repositories.headquarters_repository import IHeadquartersRepository
from ...domain.entities.headquarters import Headquarters
from ...domain.enums import HeadquartersStatus
from ...domain.value_objects.entity_ids import HeadquartersId, UserId
from ..orm.headquarters_model import HeadquartersModel, HeadquartersProjectModel
from ..orm.beneficiary_model import BeneficiaryModel
from ..orm.user_model import UserModel


class HeadquartersRepositoryImpl(IHeadquartersRepository):

    def __init__(self, session: Session):
        self.session = session

    async def get_by_id(self, headquarters_id: HeadquartersId) -> Optional[Headquarters]:
        model = self._get_model(headquarters_id)
        return self._map_to_entity(model) if model else None

    async def get_by_director(self, user_id: UserId) -> Optional[Headquarters]:
        """Headquarters a site director runs: owned row first, then the user's own assignment"""
        model = (
            self.session.query(HeadquartersModel)
            .filter(HeadquartersModel.user_id == user_id.value)
            .order_by(HeadquartersModel.created_at)
            .first()
        )
        if not model:
            user = self.session.query(UserModel).filter(UserModel.id == user_id.value).first()
            if user and user.headquarter_id:
                model = self._get_model(HeadquartersId(user.headquarter_id))
        return self._map_to_entity(model) if model else None

    async def add(self, headquarters: Headquarters) -> Headquarters:
        model = HeadquartersModel(headquarters_id=headquarters.id.value)
        self._update_model_from_entity(model, headquarters)
        self.session.add(model)
        self.session.flush()
        return headquarters

    async def update(self, headquarters: Headquarters) -> Headquarters:
        model = self._get_model(headquarters.id)
        if not model:
            raise LookupError("Headquarters not found")
        self._update_model_from_entity(model, headquarters)
        self.session.flush()
        return headquarters

    async def delete(self, headquarters_id: HeadquartersId) -> None:
        model = self._get_model(headquarters_id)
        if not model:
            raise LookupError("Headquarters not found")
        has_beneficiaries = (
            self.session.query(BeneficiaryModel.beneficiary_id)
            .filter(BeneficiaryModel.headquarters_id == headquarters_id.value)
            .first()
        )
        if has_beneficiaries:
            raise ValueError("No se puede eliminar una sede con beneficiarios asignados")
        self.session.query(HeadquartersProjectModel).filter(
            HeadquartersProjectModel.headquarters_id == headquarters_id.value
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.flush()

    async def list(self, search: Optional[str] = None, status: Optional[str] = None) -> List[Headquarters]:
        query = self.session.query(HeadquartersModel)
        if search:
            pattern = f"%{search.strip()}%"
            query = query.filter(or_(HeadquartersModel.name.ilike(pattern), HeadquartersModel.address.ilike(pattern)))
        if status and status != "all":
            query = query.filter(HeadquartersModel.status == status)
        models = query.order_by(HeadquartersModel.name).all()
        return [self._map_to_entity(model) for model in models]

    def _get_model(self, headquarters_id: HeadquartersId) -> Optional[HeadquartersModel]:
        return (
            self.session.query(HeadquartersModel)
            .filter(HeadquartersModel.headquarters_id == headquarters_id.value)
            .first()
        )

    def _update_model_from_entity(self, model: HeadquartersModel, headquarters: Headquarters) -> None:
        model.name = headquarters.name
        model.address = headquarters.address
        model.city = headquarters.city
        model.status = headquarters.status.value
        model.image_url = headquarters.image_url
        model.user_id = headquarters.user_id.value if headquarters.user_id else None

    def _map_to_entity(self, model: HeadquartersModel) -> Headquarters:
        return Headquarters(
            id=HeadquartersId(model.headquarters_id),
            name=model.name,
            address=model.address,
            city=model.city,
            status=HeadquartersStatus(model.status),
            image_url=model.image_url,
            user_id=UserId(model.user_id) if model.user_id else None,
            created_at=model.created_at,
        )
