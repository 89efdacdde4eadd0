"""Evaluation repository implementation"""

from typing import Optional, List
from sqlalchemy.orm import Session

from ...domain.repositories.evaluation_repository import IEvaluationRepository
from ...domain.entities.evaluation import Evaluation
from ...domain.value_objects.entity_ids import EvaluationId, BeneficiaryId, HeadquartersId
from ..orm.beneficiary_model import EvaluationModel, BeneficiaryEvaluationModel, BeneficiaryModel


class EvaluationRepositoryImpl(IEvaluationRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, evaluation: Evaluation) -> Evaluation:
        self.session.add(EvaluationModel(
            id=evaluation.id.value,
            anthropometric_detail=evaluation.anthropometric_detail,
            technical_tactic_detail=evaluation.technical_tactic_detail,
            emotional_detail=evaluation.emotional_detail,
        ))
        self.session.flush()
        self.session.add(BeneficiaryEvaluationModel(
            beneficiary_id=evaluation.beneficiary_id.value,
            evaluation_id=evaluation.id.value,
        ))
        self.session.flush()
        return evaluation

    async def get_by_id(self, evaluation_id: EvaluationId) -> Optional[Evaluation]:
        row = self._query().filter(EvaluationModel.id == evaluation_id.value).first()
        return self._map_to_entity(*row) if row else None

    async def list_by_beneficiary(self, beneficiary_id: BeneficiaryId) -> List[Evaluation]:
        rows = (
            self._query()
            .filter(BeneficiaryEvaluationModel.beneficiary_id == beneficiary_id.value)
            .order_by(EvaluationModel.created_at.desc())
            .all()
        )
        return [self._map_to_entity(*row) for row in rows]

    async def list_by_headquarters(self, headquarters_id: HeadquartersId) -> List[Evaluation]:
        rows = (
            self._query()
            .join(BeneficiaryModel, BeneficiaryModel.beneficiary_id == BeneficiaryEvaluationModel.beneficiary_id)
            .filter(BeneficiaryModel.headquarters_id == headquarters_id.value)
            .order_by(EvaluationModel.created_at.desc())
            .all()
        )
        return [self._map_to_entity(*row) for row in rows]

    async def update(self, evaluation: Evaluation) -> Evaluation:
        model = self.session.query(EvaluationModel).filter(EvaluationModel.id == evaluation.id.value).first()
        if not model:
            raise LookupError("Evaluation not found")
        model.anthropometric_detail = evaluation.anthropometric_detail
        model.technical_tactic_detail = evaluation.technical_tactic_detail
        model.emotional_detail = evaluation.emotional_detail
        self.session.flush()
        return evaluation

    async def delete(self, evaluation_id: EvaluationId) -> None:
        model = self.session.query(EvaluationModel).filter(EvaluationModel.id == evaluation_id.value).first()
        if not model:
            raise LookupError("Evaluation not found")
        self.session.query(BeneficiaryEvaluationModel).filter(
            BeneficiaryEvaluationModel.evaluation_id == evaluation_id.value
        ).delete(synchronize_session=False)
        self.session.delete(model)
        self.session.flush()

    def _query(self):
        return self.session.query(EvaluationModel, BeneficiaryEvaluationModel.beneficiary_id).join(
            BeneficiaryEvaluationModel, BeneficiaryEvaluationModel.evaluation_id == EvaluationModel.id
        )

    def _map_to_entity(self, model: EvaluationModel, beneficiary_id) -> Evaluation:
        return Evaluation(
            id=EvaluationId(model.id),
            beneficiary_id=BeneficiaryId(beneficiary_id),
            anthropometric_detail=model.anthropometric_detail,
            technical_tactic_detail=model.technical_tactic_detail,
            emotional_detail=model.emotional_detail,
            created_at=model.created_at,
        )
