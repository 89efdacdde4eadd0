"""Beneficiary evaluation use cases"""

import logging

from ...domain.entities.beneficiary import Beneficiary
from ...domain.entities.evaluation import Evaluation
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import BeneficiaryId, EvaluationId
from ...application.dtos.evaluation_dtos import CreateEvaluationDto, UpdateEvaluationDto, EvaluationDto

logger = logging.getLogger(__name__)


async def refresh_beneficiary(unit_of_work: IUnitOfWork, beneficiary: Beneficiary, evaluation: Evaluation) -> None:
    """Copy performance and sex from the evaluation onto the beneficiary"""
    changed = False
    if evaluation.performance is not None:
        beneficiary.performance = evaluation.performance
        changed = True
    if evaluation.sex:
        beneficiary.sex = evaluation.sex
        changed = True
    if changed:
        await unit_of_work.beneficiaries.update(beneficiary)


class RecordEvaluationUseCase:
    """Store an evaluation and refresh the beneficiary's derived fields"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, request: CreateEvaluationDto) -> EvaluationDto:
        beneficiary_id = BeneficiaryId(request.beneficiary_id)
        async with self.unit_of_work:
            beneficiary = await self.unit_of_work.beneficiaries.get_by_id(beneficiary_id)
            if not beneficiary:
                raise LookupError("Beneficiary not found")

            evaluation = Evaluation.create(
                beneficiary_id=beneficiary_id,
                anthropometric_detail=request.anthropometric_detail,
                technical_tactic_detail=request.technical_tactic_detail,
                emotional_detail=request.emotional_detail,
            )
            await self.unit_of_work.evaluations.add(evaluation)
            await refresh_beneficiary(self.unit_of_work, beneficiary, evaluation)

        logger.info("Recorded evaluation %s for beneficiary %s", evaluation.id, beneficiary_id)
        return EvaluationDto.from_entity(evaluation)


class UpdateEvaluationUseCase:
    """Replace evaluation sections and refresh the beneficiary's derived fields"""

    def __init__(self, unit_of_work: IUnitOfWork):
        self.unit_of_work = unit_of_work

    async def execute(self, evaluation_id: EvaluationId, request: UpdateEvaluationDto) -> EvaluationDto:
        async with self.unit_of_work:
            evaluation = await self.unit_of_work.evaluations.get_by_id(evaluation_id)
            if not evaluation:
                raise LookupError("Evaluation not found")

            evaluation.revise(**request.model_dump(exclude_unset=True))
            await self.unit_of_work.evaluations.update(evaluation)

            beneficiary = await self.unit_of_work.beneficiaries.get_by_id(evaluation.beneficiary_id)
            if beneficiary:
                await refresh_beneficiary(self.unit_of_work, beneficiary, evaluation)

        logger.info("Updated evaluation %s", evaluation_id)
        return EvaluationDto.from_entity(evaluation)
