"""Beneficiary evaluation routes"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status

from ...api.dependencies import get_unit_of_work, require_roles, headquarters_scope
from ...application.dtos.evaluation_dtos import CreateEvaluationDto, UpdateEvaluationDto, EvaluationDto
from ...application.use_cases.record_evaluation import RecordEvaluationUseCase, UpdateEvaluationUseCase
from ...domain.entities.evaluation import Evaluation
from ...domain.entities.user import User
from ...domain.enums import RoleName
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import BeneficiaryId, EvaluationId, HeadquartersId

logger = logging.getLogger(__name__)

router = APIRouter()

evaluators = require_roles(RoleName.DIRECTOR, RoleName.DIRECTOR_SEDE, RoleName.ENTRENADOR)


async def _check_beneficiary_scope(unit_of_work: IUnitOfWork, user: User, beneficiary_id: BeneficiaryId) -> None:
    async with unit_of_work:
        scope = await headquarters_scope(unit_of_work, user)
        if not scope:
            return
        beneficiary = await unit_of_work.beneficiaries.get_by_id(beneficiary_id)
    if beneficiary and beneficiary.headquarters_id != scope:
        raise HTTPException(status_code=403, detail="Beneficiary belongs to another headquarters")


async def _get_scoped(unit_of_work: IUnitOfWork, user: User, evaluation_id: UUID) -> Evaluation:
    async with unit_of_work:
        evaluation = await unit_of_work.evaluations.get_by_id(EvaluationId(evaluation_id))
    if not evaluation:
        raise HTTPException(status_code=404, detail="Evaluation not found")
    await _check_beneficiary_scope(unit_of_work, user, evaluation.beneficiary_id)
    return evaluation


@router.post("/", response_model=EvaluationDto, status_code=status.HTTP_201_CREATED)
async def create_evaluation(
    request: CreateEvaluationDto,
    current_user: User = Depends(evaluators),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Record an evaluation and refresh the beneficiary's performance"""
    await _check_beneficiary_scope(unit_of_work, current_user, BeneficiaryId(request.beneficiary_id))
    try:
        return await RecordEvaluationUseCase(unit_of_work).execute(request)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Evaluation failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to record evaluation: {e}")


@router.get("/headquarters/{headquarters_id}", response_model=List[EvaluationDto])
async def list_headquarters_evaluations(
    headquarters_id: UUID,
    current_user: User = Depends(evaluators),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        scope = await headquarters_scope(unit_of_work, current_user)
        if scope and scope != HeadquartersId(headquarters_id):
            raise HTTPException(status_code=403, detail="Headquarters outside your assignment")
        evaluations = await unit_of_work.evaluations.list_by_headquarters(HeadquartersId(headquarters_id))
    return [EvaluationDto.from_entity(e) for e in evaluations]


@router.get("/{evaluation_id}", response_model=EvaluationDto)
async def get_evaluation(
    evaluation_id: UUID,
    current_user: User = Depends(evaluators),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    return EvaluationDto.from_entity(await _get_scoped(unit_of_work, current_user, evaluation_id))


@router.put("/{evaluation_id}", response_model=EvaluationDto)
async def update_evaluation(
    evaluation_id: UUID,
    request: UpdateEvaluationDto,
    current_user: User = Depends(evaluators),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Correct an evaluation and refresh the beneficiary's performance"""
    await _get_scoped(unit_of_work, current_user, evaluation_id)
    try:
        return await UpdateEvaluationUseCase(unit_of_work).execute(EvaluationId(evaluation_id), request)
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error("Evaluation update failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to update evaluation: {e}")


@router.delete("/{evaluation_id}")
async def delete_evaluation(
    evaluation_id: UUID,
    current_user: User = Depends(require_roles(RoleName.DIRECTOR, RoleName.DIRECTOR_SEDE)),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    await _get_scoped(unit_of_work, current_user, evaluation_id)
    try:
        async with unit_of_work:
            await unit_of_work.evaluations.delete(EvaluationId(evaluation_id))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"message": "Evaluation deleted successfully"}
