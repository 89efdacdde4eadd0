"""Evaluation DTOs"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uuid import UUID

from ...domain.entities.evaluation import Evaluation


class CreateEvaluationDto(BaseModel):
    beneficiary_id: UUID
    anthropometric_detail: Optional[dict] = None
    technical_tactic_detail: Optional[dict] = None
    emotional_detail: Optional[dict] = None


class UpdateEvaluationDto(BaseModel):
    anthropometric_detail: Optional[dict] = None
    technical_tactic_detail: Optional[dict] = None
    emotional_detail: Optional[dict] = None


class EvaluationDto(BaseModel):
    id: UUID
    beneficiary_id: UUID
    anthropometric_detail: Optional[dict] = None
    technical_tactic_detail: Optional[dict] = None
    emotional_detail: Optional[dict] = None
    created_at: Optional[datetime] = None
    bmi: Optional[float] = None
    waist_hip_ratio: Optional[float] = None
    technical_average: float = 0
    performance: Optional[int] = None

    @classmethod
    def from_entity(cls, evaluation: Evaluation) -> "EvaluationDto":
        return cls(
            id=evaluation.id.value,
            beneficiary_id=evaluation.beneficiary_id.value,
            anthropometric_detail=evaluation.anthropometric_detail,
            technical_tactic_detail=evaluation.technical_tactic_detail,
            emotional_detail=evaluation.emotional_detail,
            created_at=evaluation.created_at,
            bmi=evaluation.bmi,
            waist_hip_ratio=evaluation.waist_hip_ratio,
            technical_average=evaluation.technical_average,
            performance=evaluation.performance,
        )
