"""Beneficiary evaluation entity and derived metrics"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
import math

from ..value_objects.entity_ids import EvaluationId, BeneficiaryId


TECHNICAL_SKILLS = ("pase", "recepcion", "remate", "regate", "ubicacion_espacio_temporal")


def _round_half_up(value: float, digits: int = 0) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def _skill_scores(technical: Optional[dict]) -> list:
    if not technical:
        return []
    return [
        technical[name] for name in TECHNICAL_SKILLS
        if isinstance(technical.get(name), (int, float)) and not isinstance(technical.get(name), bool)
    ]


def calculate_performance(technical: Optional[dict]) -> int:
    """Technical-tactic skills on a 1-5 scale mapped to 0-100."""
    scores = _skill_scores(technical)
    if not scores:
        return 0
    avg = sum(scores) / len(scores)
    performance = int(_round_half_up((avg - 1) / 4 * 100))
    return max(0, min(100, performance))


def technical_average(technical: Optional[dict]) -> float:
    scores = _skill_scores(technical)
    if not scores:
        return 0
    return round(sum(scores) / len(scores), 1)


def calculate_bmi(peso, talla) -> Optional[float]:
    """Body-mass index from weight (kg) and height (cm)."""
    if not peso or not talla:
        return None
    return round(peso / (talla / 100) ** 2, 2)


def calculate_waist_hip_ratio(cintura, cadera) -> Optional[float]:
    if not cintura or not cadera:
        return None
    return round(cintura / cadera, 2)


def extract_sex(anthropometric: Optional[dict]) -> Optional[str]:
    return (anthropometric or {}).get("genero")


@dataclass
class Evaluation:
    id: EvaluationId
    beneficiary_id: BeneficiaryId
    anthropometric_detail: Optional[dict] = None
    technical_tactic_detail: Optional[dict] = None
    emotional_detail: Optional[dict] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create(
        cls,
        beneficiary_id: BeneficiaryId,
        anthropometric_detail: Optional[dict] = None,
        technical_tactic_detail: Optional[dict] = None,
        emotional_detail: Optional[dict] = None,
    ) -> 'Evaluation':
        if not (anthropometric_detail or technical_tactic_detail or emotional_detail):
            raise ValueError("La evaluación debe incluir al menos una sección")
        return cls(
            id=EvaluationId.generate(),
            beneficiary_id=beneficiary_id,
            anthropometric_detail=anthropometric_detail,
            technical_tactic_detail=technical_tactic_detail,
            emotional_detail=emotional_detail,
        )

    @property
    def performance(self) -> Optional[int]:
        if not _skill_scores(self.technical_tactic_detail):
            return None
        return calculate_performance(self.technical_tactic_detail)

    @property
    def sex(self) -> Optional[str]:
        return extract_sex(self.anthropometric_detail)

    @property
    def bmi(self) -> Optional[float]:
        data = self.anthropometric_detail or {}
        return calculate_bmi(data.get("peso"), data.get("talla"))

    @property
    def waist_hip_ratio(self) -> Optional[float]:
        data = self.anthropometric_detail or {}
        return calculate_waist_hip_ratio(data.get("cintura"), data.get("cadera"))

    @property
    def technical_average(self) -> float:
        return technical_average(self.technical_tactic_detail)

    def revise(self, **sections) -> None:
        """Replace the given sections; at least one section must stay filled"""
        for name, value in sections.items():
            if name in ("anthropometric_detail", "technical_tactic_detail", "emotional_detail"):
                setattr(self, name, value)
        if not (self.anthropometric_detail or self.technical_tactic_detail or self.emotional_detail):
            raise ValueError("La evaluación debe incluir al menos una sección")
