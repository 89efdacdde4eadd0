"""Evaluation repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.evaluation import Evaluation
from ..value_objects.entity_ids import EvaluationId, BeneficiaryId, HeadquartersId


class IEvaluationRepository(ABC):

    @abstractmethod
    async def add(self, evaluation: Evaluation) -> Evaluation:
        """Insert the evaluation and its beneficiary link"""
        pass

    @abstractmethod
    async def get_by_id(self, evaluation_id: EvaluationId) -> Optional[Evaluation]:
        pass

    @abstractmethod
    async def list_by_beneficiary(self, beneficiary_id: BeneficiaryId) -> List[Evaluation]:
        pass

    @abstractmethod
    async def list_by_headquarters(self, headquarters_id: HeadquartersId) -> List[Evaluation]:
        pass

    @abstractmethod
    async def update(self, evaluation: Evaluation) -> Evaluation:
        pass

    @abstractmethod
    async def delete(self, evaluation_id: EvaluationId) -> None:
        """Remove the beneficiary link, then the evaluation"""
        pass
