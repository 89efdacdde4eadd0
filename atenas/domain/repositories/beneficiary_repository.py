"""Beneficiary repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List, Dict, Set

from ..entities.beneficiary import Beneficiary
from ..value_objects.entity_ids import BeneficiaryId, HeadquartersId, ProjectId


class IBeneficiaryRepository(ABC):

    @abstractmethod
    async def get_by_id(self, beneficiary_id: BeneficiaryId) -> Optional[Beneficiary]:
        pass

    @abstractmethod
    async def add(self, beneficiary: Beneficiary) -> Beneficiary:
        pass

    @abstractmethod
    async def update(self, beneficiary: Beneficiary) -> Beneficiary:
        pass

    @abstractmethod
    async def delete(self, beneficiary_id: BeneficiaryId) -> None:
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        headquarters_id: Optional[HeadquartersId] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        performance_below: Optional[float] = None,
        attendance_below: Optional[float] = None,
    ) -> List[Beneficiary]:
        """Newest registry_date first"""
        pass

    @abstractmethod
    async def count_by(self, column: str, headquarters_id: Optional[HeadquartersId] = None) -> Dict[str, int]:
        """Counts grouped by headquarters_id, category or status"""
        pass

    @abstractmethod
    async def ids_for_projects(self, project_ids: List[ProjectId]) -> Set[BeneficiaryId]:
        """Distinct beneficiaries linked to any of the projects"""
        pass
