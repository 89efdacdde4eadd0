"""Donation repository interface"""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Tuple

from ..entities.donation import Donation
from ..enums import DonationSort
from ..value_objects.entity_ids import DonationId, UserId, ProjectId


class IDonationRepository(ABC):

    @abstractmethod
    async def add(self, donation: Donation) -> Donation:
        pass

    @abstractmethod
    async def get_by_id(self, donation_id: DonationId) -> Optional[Donation]:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UserId, sort: DonationSort = DonationSort.DATE_DESC) -> List[Donation]:
        pass

    @abstractmethod
    async def list(
        self,
        status: Optional[str] = None,
        project_id: Optional[ProjectId] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Donation]:
        """Newest first"""
        pass

    @abstractmethod
    async def raised_by_project(self, project_ids: Optional[List[ProjectId]] = None) -> Dict[ProjectId, Decimal]:
        """Sum of approved donations per project"""
        pass

    @abstractmethod
    async def approved_totals_between(self, start: date, end: date) -> Tuple[Decimal, int]:
        """(sum, count) of approved donations dated in [start, end)"""
        pass

    @abstractmethod
    async def record_report(self, project_id: ProjectId) -> None:
        """Log that a donations report was generated for the project"""
        pass
