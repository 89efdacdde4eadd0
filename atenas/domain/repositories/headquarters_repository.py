"""Headquarters repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.headquarters import Headquarters
from ..value_objects.entity_ids import HeadquartersId, UserId


class IHeadquartersRepository(ABC):

    @abstractmethod
    async def get_by_id(self, headquarters_id: HeadquartersId) -> Optional[Headquarters]:
        pass

    @abstractmethod
    async def get_by_director(self, user_id: UserId) -> Optional[Headquarters]:
        pass

    @abstractmethod
    async def add(self, headquarters: Headquarters) -> Headquarters:
        pass

    @abstractmethod
    async def update(self, headquarters: Headquarters) -> Headquarters:
        pass

    @abstractmethod
    async def delete(self, headquarters_id: HeadquartersId) -> None:
        pass

    @abstractmethod
    async def list(self, search: Optional[str] = None, status: Optional[str] = None) -> List[Headquarters]:
        pass
