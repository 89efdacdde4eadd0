"""Project repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.project import Project
from ..value_objects.entity_ids import ProjectId, HeadquartersId


class IProjectRepository(ABC):

    @abstractmethod
    async def get_by_id(self, project_id: ProjectId) -> Optional[Project]:
        pass

    @abstractmethod
    async def add(self, project: Project) -> Project:
        pass

    @abstractmethod
    async def update(self, project: Project) -> Project:
        pass

    @abstractmethod
    async def delete(self, project_id: ProjectId) -> None:
        pass

    @abstractmethod
    async def list(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        status: Optional[str] = None,
        type: Optional[str] = None,
        headquarters_id: Optional[HeadquartersId] = None,
    ) -> List[Project]:
        """Newest start_date first"""
        pass

    @abstractmethod
    async def set_headquarters(self, project_id: ProjectId, headquarters_ids: List[HeadquartersId]) -> None:
        """Replace every headquarters assignment of the project"""
        pass

    @abstractmethod
    async def assign_headquarters(self, project_id: ProjectId, headquarters_id: HeadquartersId) -> None:
        pass

    @abstractmethod
    async def unassign_headquarters(self, project_id: ProjectId, headquarters_id: HeadquartersId) -> None:
        pass
