"""User repository interface"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, List

from ..entities.user import User
from ..value_objects.entity_ids import UserId


class IUserRepository(ABC):

    @abstractmethod
    async def get_by_id(self, user_id: UserId) -> Optional[User]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        pass

    @abstractmethod
    async def add(self, user: User) -> User:
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Persist profile fields and replace role assignments"""
        pass

    @abstractmethod
    async def delete(self, user_id: UserId) -> None:
        pass

    @abstractmethod
    async def list(self, search: Optional[str] = None, role: Optional[str] = None) -> List[User]:
        pass

    @abstractmethod
    async def count(self) -> int:
        pass

    @abstractmethod
    async def list_role_names(self) -> List[str]:
        pass

    @abstractmethod
    async def add_reset_token(self, user_id: UserId, token: str, expires_at: datetime) -> None:
        pass

    @abstractmethod
    async def get_by_reset_token(self, token: str) -> Optional[User]:
        """Owner of an unused, unexpired reset token"""
        pass

    @abstractmethod
    async def mark_reset_token_used(self, token: str) -> None:
        pass
