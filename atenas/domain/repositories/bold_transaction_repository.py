"""Bold transaction repository interface"""

from abc import ABC, abstractmethod
from typing import Optional, List

from ..entities.bold_transaction import BoldTransaction
from ..value_objects.entity_ids import UserId


class IBoldTransactionRepository(ABC):

    @abstractmethod
    async def add(self, transaction: BoldTransaction) -> BoldTransaction:
        pass

    @abstractmethod
    async def get_by_order_id(self, order_id: str) -> Optional[BoldTransaction]:
        pass

    @abstractmethod
    async def update(self, transaction: BoldTransaction) -> BoldTransaction:
        pass

    @abstractmethod
    async def list_by_user(self, user_id: UserId) -> List[BoldTransaction]:
        pass
