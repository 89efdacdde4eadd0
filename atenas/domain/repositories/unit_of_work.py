"""Unit of Work interface for transaction management"""

from abc import ABC, abstractmethod

from .user_repository import IUserRepository
from .donation_repository import IDonationRepository
from .bold_transaction_repository import IBoldTransactionRepository
from .project_repository import IProjectRepository
from .headquarters_repository import IHeadquartersRepository
from .beneficiary_repository import IBeneficiaryRepository
from .evaluation_repository import IEvaluationRepository


class IUnitOfWork(ABC):
    """Unit of Work interface for managing transactions across repositories"""

    users: IUserRepository
    donations: IDonationRepository
    transactions: IBoldTransactionRepository
    projects: IProjectRepository
    headquarters: IHeadquartersRepository
    beneficiaries: IBeneficiaryRepository
    evaluations: IEvaluationRepository

    @abstractmethod
    async def __aenter__(self):
        """Enter async context"""
        pass

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context"""
        pass

    @abstractmethod
    async def commit(self):
        """Commit transaction"""
        pass

    @abstractmethod
    async def rollback(self):
        """Rollback transaction"""
        pass
