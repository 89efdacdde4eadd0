"""Unit of Work over one SQLAlchemy session"""

import logging

from sqlalchemy.orm import Session

from ...domain.repositories.unit_of_work import IUnitOfWork
from .user_repository_impl import UserRepositoryImpl
from .donation_repository_impl import DonationRepositoryImpl
from .bold_transaction_repository_impl import BoldTransactionRepositoryImpl
from .project_repository_impl import ProjectRepositoryImpl
from .headquarters_repository_impl import HeadquartersRepositoryImpl
from .beneficiary_repository_impl import BeneficiaryRepositoryImpl
from .evaluation_repository_impl import EvaluationRepositoryImpl

logger = logging.getLogger(__name__)


class UnitOfWorkImpl(IUnitOfWork):
    """Commits when the outermost block exits cleanly, rolls back on any exception.

    One instance is shared by the repositories of a request, and the
    context manager may be entered again by a use case the route calls.
    """

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepositoryImpl(session)
        self.donations = DonationRepositoryImpl(session)
        self.transactions = BoldTransactionRepositoryImpl(session)
        self.projects = ProjectRepositoryImpl(session)
        self.headquarters = HeadquartersRepositoryImpl(session)
        self.beneficiaries = BeneficiaryRepositoryImpl(session)
        self.evaluations = EvaluationRepositoryImpl(session)
        self._depth = 0
        self._committed = False

    async def __aenter__(self):
        if self._depth == 0:
            self._committed = False
        self._depth += 1
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        self._depth -= 1
        if exc_type:
            if self._depth == 0:
                logger.warning("Rolling back unit of work after %s: %s", exc_type.__name__, exc_val)
                await self.rollback()
        elif self._depth == 0 and not self._committed:
            await self.commit()

    async def commit(self) -> None:
        try:
            self.session.commit()
            self._committed = True
        except Exception:
            self.session.rollback()
            raise

    async def rollback(self) -> None:
        self.session.rollback()
