"""Donation repository implementation"""

from datetime import date
from decimal import Decimal
from typing import Optional, List, Dict, Tuple
from sqlalchemy.orm import Session
from sqlalchemy import func

from ...domain.repositories.donation_repository import IDonationRepository
from ...domain.entities.donation import Donation
from ...domain.enums import DonationSort, DonationStatus
from ...domain.value_objects.entity_ids import DonationId, UserId, ProjectId
from ..orm.donation_model import DonationModel
from ..orm.project_model import DonationReportModel


SORT_ORDERS = {
    DonationSort.DATE_DESC: (DonationModel.date.desc(), DonationModel.created_at.desc()),
    DonationSort.DATE_ASC: (DonationModel.date.asc(), DonationModel.created_at.asc()),
    DonationSort.AMOUNT_DESC: (DonationModel.amount.desc(), DonationModel.date.desc()),
    DonationSort.AMOUNT_ASC: (DonationModel.amount.asc(), DonationModel.date.desc()),
}


class DonationRepositoryImpl(IDonationRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, donation: Donation) -> Donation:
        model = DonationModel(
            donation_id=donation.id.value,
            user_id=donation.user_id.value if donation.user_id else None,
            project_id=donation.project_id.value,
            amount=donation.amount,
            currency=donation.currency,
            date=donation.date,
            status=donation.status.value,
            pay_method=donation.pay_method,
            approve_code=donation.approve_code,
        )
        self.session.add(model)
        self.session.flush()
        return donation

    async def get_by_id(self, donation_id: DonationId) -> Optional[Donation]:
        model = self.session.query(DonationModel).filter(DonationModel.donation_id == donation_id.value).first()
        return self._map_to_entity(model) if model else None

    async def list_by_user(self, user_id: UserId, sort: DonationSort = DonationSort.DATE_DESC) -> List[Donation]:
        models = (
            self.session.query(DonationModel)
            .filter(DonationModel.user_id == user_id.value)
            .order_by(*SORT_ORDERS[DonationSort(sort)])
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    async def list(
        self,
        status: Optional[str] = None,
        project_id: Optional[ProjectId] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[Donation]:
        query = self.session.query(DonationModel)
        if status:
            query = query.filter(DonationModel.status == status)
        if project_id:
            query = query.filter(DonationModel.project_id == project_id.value)
        if date_from:
            query = query.filter(DonationModel.date >= date_from)
        if date_to:
            query = query.filter(DonationModel.date <= date_to)
        query = query.order_by(*SORT_ORDERS[DonationSort.DATE_DESC])
        if limit:
            query = query.limit(limit)
        return [self._map_to_entity(model) for model in query.all()]

    async def raised_by_project(self, project_ids: Optional[List[ProjectId]] = None) -> Dict[ProjectId, Decimal]:
        query = (
            self.session.query(DonationModel.project_id, func.coalesce(func.sum(DonationModel.amount), 0))
            .filter(DonationModel.status == DonationStatus.APPROVED.value)
        )
        if project_ids is not None:
            if not project_ids:
                return {}
            query = query.filter(DonationModel.project_id.in_([pid.value for pid in project_ids]))
        rows = query.group_by(DonationModel.project_id).all()
        return {ProjectId(project_id): Decimal(str(total)) for project_id, total in rows}

    async def approved_totals_between(self, start: date, end: date) -> Tuple[Decimal, int]:
        total, count = (
            self.session.query(func.coalesce(func.sum(DonationModel.amount), 0), func.count(DonationModel.donation_id))
            .filter(
                DonationModel.status == DonationStatus.APPROVED.value,
                DonationModel.date >= start,
                DonationModel.date < end,
            )
            .one()
        )
        return Decimal(str(total)), count

    def _map_to_entity(self, model: DonationModel) -> Donation:
        return Donation(
            id=DonationId(model.donation_id),
            user_id=UserId(model.user_id) if model.user_id else None,
            project_id=ProjectId(model.project_id),
            amount=Decimal(str(model.amount)),
            currency=model.currency,
            date=model.date,
            status=DonationStatus(model.status),
            pay_method=model.pay_method,
            approve_code=model.approve_code,
            created_at=model.created_at,
        )

    async def record_report(self, project_id: ProjectId) -> None:
        self.session.add(DonationReportModel(project_id=project_id.value))
        self.session.flush()
