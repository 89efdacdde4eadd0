"""Donation entity"""

from dataclasses import dataclass, field
from datetime import datetime, date as date_type
from decimal import Decimal
from typing import Optional

from ..value_objects.entity_ids import DonationId, UserId, ProjectId
from ..value_objects.money import Money
from ..enums import DonationStatus


@dataclass
class Donation:
    id: DonationId
    user_id: UserId
    project_id: ProjectId
    amount: Decimal
    currency: str = "COP"
    date: date_type = field(default_factory=date_type.today)
    status: DonationStatus = DonationStatus.PENDING
    pay_method: Optional[str] = None
    approve_code: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.utcnow)

    @classmethod
    def create_approved(
        cls,
        user_id: UserId,
        project_id: ProjectId,
        amount: Decimal,
        currency: str,
        pay_method: Optional[str],
        approve_code: Optional[str],
    ) -> 'Donation':
        """Donation recorded from a gateway-approved payment"""
        if Decimal(str(amount)) <= 0:
            raise ValueError("Donation amount must be greater than zero")
        return cls(
            id=DonationId.generate(),
            user_id=user_id,
            project_id=project_id,
            amount=Decimal(str(amount)),
            currency=currency or "COP",
            status=DonationStatus.APPROVED,
            pay_method=pay_method,
            approve_code=approve_code,
        )

    @property
    def is_approved(self) -> bool:
        return self.status == DonationStatus.APPROVED

    @property
    def money(self) -> Money:
        return Money(self.amount, self.currency)
