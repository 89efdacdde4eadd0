"""Bold gateway transaction entity"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, List
import random
import time

from ..value_objects.entity_ids import BoldTransactionId, UserId, ProjectId, DonationId
from ..value_objects.money import Money
from ..enums import BoldTransactionStatus
from ..events.payment_events import CheckoutStarted, PaymentApproved, PaymentDeclined


def generate_order_id(prefix: str = "ATENAS") -> str:
    """<prefix>-<epoch ms>-<random 0..999999>"""
    return f"{prefix}-{int(time.time() * 1000)}-{random.randint(0, 999999)}"


@dataclass
class BoldTransaction:
    id: BoldTransactionId
    order_id: str
    user_id: UserId
    amount: Decimal
    currency: str = "COP"
    project_id: Optional[ProjectId] = None
    donation_id: Optional[DonationId] = None
    status: BoldTransactionStatus = BoldTransactionStatus.PENDING
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    description: Optional[str] = None
    integrity_signature: Optional[str] = None
    webhook_payload: Optional[dict] = None
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    # Domain events
    _events: List = field(default_factory=list, init=False, repr=False)

    @classmethod
    def create_pending(
        cls,
        order_id: str,
        user_id: UserId,
        money: Money,
        integrity_signature: str,
        project_id: Optional[ProjectId] = None,
        description: Optional[str] = None,
    ) -> 'BoldTransaction':
        if money.amount <= 0:
            raise ValueError("El monto debe ser mayor a 0")
        transaction = cls(
            id=BoldTransactionId.generate(),
            order_id=order_id,
            user_id=user_id,
            amount=money.amount,
            currency=money.currency,
            project_id=project_id,
            description=description,
            integrity_signature=integrity_signature,
        )
        transaction._events.append(CheckoutStarted(order_id=order_id, user_id=user_id, amount=money.amount))
        return transaction

    @property
    def is_final(self) -> bool:
        return self.status.is_final

    def apply_gateway_result(
        self,
        status: BoldTransactionStatus,
        transaction_id: Optional[str],
        payment_method: Optional[str],
        payload: dict,
    ) -> bool:
        """Record a webhook outcome. Returns True on the first transition to APPROVED."""
        if self.is_final:
            # Late or repeated notifications never reopen a settled transaction
            return False

        self.status = status
        self.transaction_id = transaction_id or self.transaction_id
        self.payment_method = payment_method or self.payment_method
        self.webhook_payload = payload
        self.updated_at = datetime.utcnow()

        if status == BoldTransactionStatus.APPROVED:
            self._events.append(PaymentApproved(
                order_id=self.order_id,
                user_id=self.user_id,
                project_id=self.project_id,
                amount=self.amount,
                transaction_id=self.transaction_id,
            ))
            return True
        if status.is_final:
            self._events.append(PaymentDeclined(order_id=self.order_id, status=status.value))
        return False

    def link_donation(self, donation_id: DonationId) -> None:
        self.donation_id = donation_id
        self.updated_at = datetime.utcnow()

    def get_events(self) -> List:
        """Get and clear domain events"""
        events = self._events.copy()
        self._events.clear()
        return events
