"""Payment domain events"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..value_objects.entity_ids import UserId, ProjectId


@dataclass
class CheckoutStarted:
    order_id: str
    user_id: UserId
    amount: Decimal
    occurred_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class PaymentApproved:
    order_id: str
    user_id: UserId
    project_id: Optional[ProjectId]
    amount: Decimal
    transaction_id: Optional[str]
    occurred_at: datetime = field(default_factory=datetime.utcnow)


@dataclass
class PaymentDeclined:
    order_id: str
    status: str
    occurred_at: datetime = field(default_factory=datetime.utcnow)
