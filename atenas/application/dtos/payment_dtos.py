"""Payment DTOs"""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal
from uuid import UUID

from ...domain.entities.bold_transaction import BoldTransaction


class CheckoutRequestDto(BaseModel):
    amount: Decimal
    currency: str = Field(default="COP", min_length=3, max_length=3)
    description: Optional[str] = Field(default=None, max_length=255)
    project_id: Optional[UUID] = None


class CheckoutConfigDto(BaseModel):
    """Configuration consumed by the Bold embedded checkout widget"""
    orderId: str
    currency: str
    amount: str
    apiKey: str
    integritySignature: str
    description: str
    redirectionUrl: str
    renderMode: str = "embedded"


class SignatureRequestDto(BaseModel):
    orderId: str
    amount: str
    currency: str = "COP"
    description: Optional[str] = None


class SignatureResponseDto(BaseModel):
    integritySignature: str
    orderId: str


class BoldTransactionDto(BaseModel):
    id: UUID
    order_id: str
    user_id: UUID
    project_id: Optional[UUID] = None
    donation_id: Optional[UUID] = None
    amount: Decimal
    currency: str
    status: str
    payment_method: Optional[str] = None
    transaction_id: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_entity(cls, transaction: BoldTransaction) -> "BoldTransactionDto":
        return cls(
            id=transaction.id.value,
            order_id=transaction.order_id,
            user_id=transaction.user_id.value,
            project_id=transaction.project_id.value if transaction.project_id else None,
            donation_id=transaction.donation_id.value if transaction.donation_id else None,
            amount=transaction.amount,
            currency=transaction.currency,
            status=transaction.status.value,
            payment_method=transaction.payment_method,
            transaction_id=transaction.transaction_id,
            description=transaction.description,
            created_at=transaction.created_at,
            updated_at=transaction.updated_at,
        )


class WebhookResultDto(BaseModel):
    order_id: str
    status: str
    donation_id: Optional[UUID] = None
    processed: bool
