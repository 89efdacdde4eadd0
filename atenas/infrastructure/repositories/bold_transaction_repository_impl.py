"""Bold transaction repository implementation"""

from decimal import Decimal
from typing import Optional, List
from sqlalchemy.orm import Session

from ...domain.repositories.bold_transaction_repository import IBoldTransactionRepository
from ...domain.entities.bold_transaction import BoldTransaction
from ...domain.enums import BoldTransactionStatus
from ...domain.value_objects.entity_ids import BoldTransactionId, UserId, ProjectId, DonationId
from ..orm.donation_model import BoldTransactionModel


class BoldTransactionRepositoryImpl(IBoldTransactionRepository):

    def __init__(self, session: Session):
        self.session = session

    async def add(self, transaction: BoldTransaction) -> BoldTransaction:
        model = BoldTransactionModel(bold_transaction_id=transaction.id.value, order_id=transaction.order_id)
        self._update_model_from_entity(model, transaction)
        self.session.add(model)
        self.session.flush()
        return transaction

    async def get_by_order_id(self, order_id: str) -> Optional[BoldTransaction]:
        model = self.session.query(BoldTransactionModel).filter(BoldTransactionModel.order_id == order_id).first()
        return self._map_to_entity(model) if model else None

    async def update(self, transaction: BoldTransaction) -> BoldTransaction:
        model = (
            self.session.query(BoldTransactionModel)
            .filter(BoldTransactionModel.bold_transaction_id == transaction.id.value)
            .first()
        )
        if not model:
            raise LookupError(f"Transaction {transaction.order_id} not found")
        self._update_model_from_entity(model, transaction)
        self.session.flush()
        return transaction

    async def list_by_user(self, user_id: UserId) -> List[BoldTransaction]:
        models = (
            self.session.query(BoldTransactionModel)
            .filter(BoldTransactionModel.user_id == user_id.value)
            .order_by(BoldTransactionModel.created_at.desc())
            .all()
        )
        return [self._map_to_entity(model) for model in models]

    def _update_model_from_entity(self, model: BoldTransactionModel, transaction: BoldTransaction) -> None:
        model.user_id = transaction.user_id.value
        model.project_id = transaction.project_id.value if transaction.project_id else None
        model.donation_id = transaction.donation_id.value if transaction.donation_id else None
        model.amount = transaction.amount
        model.currency = transaction.currency
        model.status = transaction.status.value
        model.payment_method = transaction.payment_method
        model.transaction_id = transaction.transaction_id
        model.description = transaction.description
        model.integrity_signature = transaction.integrity_signature
        model.webhook_payload = transaction.webhook_payload
        model.created_at = transaction.created_at
        model.updated_at = transaction.updated_at

    def _map_to_entity(self, model: BoldTransactionModel) -> BoldTransaction:
        return BoldTransaction(
            id=BoldTransactionId(model.bold_transaction_id),
            order_id=model.order_id,
            user_id=UserId(model.user_id),
            amount=Decimal(str(model.amount)),
            currency=model.currency,
            project_id=ProjectId(model.project_id) if model.project_id else None,
            donation_id=DonationId(model.donation_id) if model.donation_id else None,
            status=BoldTransactionStatus(model.status),
            payment_method=model.payment_method,
            transaction_id=model.transaction_id,
            description=model.description,
            integrity_signature=model.integrity_signature,
            webhook_payload=model.webhook_payload,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
