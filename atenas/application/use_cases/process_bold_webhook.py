"""Process Bold webhook use case"""

import json
import logging
from typing import Optional

from ...core.config import settings
from ...domain.entities.donation import Donation
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...application.dtos.payment_dtos import WebhookResultDto
from ...infrastructure.external_services.bold_payment_service import BoldPaymentService

logger = logging.getLogger(__name__)


class InvalidWebhookSignature(ValueError):
    pass


class ProcessBoldWebhookUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, bold_service: BoldPaymentService):
        self.unit_of_work = unit_of_work
        self.bold_service = bold_service

    async def execute(self, payload: bytes, signature: Optional[str]) -> WebhookResultDto:
        if settings.BOLD_VERIFY_WEBHOOK_SIGNATURE and not self.bold_service.verify_webhook_signature(payload, signature):
            logger.warning("Bold webhook signature verification failed")
            raise InvalidWebhookSignature("Invalid webhook signature")

        data = json.loads(payload.decode("utf-8"))
        if not isinstance(data, dict):
            raise ValueError("Webhook payload must be a JSON object")
        event = self.bold_service.parse_webhook(data)
        logger.info("Bold webhook for order %s: %s", event.order_id, event.status.value)

        async with self.unit_of_work:
            transaction = await self.unit_of_work.transactions.get_by_order_id(event.order_id)
            if not transaction:
                raise LookupError(f"Transaction {event.order_id} not found")

            if transaction.is_final:
                logger.info("Order %s already settled as %s, ignoring", event.order_id, transaction.status.value)
                return WebhookResultDto(
                    order_id=transaction.order_id,
                    status=transaction.status.value,
                    donation_id=transaction.donation_id.value if transaction.donation_id else None,
                    processed=False,
                )

            approved = transaction.apply_gateway_result(
                status=event.status,
                transaction_id=event.transaction_id,
                payment_method=event.payment_method,
                payload=data,
            )

            if approved and transaction.project_id and not transaction.donation_id:
                donation = Donation.create_approved(
                    user_id=transaction.user_id,
                    project_id=transaction.project_id,
                    amount=transaction.amount,
                    currency=transaction.currency,
                    pay_method=transaction.payment_method,
                    approve_code=transaction.transaction_id,
                )
                await self.unit_of_work.donations.add(donation)
                transaction.link_donation(donation.id)

            await self.unit_of_work.transactions.update(transaction)
            await self.unit_of_work.commit()

        for domain_event in transaction.get_events():
            logger.info("Payment event: %s", domain_event)

        return WebhookResultDto(
            order_id=transaction.order_id,
            status=transaction.status.value,
            donation_id=transaction.donation_id.value if transaction.donation_id else None,
            processed=True,
        )
