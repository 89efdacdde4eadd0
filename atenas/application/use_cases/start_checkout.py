"""Start Bold checkout use case"""

import asyncio
import logging
import time

from ...core.config import settings
from ...domain.entities.bold_transaction import BoldTransaction, generate_order_id
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...domain.value_objects.entity_ids import UserId, ProjectId
from ...domain.value_objects.money import Money
from ...application.dtos.payment_dtos import (
    CheckoutRequestDto, CheckoutConfigDto, SignatureRequestDto, SignatureResponseDto,
)
from ...infrastructure.external_services.bold_payment_service import BoldPaymentService

logger = logging.getLogger(__name__)

TIMEOUT_MESSAGE = "El proceso tardó demasiado. Por favor, intenta de nuevo."


class CheckoutTimeoutError(Exception):
    """Checkout preparation exceeded the configured deadline"""


class StartCheckoutUseCase:

    def __init__(self, unit_of_work: IUnitOfWork, bold_service: BoldPaymentService):
        self.unit_of_work = unit_of_work
        self.bold_service = bold_service

    async def execute(self, user_id: UserId, request: CheckoutRequestDto) -> CheckoutConfigDto:
        """Persist a PENDING transaction and return the widget config.

        Repository calls block the loop, so wait_for alone cannot interrupt
        them. The deadline is checked again before commit and a late
        checkout is rolled back instead of saved.
        """
        timeout = settings.CHECKOUT_TIMEOUT_SECONDS
        deadline = time.monotonic() + timeout
        try:
            return await asyncio.wait_for(self._prepare(user_id, request, deadline), timeout=timeout)
        except asyncio.TimeoutError:
            logger.error("Checkout preparation for user %s timed out", user_id)
            raise CheckoutTimeoutError(TIMEOUT_MESSAGE)

    async def _prepare(
        self, user_id: UserId, request: CheckoutRequestDto, deadline: float
    ) -> CheckoutConfigDto:
        if request.amount is None or request.amount <= 0:
            raise ValueError("El monto debe ser mayor a 0")

        money = Money(request.amount, request.currency.upper())
        amount = money.to_bold_amount()
        if amount == "0":
            raise ValueError("El monto debe ser mayor a 0")

        project_id = ProjectId(request.project_id) if request.project_id else None
        order_id = generate_order_id(settings.BOLD_ORDER_PREFIX)
        signature = self.bold_service.generate_integrity_signature(order_id, amount, money.currency)

        async with self.unit_of_work:
            if project_id and not await self.unit_of_work.projects.get_by_id(project_id):
                raise LookupError("Project not found")

            transaction = BoldTransaction.create_pending(
                order_id=order_id,
                user_id=user_id,
                money=money,
                integrity_signature=signature,
                project_id=project_id,
                description=request.description,
            )
            await self.unit_of_work.transactions.add(transaction)
            if time.monotonic() > deadline:
                raise asyncio.TimeoutError()
            await self.unit_of_work.commit()

        for event in transaction.get_events():
            logger.info("Checkout started: %s", event)

        return CheckoutConfigDto(**self.bold_service.build_checkout_config(
            order_id=order_id,
            amount=amount,
            currency=money.currency,
            integrity_signature=signature,
            description=request.description,
        ))


class GenerateSignatureUseCase:
    """Integrity signature for clients that build their own order id"""

    def __init__(self, bold_service: BoldPaymentService):
        self.bold_service = bold_service

    def execute(self, request: SignatureRequestDto) -> SignatureResponseDto:
        if not request.orderId or not request.amount:
            raise ValueError("orderId and amount are required")
        signature = self.bold_service.generate_integrity_signature(
            request.orderId, request.amount, request.currency
        )
        return SignatureResponseDto(integritySignature=signature, orderId=request.orderId)
