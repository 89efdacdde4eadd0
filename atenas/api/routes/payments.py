"""Bold payment routes"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Header, status

from ...api.dependencies import get_current_user, get_unit_of_work, get_bold_payment_service
from ...application.dtos.payment_dtos import (
    CheckoutRequestDto, CheckoutConfigDto, SignatureRequestDto, SignatureResponseDto,
    BoldTransactionDto, WebhookResultDto,
)
from ...application.use_cases.start_checkout import (
    StartCheckoutUseCase, GenerateSignatureUseCase, CheckoutTimeoutError,
)
from ...application.use_cases.process_bold_webhook import ProcessBoldWebhookUseCase
from ...domain.entities.user import User
from ...domain.repositories.unit_of_work import IUnitOfWork
from ...infrastructure.external_services.bold_payment_service import BoldPaymentService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/checkout", response_model=CheckoutConfigDto)
async def start_checkout(
    request: CheckoutRequestDto,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bold_service: BoldPaymentService = Depends(get_bold_payment_service)
):
    """Register a pending transaction and return the Bold widget configuration"""
    use_case = StartCheckoutUseCase(unit_of_work, bold_service)
    try:
        return await use_case.execute(current_user.id, request)
    except CheckoutTimeoutError as e:
        raise HTTPException(status_code=status.HTTP_504_GATEWAY_TIMEOUT, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Checkout failed for user %s: %s", current_user.id, e)
        raise HTTPException(status_code=500, detail="No se pudo iniciar el pago. Intenta de nuevo.")


@router.post("/signature", response_model=SignatureResponseDto)
async def generate_signature(
    request: SignatureRequestDto,
    current_user: User = Depends(get_current_user),
    bold_service: BoldPaymentService = Depends(get_bold_payment_service)
):
    """Integrity signature for an order built by the client"""
    try:
        return GenerateSignatureUseCase(bold_service).execute(request)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.get("/transactions", response_model=List[BoldTransactionDto])
async def list_my_transactions(
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    async with unit_of_work:
        transactions = await unit_of_work.transactions.list_by_user(current_user.id)
    return [BoldTransactionDto.from_entity(t) for t in transactions]


@router.get("/transactions/{order_id}", response_model=BoldTransactionDto)
async def get_transaction(
    order_id: str,
    current_user: User = Depends(get_current_user),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work)
):
    """Transaction status for the result page"""
    async with unit_of_work:
        transaction = await unit_of_work.transactions.get_by_order_id(order_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    if transaction.user_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Not allowed to view this transaction")
    return BoldTransactionDto.from_entity(transaction)


@router.post("/webhook", response_model=WebhookResultDto)
async def bold_webhook(
    request: Request,
    x_bold_signature: Optional[str] = Header(default=None),
    unit_of_work: IUnitOfWork = Depends(get_unit_of_work),
    bold_service: BoldPaymentService = Depends(get_bold_payment_service)
):
    """Bold payment notification"""
    payload = await request.body()
    use_case = ProcessBoldWebhookUseCase(unit_of_work, bold_service)
    try:
        return await use_case.execute(payload, x_bold_signature)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except LookupError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.error("Bold webhook processing failed: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to process webhook: {e}")
