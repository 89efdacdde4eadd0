"""Bold embedded-checkout integration"""

import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Optional

from ...core.config import settings
from ...domain.enums import BoldTransactionStatus

logger = logging.getLogger(__name__)


# Webhook "type" values for the event-style payload
EVENT_STATUS = {
    "SALE_APPROVED": BoldTransactionStatus.APPROVED,
    "SALE_REJECTED": BoldTransactionStatus.DECLINED,
    "VOID_APPROVED": BoldTransactionStatus.DECLINED,
    "VOID_REJECTED": BoldTransactionStatus.ERROR,
}

# "status" values for the flat payload
FLAT_STATUS = {
    "APPROVED": BoldTransactionStatus.APPROVED,
    "DECLINED": BoldTransactionStatus.DECLINED,
    "REJECTED": BoldTransactionStatus.DECLINED,
    "FAILED": BoldTransactionStatus.ERROR,
    "ERROR": BoldTransactionStatus.ERROR,
    "PENDING": BoldTransactionStatus.PENDING,
    "PROCESSING": BoldTransactionStatus.PENDING,
}


@dataclass
class BoldWebhookEvent:
    order_id: str
    status: BoldTransactionStatus
    transaction_id: Optional[str] = None
    payment_method: Optional[str] = None


class BoldPaymentService:
    """Signs checkout orders and authenticates Bold webhooks"""

    def __init__(self, api_key: Optional[str] = None, secret_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.BOLD_API_KEY
        self.secret_key = secret_key if secret_key is not None else settings.BOLD_SECRET_KEY
        if not self.api_key:
            logger.warning("BOLD_API_KEY not configured")

    def generate_integrity_signature(self, order_id: str, amount: str, currency: str) -> str:
        """SHA-256 hex of order_id + amount + currency + secret"""
        if not self.secret_key:
            raise ValueError("Bold secret key not configured")
        chain = f"{order_id}{amount}{currency}{self.secret_key}"
        return hashlib.sha256(chain.encode("utf-8")).hexdigest()

    def build_checkout_config(
        self,
        order_id: str,
        amount: str,
        currency: str,
        integrity_signature: str,
        description: Optional[str] = None,
        redirection_url: Optional[str] = None,
    ) -> dict:
        """Widget configuration handed to the Bold embedded checkout"""
        return {
            "orderId": order_id,
            "currency": currency,
            "amount": amount,
            "apiKey": self.api_key,
            "integritySignature": integrity_signature,
            "description": description or "Donación Fundación Atenas",
            "redirectionUrl": redirection_url or settings.bold_redirect_url,
            "renderMode": "embedded",
        }

    def verify_webhook_signature(self, payload: bytes, signature: Optional[str]) -> bool:
        """Bold signs the base64-encoded raw body with HMAC-SHA256"""
        if not signature or not self.secret_key:
            return False
        encoded = base64.b64encode(payload)
        expected = hmac.new(self.secret_key.encode("utf-8"), encoded, hashlib.sha256).hexdigest()
        return hmac.compare_digest(expected, signature.strip())

    def parse_webhook(self, data: dict) -> BoldWebhookEvent:
        """Normalise both webhook payload shapes"""
        if "type" in data and isinstance(data.get("data"), dict):
            event_type = data["type"]
            body = data["data"]
            status = EVENT_STATUS.get(event_type)
            if status is None:
                raise ValueError(f"Unsupported Bold event type: {event_type}")
            order_id = (body.get("metadata") or {}).get("reference")
            transaction_id = body.get("payment_id")
            payment_method = body.get("payment_method")
        else:
            raw_status = str(data.get("status", "")).upper()
            status = FLAT_STATUS.get(raw_status)
            if status is None:
                raise ValueError(f"Unsupported Bold status: {raw_status or 'missing'}")
            order_id = data.get("orderId")
            transaction_id = data.get("transactionId")
            payment_method = data.get("paymentMethod")

        if not order_id:
            raise ValueError("Webhook payload has no order reference")
        return BoldWebhookEvent(
            order_id=str(order_id),
            status=status,
            transaction_id=str(transaction_id) if transaction_id else None,
            payment_method=payment_method,
        )
