"""
Payment gateway adapters.
"""
import logging
import uuid
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional

from django.utils.module_loading import import_string

from core.domain.exceptions import PaymentGatewayError
from payments.ports.payment_gateway import PaymentGateway, PaymentStatus

logger = logging.getLogger(__name__)

INTENT_PREFIX = "sim_pi_"
REFUND_PREFIX = "sim_re_"

# Payment methods that steer the sandbox outcome
DECLINE_METHOD = "sim_decline"
PENDING_METHOD = "sim_pending"


class SimulatedPaymentGateway(PaymentGateway):
    """
    Sandbox gateway.

    Payments succeed unless the payment method asks for a decline or a
    confirmation that never settles. The outcome is encoded in the
    intent reference, so any instance can confirm or refund it.
    """

    async def create_intent(
        self, amount: Decimal, currency: str, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        if amount <= 0:
            raise PaymentGatewayError(f"Cannot create an intent for {amount} {currency}")
        method = (metadata or {}).get("payment_method", "")
        outcome = {DECLINE_METHOD: "d", PENDING_METHOD: "p"}.get(method, "s")
        intent_ref = f"{INTENT_PREFIX}{outcome}_{uuid.uuid4().hex}"
        logger.info(
            "Simulated payment intent created",
            extra={"intent_ref": intent_ref, "amount": str(amount), "currency": currency},
        )
        return intent_ref

    async def confirm(self, intent_ref: str) -> PaymentStatus:
        if not intent_ref.startswith(INTENT_PREFIX):
            raise PaymentGatewayError(f"Unknown payment intent {intent_ref}")
        outcome = intent_ref[len(INTENT_PREFIX)]
        return {
            "s": PaymentStatus.SUCCEEDED,
            "p": PaymentStatus.PENDING,
            "d": PaymentStatus.FAILED,
        }.get(outcome, PaymentStatus.FAILED)

    async def refund(self, intent_ref: str, amount: Decimal) -> str:
        if not intent_ref or not intent_ref.startswith(INTENT_PREFIX):
            raise PaymentGatewayError(f"Cannot refund unknown payment {intent_ref!r}")
        receipt = f"{REFUND_PREFIX}{uuid.uuid4().hex}"
        logger.info("Simulated refund issued", extra={"intent_ref": intent_ref, "receipt": receipt})
        return receipt


def get_payment_gateway(config: Optional[Mapping[str, Any]] = None) -> PaymentGateway:
    """
    Instantiate the gateway named by the PAYMENT_GATEWAY setting.

    Args:
        config: MARKETPLACE mapping; defaults to settings.MARKETPLACE
    """
    if config is None:
        from django.conf import settings

        config = getattr(settings, "MARKETPLACE", {})
    path = config.get("PAYMENT_GATEWAY", "payments.infrastructure.gateways.SimulatedPaymentGateway")
    return import_string(path)()
