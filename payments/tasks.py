"""
Celery tasks for payment settlement.
"""
import logging
import uuid

from asgiref.sync import async_to_sync
from django.conf import settings

from IPMarketplace.celery import app

from core.domain.exceptions import PaymentGatewayError, TransactionNotFoundError
from payments.application.commands.purchase_product import ProcessPaymentCommand
from payments.application.handlers.payment_handlers import ProcessPaymentHandler
from payments.domain.settlement import SettlementConfig
from payments.infrastructure.gateways import get_payment_gateway
from payments.infrastructure.repositories.django_transaction_repository import (
    DjangoTransactionRepository,
)
from payments.ports.payment_gateway import PaymentPendingError

logger = logging.getLogger(__name__)

MAX_CONFIRMATION_RETRIES = settings.MARKETPLACE.get("PAYMENT_CONFIRMATION_MAX_RETRIES", 5)


def build_payment_handler() -> ProcessPaymentHandler:
    """Wire the payment handler from settings."""
    return ProcessPaymentHandler(
        transaction_repository=DjangoTransactionRepository(),
        gateway=get_payment_gateway(),
        settlement_config=SettlementConfig.from_settings(),
    )


@app.task(bind=True, max_retries=MAX_CONFIRMATION_RETRIES)
def process_payment_task(self, transaction_id: str):
    """
    Settle the payment of a pending transaction.

    Retries with exponential backoff while the gateway reports the
    payment as pending or fails; marks the transaction failed once
    retries are exhausted.

    Args:
        transaction_id: Transaction UUID

    Returns:
        Final transaction status value, or None for an unknown transaction
    """
    handler = build_payment_handler()
    command = ProcessPaymentCommand(transaction_id=uuid.UUID(transaction_id))
    try:
        sale = async_to_sync(handler.handle)(command)
    except TransactionNotFoundError:
        logger.warning("Payment task for unknown transaction", extra={"transaction_id": transaction_id})
        return None
    except (PaymentPendingError, PaymentGatewayError) as exc:
        if self.request.retries >= self.max_retries:
            logger.error(
                "Payment confirmation retries exhausted",
                extra={"transaction_id": transaction_id},
            )
            failed = async_to_sync(handler.fail)(command.transaction_id, f"Payment not confirmed: {exc}")
            return failed.status.value
        raise self.retry(exc=exc, countdown=2 ** self.request.retries)
    return sale.status.value
