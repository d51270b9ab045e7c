"""
Payment settlement, refund and lookup handlers.
"""
import logging

from asgiref.sync import sync_to_async

from accounts.domain.services import EligibilityGuard
from core.domain.exceptions import (
    InvalidInputError,
    InvalidStatusTransitionError,
    NotOwnerError,
    TransactionNotFoundError,
)
from core.domain.value_objects import TransactionStatus
from core.infrastructure import idempotency
from core.infrastructure.events import event_bus
from core.metrics import settlement_outcomes_total
from payments.application.commands.purchase_product import (
    ProcessPaymentCommand,
    RefundTransactionCommand,
)
from payments.application.queries.get_transaction import GetTransactionQuery
from payments.domain.events import PaymentCompleted, PaymentFailed, TransactionRefunded
from payments.domain.settlement import SettlementConfig
from payments.domain.transaction import Transaction
from payments.ports.payment_gateway import PaymentGateway, PaymentPendingError, PaymentStatus
from payments.ports.transaction_repository import TransactionRepository

logger = logging.getLogger(__name__)


class ProcessPaymentHandler:
    """Handler for ProcessPaymentCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        gateway: PaymentGateway,
        settlement_config: SettlementConfig,
    ):
        """Initialize handler with repository, gateway and settlement config."""
        self.transaction_repository = transaction_repository
        self.gateway = gateway
        self.settlement_config = settlement_config

    async def handle(self, command: ProcessPaymentCommand) -> Transaction:
        """
        Settle a pending transaction through the gateway.

        Idempotent: anything but a pending transaction is returned as is,
        and an intent created by an earlier attempt is reused.

        Raises:
            TransactionNotFoundError: If the transaction does not exist
            PaymentPendingError: If the gateway has not settled yet
            PaymentGatewayError: If the gateway call failed
        """
        sale = await self.transaction_repository.find_by_id(command.transaction_id)
        if not sale:
            raise TransactionNotFoundError(f"Transaction {command.transaction_id} not found")
        if sale.status != TransactionStatus.PENDING:
            logger.info(
                "Skipping payment of settled transaction",
                extra={"transaction_id": str(sale.id), "status": sale.status.value},
            )
            return sale

        intent_ref = sale.payment_reference
        if not intent_ref:
            intent_ref = await self.gateway.create_intent(
                sale.amount,
                self.settlement_config.currency,
                {
                    "transaction_id": str(sale.id),
                    "buyer_id": str(sale.buyer_id),
                    "payment_method": sale.payment_method,
                },
            )
            sale = await self.transaction_repository.transition(
                sale.id, lambda current: current.with_payment_reference(intent_ref)
            )

        status = await self.gateway.confirm(intent_ref)
        if status == PaymentStatus.PENDING:
            raise PaymentPendingError(f"Payment {intent_ref} is still pending")
        if status == PaymentStatus.FAILED:
            return await self.fail(sale.id, "Payment declined by gateway")

        completed = await self.transaction_repository.transition(
            sale.id, lambda current: current.complete(intent_ref)
        )
        settlement_outcomes_total.labels(outcome="completed").inc()
        logger.info("Payment completed", extra={"transaction_id": str(completed.id)})
        await event_bus.publish(
            PaymentCompleted(
                transaction_id=completed.id,
                product_id=completed.product_id,
                buyer_id=completed.buyer_id,
                seller_id=completed.seller_id,
                amount=completed.amount,
            )
        )
        return completed

    async def fail(self, transaction_id, reason: str) -> Transaction:
        """
        Mark a pending transaction failed; no-op for settled ones.

        Inventory taken by the purchase is not returned.
        """
        sale = await self.transaction_repository.find_by_id(transaction_id)
        if not sale:
            raise TransactionNotFoundError(f"Transaction {transaction_id} not found")
        if sale.status != TransactionStatus.PENDING:
            return sale

        failed = await self.transaction_repository.transition(
            transaction_id, lambda current: current.fail(reason)
        )
        settlement_outcomes_total.labels(outcome="failed").inc()
        logger.warning(
            "Payment failed",
            extra={"transaction_id": str(failed.id), "reason": reason},
        )
        await event_bus.publish(
            PaymentFailed(transaction_id=failed.id, buyer_id=failed.buyer_id, reason=reason)
        )
        return failed


class RefundTransactionHandler:
    """Handler for RefundTransactionCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        gateway: PaymentGateway,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repository, gateway and guard."""
        self.transaction_repository = transaction_repository
        self.gateway = gateway
        self.guard = guard

    async def handle(self, command: RefundTransactionCommand) -> Transaction:
        """
        Handle refund command.

        Inventory is not restored by a refund.

        Raises:
            InvalidInputError: If the reason is blank
            TransactionNotFoundError: If the transaction does not exist
            NotOwnerError: If the actor is neither seller nor admin
            InvalidStatusTransitionError: If the transaction is not completed
            PaymentGatewayError: If the gateway refuses the refund
        """
        if not command.reason or not command.reason.strip():
            raise InvalidInputError("A refund reason is required")

        sale = await self.transaction_repository.find_by_id(command.transaction_id)
        if not sale:
            raise TransactionNotFoundError(f"Transaction {command.transaction_id} not found")
        actor = await self.guard.require_owner_or_admin(command.actor_id, sale.seller_id)
        if sale.status != TransactionStatus.COMPLETED:
            raise InvalidStatusTransitionError(
                f"Cannot refund transaction {sale.id} in status {sale.status.value}"
            )

        # One caller per sale reaches the gateway
        refund_key = f"refund:{sale.id}"
        if not await sync_to_async(idempotency.claim)(refund_key):
            raise InvalidStatusTransitionError(
                f"A refund for transaction {sale.id} is already in progress or done"
            )
        try:
            receipt = await self.gateway.refund(sale.payment_reference, sale.amount)
        except Exception:
            await sync_to_async(idempotency.release)(refund_key)
            raise
        refunded = await self.transaction_repository.transition(
            sale.id, lambda current: current.refund(command.reason)
        )

        settlement_outcomes_total.labels(outcome="refunded").inc()
        logger.info(
            "Transaction refunded",
            extra={"transaction_id": str(refunded.id), "receipt": receipt},
        )
        await event_bus.publish(
            TransactionRefunded(
                transaction_id=refunded.id,
                buyer_id=refunded.buyer_id,
                refunded_by=actor.id,
                reason=refunded.refund_reason,
                refund_receipt=receipt,
            )
        )
        return refunded


class GetTransactionHandler:
    """Handler for GetTransactionQuery."""

    def __init__(self, transaction_repository: TransactionRepository, guard: EligibilityGuard):
        self.transaction_repository = transaction_repository
        self.guard = guard

    async def handle(self, query: GetTransactionQuery) -> Transaction:
        """
        Return a transaction visible to its buyer, seller or an admin.

        Raises:
            TransactionNotFoundError: If the transaction does not exist
            NotOwnerError: If the actor may not see it
        """
        actor = await self.guard.require_active(query.actor_id)
        sale = await self.transaction_repository.find_by_id(query.transaction_id)
        if not sale:
            raise TransactionNotFoundError(f"Transaction {query.transaction_id} not found")
        if actor.id not in (sale.buyer_id, sale.seller_id) and not actor.is_admin:
            raise NotOwnerError("You cannot view this transaction")
        return sale
