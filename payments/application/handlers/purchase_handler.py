"""
PurchaseProductHandler.

Handler for buying a product. Payment is settled afterwards by a
background task.
"""
import logging

from accounts.domain.services import EligibilityGuard
from core.domain.exceptions import (
    ConflictError,
    ExpiredError,
    ForbiddenError,
    InvalidInputError,
    ProductNotFoundError,
)
from core.infrastructure.events import event_bus
from core.metrics import purchases_total
from payments.application.commands.purchase_product import PurchaseProductCommand
from payments.domain.events import ProductPurchased
from payments.domain.settlement import SettlementConfig
from payments.domain.transaction import PurchaseDetails, Transaction
from payments.ports.transaction_repository import TransactionRepository
from products.ports.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class PurchaseProductHandler:
    """Handler for PurchaseProductCommand."""

    def __init__(
        self,
        transaction_repository: TransactionRepository,
        product_repository: ProductRepository,
        guard: EligibilityGuard,
        settlement_config: SettlementConfig,
    ):
        """Initialize handler with repositories, guard and settlement config."""
        self.transaction_repository = transaction_repository
        self.product_repository = product_repository
        self.guard = guard
        self.settlement_config = settlement_config

    async def handle(self, command: PurchaseProductCommand) -> Transaction:
        """
        Handle purchase command.

        The buyer is checked before the product row is locked.

        Args:
            command: PurchaseProductCommand

        Returns:
            Pending Transaction carrying the computed revenue split

        Raises:
            InvalidInputError: If quantity is not positive
            AccountNotFoundError: If the buyer does not exist
            AccountInactiveError: If the buyer is suspended or banned
            ProductNotFoundError: If the product does not exist
            ForbiddenError: If the buyer created the product
            ProductUnavailableError: If the product is not active
            InsufficientInventoryError: If sold out or short on stock
            LicenseExpiredError: If the product's license lapsed
        """
        if isinstance(command.quantity, bool) or not isinstance(command.quantity, int) or command.quantity < 1:
            raise InvalidInputError("Quantity must be a positive integer")

        buyer = await self.guard.require_active(command.buyer_id)
        product = await self.product_repository.find_by_id(command.product_id)
        if not product:
            raise ProductNotFoundError(f"Product {command.product_id} not found")
        if product.is_owned_by(buyer.id):
            raise ForbiddenError("Cannot purchase your own product", code="OWN_PRODUCT")

        try:
            sale = await self.transaction_repository.purchase(
                product_id=product.id,
                buyer_id=buyer.id,
                quantity=command.quantity,
                payment_method=command.payment_method,
                purchase_details=PurchaseDetails(
                    shipping_address=dict(command.shipping_address or {}),
                    notes=command.notes or "",
                ),
                config=self.settlement_config,
            )
        except (ConflictError, ExpiredError) as exc:
            purchases_total.labels(outcome=exc.code.lower()).inc()
            raise

        purchases_total.labels(outcome="accepted").inc()
        logger.info(
            "Product purchased",
            extra={
                "transaction_id": str(sale.id),
                "product_id": str(product.id),
                "amount": str(sale.amount),
            },
        )

        await event_bus.publish(
            ProductPurchased(
                transaction_id=sale.id,
                product_id=product.id,
                buyer_id=buyer.id,
                seller_id=sale.seller_id,
                quantity=sale.quantity,
                amount=sale.amount,
            )
        )
        return sale
