"""
Django implementation of TransactionRepository port.
"""
import logging
import uuid
from datetime import datetime
from typing import Callable, List, Optional

from asgiref.sync import sync_to_async
from django.db import transaction as db_transaction

from core.domain.exceptions import LicenseNotFoundError, TransactionNotFoundError
from core.domain.value_objects import TransactionStatus, TransactionType
from licenses.infrastructure.models import LicenseApplication as LicenseApplicationModel
from licenses.infrastructure.repositories.django_license_application_repository import (
    application_to_domain,
)
from payments.domain.settlement import RevenueCalculator, SettlementConfig
from payments.domain.transaction import PurchaseDetails, RevenueShares, Transaction
from payments.infrastructure.models import Transaction as TransactionModel
from payments.ports.transaction_repository import TransactionRepository
from products.infrastructure.repositories.django_product_repository import (
    apply_to_model,
    lock_product,
    product_to_domain,
)

logger = logging.getLogger(__name__)


def transaction_to_domain(model: TransactionModel) -> Transaction:
    """
    Convert Django model to domain entity.

    Args:
        model: Django Transaction model

    Returns:
        Transaction domain entity
    """
    return Transaction(
        id=model.id,
        transaction_type=TransactionType(model.transaction_type),
        buyer_id=model.buyer_id,
        seller_id=model.seller_id,
        product_id=model.product_id,
        quantity=model.quantity,
        amount=model.amount,
        platform_fee=model.platform_fee,
        revenue_shares=RevenueShares.from_dict(model.revenue_shares),
        purchase_details=PurchaseDetails.from_dict(model.purchase_details),
        payment_method=model.payment_method,
        status=TransactionStatus(model.status),
        created_at=model.created_at,
        updated_at=model.updated_at,
        payment_reference=model.payment_reference,
        failure_reason=model.failure_reason,
        processed_at=model.processed_at,
        refunded_at=model.refunded_at,
        refund_reason=model.refund_reason,
    )


class DjangoTransactionRepository(TransactionRepository):
    """Django ORM implementation of TransactionRepository."""

    @sync_to_async
    def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        try:
            return transaction_to_domain(TransactionModel.objects.get(id=transaction_id))
        except TransactionModel.DoesNotExist:
            return None

    @sync_to_async
    def purchase(
        self,
        product_id: uuid.UUID,
        buyer_id: uuid.UUID,
        quantity: int,
        payment_method: str,
        purchase_details: PurchaseDetails,
        config: SettlementConfig,
    ) -> Transaction:
        """
        Sell under the product row lock.

        Purchases of one product serialize here; different products
        never wait on each other.
        """
        with db_transaction.atomic():
            product_model = lock_product(product_id)
            product = product_to_domain(product_model)
            sold = product.sell(quantity)

            try:
                license_model = LicenseApplicationModel.objects.select_related(
                    "license_terms", "ip_asset"
                ).get(id=product.license_id)
            except LicenseApplicationModel.DoesNotExist as exc:
                raise LicenseNotFoundError(f"License {product.license_id} not found") from exc
            application_to_domain(license_model).ensure_valid()

            share_percent = license_model.license_terms.revenue_share_percent
            settlement = RevenueCalculator(config).calculate(product.price, quantity, share_percent)
            sale = Transaction.create_sale(
                buyer_id=buyer_id,
                seller_id=product.creator_id,
                product_id=product.id,
                quantity=quantity,
                amount=settlement.amount,
                platform_fee=settlement.platform_fee,
                revenue_shares=RevenueShares(
                    net_amount=settlement.net_amount,
                    ip_creator_share=settlement.ip_creator_share,
                    secondary_creator_share=settlement.secondary_creator_share,
                    ip_creator_id=license_model.ip_asset.creator_id,
                    secondary_creator_id=product.creator_id,
                    revenue_share_percent=share_percent,
                    platform_fee_percent=config.platform_fee_percent,
                ),
                purchase_details=purchase_details,
                payment_method=payment_method,
            )

            model = TransactionModel.objects.create(
                id=sale.id,
                transaction_type=sale.transaction_type.value,
                buyer_id=sale.buyer_id,
                seller_id=sale.seller_id,
                product_id=sale.product_id,
                quantity=sale.quantity,
                amount=sale.amount,
                platform_fee=sale.platform_fee,
                revenue_shares=sale.revenue_shares.to_dict(),
                purchase_details=sale.purchase_details.to_dict(),
                payment_method=sale.payment_method,
                status=sale.status.value,
            )

            apply_to_model(sold, product_model)
            product_model.save(update_fields=["inventory_count", "sales_count", "status", "updated_at"])

        logger.info(
            "Purchase recorded",
            extra={
                "transaction_id": str(model.id),
                "product_id": str(product_id),
                "quantity": quantity,
                "inventory_left": sold.inventory_count,
            },
        )
        return transaction_to_domain(model)

    @sync_to_async
    def transition(
        self, transaction_id: uuid.UUID, change: Callable[[Transaction], Transaction]
    ) -> Transaction:
        with db_transaction.atomic():
            try:
                model = TransactionModel.objects.select_for_update().get(id=transaction_id)
            except TransactionModel.DoesNotExist as exc:
                raise TransactionNotFoundError(f"Transaction {transaction_id} not found") from exc

            changed = change(transaction_to_domain(model))
            model.status = changed.status.value
            model.payment_reference = changed.payment_reference
            model.failure_reason = changed.failure_reason
            model.processed_at = changed.processed_at
            model.refunded_at = changed.refunded_at
            model.refund_reason = changed.refund_reason
            model.save()
            return transaction_to_domain(model)

    @sync_to_async
    def pending_ids(self, created_before: datetime) -> List[uuid.UUID]:
        return list(
            TransactionModel.objects.filter(status="pending", created_at__lt=created_before)
            .order_by("created_at")
            .values_list("id", flat=True)
        )
