"""
Integration tests for products, purchases and settlement.
"""
from decimal import Decimal

import asyncio

import pytest
from asgiref.sync import async_to_sync

from authorizations.infrastructure.models import AuthorizationChain as AuthorizationChainModel
from core.domain.exceptions import (
    ForbiddenError,
    InsufficientInventoryError,
    InvalidInputError,
    InvalidStatusTransitionError,
    LicenseExpiredError,
    LicenseNotValidError,
    NotOwnerError,
    ProductHasSalesError,
    ProductUnavailableError,
    RoleNotPermittedError,
)
from core.domain.value_objects import ProductStatus, TransactionStatus
from payments.application.commands.purchase_product import (
    PurchaseProductCommand,
    RefundTransactionCommand,
)
from payments.infrastructure.models import Transaction as TransactionModel
from products.application.commands.create_product import CreateProductCommand
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from payments.application.handlers.payment_handlers import RefundTransactionHandler
from payments.infrastructure.gateways import SimulatedPaymentGateway
from products.application.commands.update_product import DeleteProductCommand, UpdateProductCommand
from products.infrastructure.models import Product as ProductModel

pytestmark = [pytest.mark.django_db, pytest.mark.integration]


def _purchase(handler, buyer, product, quantity=1, payment_method="card"):
    return async_to_sync(handler.handle)(
        PurchaseProductCommand(
            product_id=product.id,
            buyer_id=buyer.id,
            quantity=quantity,
            payment_method=payment_method,
            shipping_address={"city": "Lisbon"},
        )
    )


class TestCreateProduct:
    """Creating products under a license."""

    def test_create_issues_authorization_chain(self, create_product_handler, approved_license, licensee):
        product = async_to_sync(create_product_handler.handle)(
            CreateProductCommand(
                creator_id=licensee.id,
                license_id=approved_license.id,
                title="Harbour Print",
                price=Decimal("25.00"),
                inventory_count=10,
            )
        )

        assert product.status == ProductStatus.DRAFT
        chain = AuthorizationChainModel.objects.get(product_id=product.id)
        assert chain.is_active is True
        assert chain.license_id == approved_license.id
        assert chain.ip_asset_id == approved_license.ip_asset_id
        assert chain.ledger_hash
        assert len(chain.verification_code) == 32

    def test_license_must_be_approved(self, create_product_handler, make_license, licensee):
        pending = make_license(licensee, status="pending")

        with pytest.raises(LicenseNotValidError):
            async_to_sync(create_product_handler.handle)(
                CreateProductCommand(
                    creator_id=licensee.id, license_id=pending.id, title="Print", price=Decimal("5")
                )
            )

    def test_expired_license(self, create_product_handler, make_license, licensee, expired_at):
        expired = make_license(licensee, expires_at=expired_at)

        with pytest.raises(LicenseExpiredError):
            async_to_sync(create_product_handler.handle)(
                CreateProductCommand(
                    creator_id=licensee.id, license_id=expired.id, title="Print", price=Decimal("5")
                )
            )

    def test_only_license_holder(self, create_product_handler, approved_license, other_licensee):
        with pytest.raises(NotOwnerError):
            async_to_sync(create_product_handler.handle)(
                CreateProductCommand(
                    creator_id=other_licensee.id,
                    license_id=approved_license.id,
                    title="Print",
                    price=Decimal("5"),
                )
            )

    def test_buyer_cannot_create(self, create_product_handler, approved_license, buyer):
        with pytest.raises(RoleNotPermittedError):
            async_to_sync(create_product_handler.handle)(
                CreateProductCommand(
                    creator_id=buyer.id, license_id=approved_license.id, title="Print", price=Decimal("5")
                )
            )

    def test_non_positive_price(self, create_product_handler, approved_license, licensee):
        with pytest.raises(InvalidInputError):
            async_to_sync(create_product_handler.handle)(
                CreateProductCommand(
                    creator_id=licensee.id, license_id=approved_license.id, title="Print", price=Decimal("0")
                )
            )


class TestPurchase:
    """Buying products and settling payments."""

    def test_purchase_splits_revenue_and_settles(self, purchase_handler, make_product, buyer, creator, licensee):
        product = make_product(inventory_count=5, price=Decimal("10.00"))

        sale = _purchase(purchase_handler, buyer, product, quantity=3)

        assert sale.amount == Decimal("30.00")
        assert sale.platform_fee == Decimal("1.50")
        assert sale.revenue_shares.net_amount == Decimal("28.50")
        assert sale.revenue_shares.ip_creator_share == Decimal("5.70")
        assert sale.revenue_shares.secondary_creator_share == Decimal("22.80")
        assert sale.revenue_shares.ip_creator_id == creator.id
        assert sale.seller_id == licensee.id
        assert sale.is_reconciled is True

        stored = TransactionModel.objects.get(id=sale.id)
        assert stored.status == TransactionStatus.COMPLETED.value
        assert stored.payment_reference.startswith("sim_pi_")
        product.refresh_from_db()
        assert product.inventory_count == 2
        assert product.sales_count == 3

    def test_last_units_mark_sold_out(self, purchase_handler, make_product, buyer):
        product = make_product(inventory_count=2)

        _purchase(purchase_handler, buyer, product, quantity=2)

        product.refresh_from_db()
        assert product.inventory_count == 0
        assert product.status == ProductStatus.SOLD_OUT.value
        with pytest.raises(InsufficientInventoryError):
            _purchase(purchase_handler, buyer, product, quantity=1)

    def test_second_buyer_of_same_units_is_refused(self, purchase_handler, make_product, buyer, make_account):
        product = make_product(inventory_count=2)
        second_buyer = make_account("buyer")

        _purchase(purchase_handler, buyer, product, quantity=2)
        with pytest.raises(InsufficientInventoryError):
            _purchase(purchase_handler, second_buyer, product, quantity=2)

        product.refresh_from_db()
        assert product.inventory_count == 0
        assert TransactionModel.objects.filter(product=product).count() == 1

    def test_more_than_stock(self, purchase_handler, make_product, buyer):
        product = make_product(inventory_count=1)

        with pytest.raises(InsufficientInventoryError):
            _purchase(purchase_handler, buyer, product, quantity=2)

        product.refresh_from_db()
        assert product.inventory_count == 1

    def test_draft_product_unavailable(self, purchase_handler, make_product, buyer):
        with pytest.raises(ProductUnavailableError):
            _purchase(purchase_handler, buyer, make_product(status="draft"))

    def test_cannot_buy_own_product(self, purchase_handler, active_product, licensee):
        with pytest.raises(ForbiddenError):
            _purchase(purchase_handler, licensee, active_product)

    @pytest.mark.parametrize("quantity", [0, -2])
    def test_quantity_must_be_positive(self, purchase_handler, active_product, buyer, quantity):
        with pytest.raises(InvalidInputError):
            _purchase(purchase_handler, buyer, active_product, quantity=quantity)

    def test_expired_license_blocks_sale(self, purchase_handler, make_license, make_product, licensee, buyer, expired_at):
        product = make_product(license=make_license(licensee, expires_at=expired_at))

        with pytest.raises(LicenseExpiredError):
            _purchase(purchase_handler, buyer, product)

        product.refresh_from_db()
        assert product.inventory_count == 5

    def test_declined_payment_fails_and_keeps_inventory_taken(self, purchase_handler, make_product, buyer):
        product = make_product(inventory_count=3)

        sale = _purchase(purchase_handler, buyer, product, payment_method="sim_decline")

        stored = TransactionModel.objects.get(id=sale.id)
        assert stored.status == TransactionStatus.FAILED.value
        assert stored.failure_reason
        product.refresh_from_db()
        assert product.inventory_count == 2


class TestRefundAndDelete:
    """Refunds and product deletion."""

    def test_seller_refunds_completed_sale(self, purchase_handler, refund_handler, make_product, buyer, licensee):
        product = make_product(inventory_count=3)
        sale = _purchase(purchase_handler, buyer, product)

        refunded = async_to_sync(refund_handler.handle)(
            RefundTransactionCommand(transaction_id=sale.id, actor_id=licensee.id, reason="Damaged")
        )

        assert refunded.status == TransactionStatus.REFUNDED
        assert refunded.refund_reason == "Damaged"
        product.refresh_from_db()
        assert product.inventory_count == 2

    def test_buyer_cannot_refund(self, purchase_handler, refund_handler, active_product, buyer):
        sale = _purchase(purchase_handler, buyer, active_product)

        with pytest.raises(NotOwnerError):
            async_to_sync(refund_handler.handle)(
                RefundTransactionCommand(transaction_id=sale.id, actor_id=buyer.id, reason="Changed mind")
            )

    def test_failed_sale_cannot_be_refunded(self, purchase_handler, refund_handler, active_product, buyer, admin_account):
        sale = _purchase(purchase_handler, buyer, active_product, payment_method="sim_decline")

        with pytest.raises(InvalidStatusTransitionError):
            async_to_sync(refund_handler.handle)(
                RefundTransactionCommand(transaction_id=sale.id, actor_id=admin_account.id, reason="Oops")
            )

    def test_delete_blocked_by_completed_sale(self, purchase_handler, delete_product_handler, active_product, buyer, licensee):
        _purchase(purchase_handler, buyer, active_product)

        with pytest.raises(ProductHasSalesError):
            async_to_sync(delete_product_handler.handle)(
                DeleteProductCommand(product_id=active_product.id, actor_id=licensee.id)
            )

        assert ProductModel.objects.filter(id=active_product.id).exists()

    def test_delete_after_refund(self, purchase_handler, refund_handler, delete_product_handler, active_product, buyer, licensee):
        sale = _purchase(purchase_handler, buyer, active_product)
        async_to_sync(refund_handler.handle)(
            RefundTransactionCommand(transaction_id=sale.id, actor_id=licensee.id, reason="Damaged")
        )

        async_to_sync(delete_product_handler.handle)(
            DeleteProductCommand(product_id=active_product.id, actor_id=licensee.id)
        )

        assert not ProductModel.objects.filter(id=active_product.id).exists()
        assert TransactionModel.objects.get(id=sale.id).product_id is None


class CountingGateway(SimulatedPaymentGateway):
    """Sandbox gateway that records refund calls."""

    def __init__(self):
        self.refunds = 0

    async def refund(self, intent_ref, amount):
        self.refunds += 1
        await asyncio.sleep(0)
        return await super().refund(intent_ref, amount)


class TestConcurrentRefund:
    """Overlapping refunds of one sale."""

    def test_only_one_refund_reaches_gateway(self, purchase_handler, transaction_repository, guard, active_product, buyer, licensee):
        sale = _purchase(purchase_handler, buyer, active_product)
        gateway = CountingGateway()
        handler = RefundTransactionHandler(
            transaction_repository=transaction_repository, gateway=gateway, guard=guard
        )
        command = RefundTransactionCommand(transaction_id=sale.id, actor_id=licensee.id, reason="Damaged")

        async def refund_twice():
            return await asyncio.gather(
                handler.handle(command), handler.handle(command), return_exceptions=True
            )

        results = async_to_sync(refund_twice)()

        assert gateway.refunds == 1
        assert sum(1 for result in results if isinstance(result, InvalidStatusTransitionError)) == 1
        assert TransactionModel.objects.get(id=sale.id).status == "refunded"

    def test_refund_after_refund_is_rejected(self, purchase_handler, transaction_repository, guard, active_product, buyer, licensee):
        sale = _purchase(purchase_handler, buyer, active_product)
        gateway = CountingGateway()
        handler = RefundTransactionHandler(
            transaction_repository=transaction_repository, gateway=gateway, guard=guard
        )
        command = RefundTransactionCommand(transaction_id=sale.id, actor_id=licensee.id, reason="Damaged")
        async_to_sync(handler.handle)(command)

        with pytest.raises(InvalidStatusTransitionError):
            async_to_sync(handler.handle)(command)

        assert gateway.refunds == 1


class TestRestock:
    """Restocking sold-out products."""

    def test_restock_reactivates_sold_out_product(self, update_product_handler, make_product, licensee):
        product = make_product(status="sold_out", inventory_count=0)

        updated = async_to_sync(update_product_handler.handle)(
            UpdateProductCommand(product_id=product.id, actor_id=licensee.id, changes={"inventory_count": 5})
        )

        assert updated.status == ProductStatus.ACTIVE
        assert updated.inventory_count == 5

    def test_restock_under_revoked_license_is_refused(self, update_product_handler, revoke_handler, make_product, approved_license, licensee, creator):
        product = make_product(status="sold_out", inventory_count=0)
        async_to_sync(revoke_handler.handle)(
            RevokeLicenseCommand(application_id=approved_license.id, revoker_id=creator.id, reason="Breach")
        )

        with pytest.raises(LicenseNotValidError):
            async_to_sync(update_product_handler.handle)(
                UpdateProductCommand(product_id=product.id, actor_id=licensee.id, changes={"inventory_count": 5})
            )

        product.refresh_from_db()
        assert product.status == "sold_out"
        assert product.inventory_count == 0

    def test_restock_under_expired_license_is_refused(self, update_product_handler, make_license, make_product, licensee, expired_at):
        license = make_license(licensee, expires_at=expired_at)
        product = make_product(status="sold_out", inventory_count=0, license=license)

        with pytest.raises(LicenseExpiredError):
            async_to_sync(update_product_handler.handle)(
                UpdateProductCommand(product_id=product.id, actor_id=licensee.id, changes={"inventory_count": 5})
            )
