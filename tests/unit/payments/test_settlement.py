"""
Unit tests for settlement, transactions and the sandbox gateway.
"""
import uuid
from decimal import Decimal

import pytest

from core.domain.exceptions import InvalidStatusTransitionError, PaymentGatewayError
from core.domain.value_objects import TransactionStatus
from payments.domain.settlement import RevenueCalculator, SettlementConfig
from payments.domain.transaction import PurchaseDetails, RevenueShares, Transaction
from payments.infrastructure.gateways import (
    DECLINE_METHOD,
    PENDING_METHOD,
    SimulatedPaymentGateway,
    get_payment_gateway,
)
from payments.ports.payment_gateway import PaymentStatus


@pytest.fixture
def calculator():
    return RevenueCalculator(SettlementConfig(platform_fee_percent=Decimal("5"), currency="usd"))


class TestRevenueCalculator:
    """Tests for RevenueCalculator."""

    def test_three_units_at_ten(self, calculator):
        settlement = calculator.calculate(Decimal("10.00"), 3, Decimal("20"))

        assert settlement.amount == Decimal("30.00")
        assert settlement.platform_fee == Decimal("1.50")
        assert settlement.net_amount == Decimal("28.50")
        assert settlement.ip_creator_share == Decimal("5.70")
        assert settlement.secondary_creator_share == Decimal("22.80")
        assert settlement.is_reconciled is True

    @pytest.mark.parametrize(
        "price, quantity, share",
        [
            (Decimal("0.01"), 1, Decimal("5")),
            (Decimal("19.99"), 7, Decimal("33.33")),
            (Decimal("3.33"), 3, Decimal("50")),
            (Decimal("1234.57"), 11, Decimal("12.5")),
        ],
    )
    def test_shares_always_reconcile(self, calculator, price, quantity, share):
        settlement = calculator.calculate(price, quantity, share)

        assert settlement.is_reconciled is True
        assert settlement.ip_creator_share + settlement.secondary_creator_share == settlement.net_amount

    @pytest.mark.parametrize("quantity", [0, -1, True])
    def test_quantity_must_be_positive(self, calculator, quantity):
        with pytest.raises(ValueError):
            calculator.calculate(Decimal("10.00"), quantity, Decimal("20"))


class TestSettlementConfig:
    """Tests for SettlementConfig."""

    def test_from_settings_mapping(self):
        config = SettlementConfig.from_settings({"PLATFORM_FEE_PERCENT": "7.5", "CURRENCY": "EUR"})

        assert config.platform_fee_percent == Decimal("7.5")
        assert config.currency == "eur"

    def test_invalid_currency(self):
        with pytest.raises(ValueError):
            SettlementConfig(currency="dollars")


def _sale(amount="30.00", fee="1.50"):
    shares = RevenueShares(
        net_amount=Decimal("28.50"),
        ip_creator_share=Decimal("5.70"),
        secondary_creator_share=Decimal("22.80"),
        ip_creator_id=uuid.uuid4(),
        secondary_creator_id=uuid.uuid4(),
        revenue_share_percent=Decimal("20"),
        platform_fee_percent=Decimal("5"),
    )
    return Transaction.create_sale(
        buyer_id=uuid.uuid4(),
        seller_id=uuid.uuid4(),
        product_id=uuid.uuid4(),
        quantity=3,
        amount=Decimal(amount),
        platform_fee=Decimal(fee),
        revenue_shares=shares,
        purchase_details=PurchaseDetails.from_dict({"notes": "gift", "gift_wrap": True}),
        payment_method="card",
    )


class TestTransaction:
    """Tests for Transaction transitions."""

    def test_create_sale_is_pending_and_reconciled(self):
        transaction = _sale()

        assert transaction.status == TransactionStatus.PENDING
        assert transaction.is_reconciled is True
        assert transaction.purchase_details.extra == {"gift_wrap": True}

    def test_complete_then_refund(self):
        completed = _sale().complete("sim_pi_s_abc")

        assert completed.status == TransactionStatus.COMPLETED
        assert completed.processed_at is not None

        refunded = completed.refund("Damaged in transit")

        assert refunded.status == TransactionStatus.REFUNDED
        assert refunded.refund_reason == "Damaged in transit"

    def test_refund_requires_completed(self):
        with pytest.raises(InvalidStatusTransitionError):
            _sale().refund("Changed my mind")

    def test_refund_requires_reason(self):
        with pytest.raises(ValueError):
            _sale().complete("sim_pi_s_abc").refund("")

    def test_failed_is_terminal(self):
        failed = _sale().fail("Card declined")

        assert failed.failure_reason == "Card declined"
        with pytest.raises(InvalidStatusTransitionError):
            failed.complete("sim_pi_s_abc")

    def test_revenue_shares_roundtrip_keeps_money_as_strings(self):
        data = _sale().revenue_shares.to_dict()

        assert data["ip_creator_share"] == "5.70"
        assert RevenueShares.from_dict(data).ip_creator_share == Decimal("5.70")


@pytest.mark.asyncio
class TestSimulatedPaymentGateway:
    """Tests for the sandbox gateway."""

    async def test_default_payment_succeeds(self):
        gateway = SimulatedPaymentGateway()

        intent = await gateway.create_intent(Decimal("30.00"), "usd", {"payment_method": "card"})

        assert await gateway.confirm(intent) == PaymentStatus.SUCCEEDED

    @pytest.mark.parametrize(
        "method, expected",
        [(DECLINE_METHOD, PaymentStatus.FAILED), (PENDING_METHOD, PaymentStatus.PENDING)],
    )
    async def test_steered_outcomes(self, method, expected):
        gateway = SimulatedPaymentGateway()

        intent = await gateway.create_intent(Decimal("30.00"), "usd", {"payment_method": method})

        assert await gateway.confirm(intent) == expected

    async def test_zero_amount(self):
        with pytest.raises(PaymentGatewayError):
            await SimulatedPaymentGateway().create_intent(Decimal("0"), "usd")

    async def test_refund_unknown_intent(self):
        with pytest.raises(PaymentGatewayError):
            await SimulatedPaymentGateway().refund("pi_foreign", Decimal("1.00"))

    async def test_refund_receipt(self):
        gateway = SimulatedPaymentGateway()
        intent = await gateway.create_intent(Decimal("5.00"), "usd")

        assert (await gateway.refund(intent, Decimal("5.00"))).startswith("sim_re_")

    def test_factory_uses_configured_path(self):
        assert isinstance(get_payment_gateway({}), SimulatedPaymentGateway)
