"""
Settlement configuration and revenue calculation.

Amounts are exact decimals quantized to the cent with half-up rounding.
The licensee's share is the remainder of the net amount after the
asset owner's share, so the two shares always add up to the net.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Mapping, Optional

from core.domain.value_objects import Percentage, to_money

DEFAULT_PLATFORM_FEE_PERCENT = Decimal("5.00")
DEFAULT_CURRENCY = "usd"


@dataclass(frozen=True)
class SettlementConfig:
    """Injected platform-fee/currency configuration of the purchase engine."""

    platform_fee_percent: Decimal = DEFAULT_PLATFORM_FEE_PERCENT
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        """Validate and normalize config values."""
        percent = Percentage(Decimal(str(self.platform_fee_percent))).value
        object.__setattr__(self, "platform_fee_percent", percent)
        if not self.currency or len(self.currency) != 3:
            raise ValueError(f"Currency must be a 3-letter code, got {self.currency!r}")
        object.__setattr__(self, "currency", self.currency.lower())

    @classmethod
    def from_settings(cls, marketplace: Optional[Mapping[str, Any]] = None) -> "SettlementConfig":
        """
        Build the config from the MARKETPLACE settings dict.

        Args:
            marketplace: Settings mapping; defaults to settings.MARKETPLACE
        """
        if marketplace is None:
            from django.conf import settings

            marketplace = getattr(settings, "MARKETPLACE", {})
        return cls(
            platform_fee_percent=Decimal(
                str(marketplace.get("PLATFORM_FEE_PERCENT", DEFAULT_PLATFORM_FEE_PERCENT))
            ),
            currency=marketplace.get("CURRENCY", DEFAULT_CURRENCY),
        )


@dataclass(frozen=True)
class Settlement:
    """Computed money split of one sale."""

    amount: Decimal
    platform_fee: Decimal
    net_amount: Decimal
    ip_creator_share: Decimal
    secondary_creator_share: Decimal

    @property
    def is_reconciled(self) -> bool:
        return self.ip_creator_share + self.secondary_creator_share == self.amount - self.platform_fee


class RevenueCalculator:
    """Splits a sale between platform, asset owner and licensee."""

    def __init__(self, config: SettlementConfig):
        self.config = config

    def calculate(self, price: Decimal, quantity: int, revenue_share_percent: Decimal) -> Settlement:
        """
        Compute the settlement of ``quantity`` units at ``price``.

        Args:
            price: Unit price
            quantity: Units sold, at least one
            revenue_share_percent: Asset owner's share of the net amount

        Returns:
            Settlement

        Raises:
            ValueError: If quantity is not positive
        """
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValueError("Quantity must be a positive integer")
        amount = to_money(to_money(price) * quantity)
        platform_fee = Percentage(self.config.platform_fee_percent).of(amount)
        net_amount = amount - platform_fee
        ip_creator_share = Percentage(Decimal(str(revenue_share_percent))).of(net_amount)
        return Settlement(
            amount=amount,
            platform_fee=platform_fee,
            net_amount=net_amount,
            ip_creator_share=ip_creator_share,
            secondary_creator_share=net_amount - ip_creator_share,
        )
