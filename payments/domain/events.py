"""
Purchase and settlement domain events.
"""
import uuid
from dataclasses import dataclass
from decimal import Decimal

from core.domain.events import DomainEvent


@dataclass(frozen=True, kw_only=True)
class ProductPurchased(DomainEvent):
    """Event raised when a purchase is committed; triggers payment."""

    transaction_id: uuid.UUID
    product_id: uuid.UUID
    buyer_id: uuid.UUID
    seller_id: uuid.UUID
    quantity: int
    amount: Decimal

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)


@dataclass(frozen=True, kw_only=True)
class PaymentCompleted(DomainEvent):
    """Event raised when a payment settles; the product counts as sold."""

    transaction_id: uuid.UUID
    product_id: uuid.UUID
    buyer_id: uuid.UUID
    seller_id: uuid.UUID
    amount: Decimal

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)


@dataclass(frozen=True, kw_only=True)
class PaymentFailed(DomainEvent):
    """Event raised when a payment cannot be settled."""

    transaction_id: uuid.UUID
    buyer_id: uuid.UUID
    reason: str

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)


@dataclass(frozen=True, kw_only=True)
class TransactionRefunded(DomainEvent):
    """Event raised when a completed transaction is refunded."""

    transaction_id: uuid.UUID
    buyer_id: uuid.UUID
    refunded_by: uuid.UUID
    reason: str
    refund_receipt: str

    @property
    def aggregate_id(self) -> str:
        return str(self.transaction_id)
