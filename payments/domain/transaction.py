"""
Transaction domain entity.

    pending -> completed -> refunded
    pending -> failed
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, Optional

from core.domain.exceptions import InvalidStatusTransitionError
from core.domain.value_objects import TransactionStatus, TransactionType, to_money

REVENUE_SHARES_VERSION = 1
PURCHASE_DETAILS_VERSION = 1


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _uuid_or_none(value: Any) -> Optional[uuid.UUID]:
    if value in (None, ""):
        return None
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


@dataclass(frozen=True)
class RevenueShares:
    """Split of a sale's net amount, stored with the transaction."""

    net_amount: Decimal
    ip_creator_share: Decimal
    secondary_creator_share: Decimal
    ip_creator_id: Optional[uuid.UUID]
    secondary_creator_id: Optional[uuid.UUID]
    revenue_share_percent: Decimal
    platform_fee_percent: Decimal
    extra: Dict[str, Any] = field(default_factory=dict)
    version: int = REVENUE_SHARES_VERSION

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "RevenueShares":
        data = dict(data or {})
        known = (
            "net_amount",
            "ip_creator_share",
            "secondary_creator_share",
            "ip_creator_id",
            "secondary_creator_id",
            "revenue_share_percent",
            "platform_fee_percent",
            "version",
            "extra",
        )
        extra = dict(data.get("extra") or {})
        extra.update({key: value for key, value in data.items() if key not in known})
        return cls(
            net_amount=to_money(data.get("net_amount", "0")),
            ip_creator_share=to_money(data.get("ip_creator_share", "0")),
            secondary_creator_share=to_money(data.get("secondary_creator_share", "0")),
            ip_creator_id=_uuid_or_none(data.get("ip_creator_id")),
            secondary_creator_id=_uuid_or_none(data.get("secondary_creator_id")),
            revenue_share_percent=Decimal(str(data.get("revenue_share_percent", "0"))),
            platform_fee_percent=Decimal(str(data.get("platform_fee_percent", "0"))),
            extra=extra,
            version=data.get("version", REVENUE_SHARES_VERSION),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Money as strings so JSON storage never sees a float."""
        return {
            "version": self.version,
            "net_amount": str(self.net_amount),
            "ip_creator_share": str(self.ip_creator_share),
            "secondary_creator_share": str(self.secondary_creator_share),
            "ip_creator_id": str(self.ip_creator_id) if self.ip_creator_id else None,
            "secondary_creator_id": str(self.secondary_creator_id) if self.secondary_creator_id else None,
            "revenue_share_percent": str(self.revenue_share_percent),
            "platform_fee_percent": str(self.platform_fee_percent),
            "extra": dict(self.extra),
        }


@dataclass(frozen=True)
class PurchaseDetails:
    """Buyer-supplied purchase details."""

    shipping_address: Dict[str, Any] = field(default_factory=dict)
    notes: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)
    version: int = PURCHASE_DETAILS_VERSION

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "PurchaseDetails":
        data = dict(data or {})
        extra = dict(data.pop("extra", {}) or {})
        shipping = data.pop("shipping_address", {}) or {}
        notes = data.pop("notes", "") or ""
        version = data.pop("version", PURCHASE_DETAILS_VERSION)
        extra.update(data)
        return cls(shipping_address=dict(shipping), notes=notes, extra=extra, version=version)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "shipping_address": dict(self.shipping_address),
            "notes": self.notes,
            "extra": dict(self.extra),
        }


@dataclass(frozen=True)
class Transaction:
    """
    Transaction domain entity.

    Records one sale together with its computed revenue split.
    """

    id: uuid.UUID
    transaction_type: TransactionType
    buyer_id: uuid.UUID
    seller_id: uuid.UUID
    product_id: Optional[uuid.UUID]
    quantity: int
    amount: Decimal
    platform_fee: Decimal
    revenue_shares: RevenueShares
    purchase_details: PurchaseDetails
    payment_method: str
    status: TransactionStatus
    created_at: datetime
    updated_at: datetime
    payment_reference: str = ""
    failure_reason: str = ""
    processed_at: Optional[datetime] = None
    refunded_at: Optional[datetime] = None
    refund_reason: str = ""

    def __post_init__(self):
        """Validate transaction entity."""
        if self.quantity < 1:
            raise ValueError("Quantity must be at least 1")
        if self.amount < 0 or self.platform_fee < 0:
            raise ValueError("Amounts cannot be negative")

    @classmethod
    def create_sale(
        cls,
        buyer_id: uuid.UUID,
        seller_id: uuid.UUID,
        product_id: uuid.UUID,
        quantity: int,
        amount: Decimal,
        platform_fee: Decimal,
        revenue_shares: RevenueShares,
        purchase_details: PurchaseDetails,
        payment_method: str,
    ) -> "Transaction":
        """Create a pending product sale."""
        if not product_id:
            raise ValueError("Product sales require a product")
        now = _utcnow()
        return cls(
            id=uuid.uuid4(),
            transaction_type=TransactionType.PRODUCT_SALE,
            buyer_id=buyer_id,
            seller_id=seller_id,
            product_id=product_id,
            quantity=quantity,
            amount=to_money(amount),
            platform_fee=to_money(platform_fee),
            revenue_shares=revenue_shares,
            purchase_details=purchase_details,
            payment_method=payment_method,
            status=TransactionStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_reconciled(self) -> bool:
        shares = self.revenue_shares
        return (
            shares.ip_creator_share + shares.secondary_creator_share
            == self.amount - self.platform_fee
        )

    def _require_status(self, expected: TransactionStatus, action: str) -> None:
        if self.status != expected:
            raise InvalidStatusTransitionError(
                f"Cannot {action} transaction {self.id} in status {self.status.value}"
            )

    def with_payment_reference(self, reference: str) -> "Transaction":
        self._require_status(TransactionStatus.PENDING, "attach a payment to")
        return replace(self, payment_reference=reference, updated_at=_utcnow())

    def complete(self, payment_reference: str, now: Optional[datetime] = None) -> "Transaction":
        """
        Mark the payment as settled.

        Raises:
            InvalidStatusTransitionError: If not pending
        """
        self._require_status(TransactionStatus.PENDING, "complete")
        processed_at = now or _utcnow()
        return replace(
            self,
            status=TransactionStatus.COMPLETED,
            payment_reference=payment_reference,
            processed_at=processed_at,
            updated_at=processed_at,
        )

    def fail(self, reason: str, now: Optional[datetime] = None) -> "Transaction":
        """
        Mark the payment as failed.

        Raises:
            InvalidStatusTransitionError: If not pending
        """
        self._require_status(TransactionStatus.PENDING, "fail")
        return replace(
            self,
            status=TransactionStatus.FAILED,
            failure_reason=reason,
            updated_at=now or _utcnow(),
        )

    def refund(self, reason: str, now: Optional[datetime] = None) -> "Transaction":
        """
        Mark a completed transaction as refunded.

        Inventory is not restored.

        Raises:
            ValueError: If the reason is blank
            InvalidStatusTransitionError: If not completed
        """
        if not reason or not reason.strip():
            raise ValueError("A refund reason is required")
        self._require_status(TransactionStatus.COMPLETED, "refund")
        refunded_at = now or _utcnow()
        return replace(
            self,
            status=TransactionStatus.REFUNDED,
            refunded_at=refunded_at,
            refund_reason=reason.strip(),
            updated_at=refunded_at,
        )
