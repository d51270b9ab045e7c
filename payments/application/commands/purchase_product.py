"""
Purchase and settlement commands.
"""
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict


@dataclass
class PurchaseProductCommand:
    """Command to buy units of a product."""

    product_id: uuid.UUID
    buyer_id: uuid.UUID
    quantity: int = 1
    payment_method: str = "card"
    shipping_address: Dict[str, Any] = field(default_factory=dict)
    notes: str = ""


@dataclass
class ProcessPaymentCommand:
    """Command to settle the payment of a pending transaction."""

    transaction_id: uuid.UUID


@dataclass
class RefundTransactionCommand:
    """Command to refund a completed transaction."""

    transaction_id: uuid.UUID
    actor_id: uuid.UUID
    reason: str
