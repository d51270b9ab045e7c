"""
Payment gateway port (interface).
"""
from abc import ABC, abstractmethod
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Optional


class PaymentStatus(str, Enum):
    """Outcome of confirming a payment intent."""

    SUCCEEDED = "succeeded"
    PENDING = "pending"
    FAILED = "failed"

    def __str__(self) -> str:
        return self.value


class PaymentPendingError(Exception):
    """Raised when a confirmation has not settled yet and should be retried."""


class PaymentGateway(ABC):
    """Abstract payment gateway collaborator."""

    @abstractmethod
    async def create_intent(
        self, amount: Decimal, currency: str, metadata: Optional[Dict[str, Any]] = None
    ) -> str:
        """
        Create a payment intent.

        Returns:
            Intent reference

        Raises:
            PaymentGatewayError: If the gateway refuses the intent
        """
        pass

    @abstractmethod
    async def confirm(self, intent_ref: str) -> PaymentStatus:
        """
        Confirm a payment intent.

        Raises:
            PaymentGatewayError: If the gateway cannot be reached
        """
        pass

    @abstractmethod
    async def refund(self, intent_ref: str, amount: Decimal) -> str:
        """
        Refund a settled intent.

        Returns:
            Refund receipt reference

        Raises:
            PaymentGatewayError: If the refund is refused
        """
        pass
