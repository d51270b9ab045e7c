"""
Transaction repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Callable, List, Optional

from payments.domain.settlement import SettlementConfig
from payments.domain.transaction import PurchaseDetails, Transaction


class TransactionRepository(ABC):
    """Abstract repository for Transaction entities."""

    @abstractmethod
    async def find_by_id(self, transaction_id: uuid.UUID) -> Optional[Transaction]:
        """
        Find a transaction by ID.

        Returns:
            Transaction entity or None if not found
        """
        pass

    @abstractmethod
    async def purchase(
        self,
        product_id: uuid.UUID,
        buyer_id: uuid.UUID,
        quantity: int,
        payment_method: str,
        purchase_details: PurchaseDetails,
        config: SettlementConfig,
    ) -> Transaction:
        """
        Sell ``quantity`` units of a product as one atomic unit.

        Under the product row lock: check status and inventory, re-check
        the license, compute the split, insert the pending transaction,
        decrement inventory and bump the sales count.

        Raises:
            ProductNotFoundError: If the product does not exist
            ProductUnavailableError: If the product is not active
            InsufficientInventoryError: If sold out or short on stock
            LicenseNotValidError: If the license is no longer approved
            LicenseExpiredError: If the license lapsed
        """
        pass

    @abstractmethod
    async def transition(
        self, transaction_id: uuid.UUID, change: Callable[[Transaction], Transaction]
    ) -> Transaction:
        """
        Apply a status change under the transaction row lock.

        ``change`` receives the freshly locked entity and returns the new
        state; domain errors it raises abort the unit.

        Raises:
            TransactionNotFoundError: If the transaction does not exist
        """
        pass

    @abstractmethod
    async def pending_ids(self, created_before: datetime) -> List[uuid.UUID]:
        """Pending transactions created before a cut-off, oldest first."""
        pass
