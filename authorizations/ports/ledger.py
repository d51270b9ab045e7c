"""
Ledger port (interface).

The ledger collaborator produces an opaque integrity hash for recorded
events and can later confirm an authorization chain's record.
"""
import uuid
from abc import ABC, abstractmethod


class LedgerError(Exception):
    """Raised when the ledger cannot record an entry."""


class Ledger(ABC):
    """Abstract ledger collaborator."""

    @abstractmethod
    async def record_asset_registration(self, asset_id: uuid.UUID, owner_id: uuid.UUID) -> str:
        """
        Record an asset registration.

        Returns:
            Hash identifying the entry

        Raises:
            LedgerError: If the entry cannot be recorded
        """
        pass

    @abstractmethod
    async def record_product_issuance(self, product_id: uuid.UUID, license_id: uuid.UUID) -> str:
        """
        Record that a product was issued under a license.

        Returns:
            Hash identifying the entry

        Raises:
            LedgerError: If the entry cannot be recorded
        """
        pass

    @abstractmethod
    async def verify_ledger_entry(self, chain_id: uuid.UUID) -> bool:
        """
        Confirm the ledger entry behind an authorization chain.

        Returns:
            True if the entry exists, is intact and matches the chain
        """
        pass
