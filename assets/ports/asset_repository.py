"""
IP asset repository port (interface).

This defines the contract for IP asset persistence operations.
Implementations are in the infrastructure layer.
"""
import uuid
from abc import ABC, abstractmethod
from typing import Optional

from assets.domain.ip_asset import IPAsset


class IPAssetRepository(ABC):
    """Abstract repository for IPAsset entities."""

    @abstractmethod
    async def save(self, asset: IPAsset) -> IPAsset:
        """
        Save an IP asset entity.

        Args:
            asset: IPAsset entity to save

        Returns:
            Saved IPAsset entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, asset_id: uuid.UUID) -> Optional[IPAsset]:
        """
        Find an IP asset by ID.

        Args:
            asset_id: IPAsset UUID

        Returns:
            IPAsset entity or None if not found
        """
        pass

    @abstractmethod
    async def set_ledger_hash(self, asset_id: uuid.UUID, ledger_hash: str) -> bool:
        """
        Store the ledger hash of an asset if none is recorded yet.

        Args:
            asset_id: IPAsset UUID
            ledger_hash: Hash returned by the ledger collaborator

        Returns:
            True if the hash was stored, False if one was already present
        """
        pass
