"""
License terms repository port (interface).
"""
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from assets.domain.license_terms import LicenseTerms


class LicenseTermsRepository(ABC):
    """Abstract repository for LicenseTerms entities."""

    @abstractmethod
    async def save(self, terms: LicenseTerms) -> LicenseTerms:
        """
        Save new license terms.

        Args:
            terms: LicenseTerms entity to save

        Returns:
            Saved LicenseTerms entity
        """
        pass

    @abstractmethod
    async def find_by_id(self, terms_id: uuid.UUID) -> Optional[LicenseTerms]:
        """
        Find license terms by ID.

        Args:
            terms_id: LicenseTerms UUID

        Returns:
            LicenseTerms entity or None if not found
        """
        pass

    @abstractmethod
    async def find_by_asset(
        self, asset_id: uuid.UUID, active_only: bool = False
    ) -> List[LicenseTerms]:
        """
        Find all terms published for an asset.

        Args:
            asset_id: IPAsset UUID
            active_only: Only return active terms

        Returns:
            List of LicenseTerms entities, newest first
        """
        pass

    @abstractmethod
    async def update_if_unlocked(
        self, terms_id: uuid.UUID, changes: Dict[str, Any]
    ) -> LicenseTerms:
        """
        Apply changes unless a pending application references the terms.

        The pending check and the write run in one atomic unit holding
        the terms row lock.

        Args:
            terms_id: LicenseTerms UUID
            changes: Field changes

        Returns:
            Updated LicenseTerms entity

        Raises:
            LicenseTermsNotFoundError: If the terms do not exist
            TermsLockedError: If pending applications exist
            ValueError: If a change is invalid
        """
        pass
