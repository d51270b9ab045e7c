"""
License application repository port (interface).

This defines the contract for license application persistence.
State-changing methods are atomic units: each checks its guard
conditions under a row lock in the same transaction that writes.
"""
import uuid
from abc import ABC, abstractmethod
from typing import List, Optional

from core.domain.value_objects import ApplicationStatus
from licenses.domain.license_application import LicenseApplication


class LicenseApplicationRepository(ABC):
    """Abstract repository for LicenseApplication entities."""

    @abstractmethod
    async def find_by_id(self, application_id: uuid.UUID) -> Optional[LicenseApplication]:
        """
        Find an application by ID.

        Args:
            application_id: LicenseApplication UUID

        Returns:
            LicenseApplication entity or None if not found
        """
        pass

    @abstractmethod
    async def find_open(
        self, ip_asset_id: uuid.UUID, applicant_id: uuid.UUID
    ) -> Optional[LicenseApplication]:
        """
        Find the pending or approved application of an applicant for an asset.

        Returns:
            LicenseApplication entity or None
        """
        pass

    @abstractmethod
    async def find_by_applicant(
        self, applicant_id: uuid.UUID, status: Optional[ApplicationStatus] = None
    ) -> List[LicenseApplication]:
        """Applications an account has made, newest first."""
        pass

    @abstractmethod
    async def find_by_asset_owner(
        self, owner_id: uuid.UUID, status: Optional[ApplicationStatus] = None
    ) -> List[LicenseApplication]:
        """Applications received on assets an account owns, newest first."""
        pass

    @abstractmethod
    async def count_approved(self, license_terms_id: uuid.UUID) -> int:
        """
        Count approved applications for license terms.

        Args:
            license_terms_id: LicenseTerms UUID

        Returns:
            Number of approved applications
        """
        pass

    @abstractmethod
    async def create(
        self,
        application: LicenseApplication,
        auto_approver_id: Optional[uuid.UUID] = None,
    ) -> LicenseApplication:
        """
        Insert a new application.

        Holds the terms row lock while checking for an open application
        by the same applicant. With ``auto_approver_id`` the application
        is stored approved, after the same capacity check ``approve`` runs.

        Raises:
            LicenseTermsNotFoundError: If the terms disappeared
            TermsInactiveError: If the terms were deactivated
            DuplicateApplicationError: If an open application exists
            LicenseCapacityReachedError: If auto-approval finds no capacity
        """
        pass

    @abstractmethod
    async def approve(
        self, application_id: uuid.UUID, approver_id: uuid.UUID
    ) -> LicenseApplication:
        """
        Approve a pending application.

        Locks the terms row, then the application row, re-reads the
        status, re-checks asset approval and re-counts approvals.

        Raises:
            LicenseNotFoundError: If the application does not exist
            InvalidStatusTransitionError: If no longer pending
            AssetNotApprovedError: If the asset is not approved
            LicenseCapacityReachedError: If the terms are at capacity
        """
        pass

    @abstractmethod
    async def reject(
        self, application_id: uuid.UUID, rejecter_id: uuid.UUID, reason: str
    ) -> LicenseApplication:
        """
        Reject a pending application.

        Raises:
            LicenseNotFoundError: If the application does not exist
            InvalidStatusTransitionError: If no longer pending
        """
        pass

    @abstractmethod
    async def revoke(
        self, application_id: uuid.UUID, revoker_id: uuid.UUID, reason: str
    ) -> LicenseApplication:
        """
        Revoke an approved license that backs no active or draft products.

        Raises:
            LicenseNotFoundError: If the application does not exist
            InvalidStatusTransitionError: If not approved
            ActiveProductsExistError: If live products reference the license
        """
        pass
