"""
License workflow domain services.

Domain services contain business logic that doesn't naturally
fit within a single entity.
"""
import uuid

from accounts.domain.account import Account
from assets.domain.ip_asset import IPAsset
from assets.domain.license_terms import LicenseTerms
from core.domain.exceptions import (
    AssetNotApprovedError,
    ForbiddenError,
    LicenseCapacityReachedError,
    LicenseTermsNotFoundError,
    RoleNotPermittedError,
    TermsInactiveError,
)
from core.domain.value_objects import AccountRole

APPLICANT_ROLES = frozenset({AccountRole.CREATOR, AccountRole.SECONDARY_CREATOR})


class ApplicationEligibility:
    """Preconditions of ``apply``, checked in a fixed order."""

    @staticmethod
    def check(applicant: Account, asset: IPAsset, terms: LicenseTerms) -> None:
        """
        Check that an applicant may apply against the given terms.

        The applicant is assumed to be active already.

        Raises:
            RoleNotPermittedError: If the applicant cannot hold licenses
            AssetNotApprovedError: If the asset has not passed verification
            ForbiddenError: If the applicant owns the asset
            LicenseTermsNotFoundError: If the terms belong to another asset
            TermsInactiveError: If the terms are deactivated
        """
        if applicant.role not in APPLICANT_ROLES:
            raise RoleNotPermittedError("Only creators and secondary creators can apply for licenses")
        if not asset.is_approved:
            raise AssetNotApprovedError("IP asset is not approved for licensing")
        if asset.is_owned_by(applicant.id):
            raise ForbiddenError(
                "Cannot apply for a license on your own IP asset", code="OWN_ASSET"
            )
        if not terms.belongs_to(asset.id):
            raise LicenseTermsNotFoundError("License terms do not belong to this IP asset")
        if not terms.is_active:
            raise TermsInactiveError()


class LicenseCapacityPolicy:
    """Capacity rule of license terms. Callers hold the terms row lock."""

    @staticmethod
    def ensure_capacity(terms: LicenseTerms, approved_count: int) -> None:
        """
        Raise if one more approval would exceed max_licenses.

        Raises:
            LicenseCapacityReachedError: If the terms are at capacity
        """
        if not terms.has_capacity(approved_count):
            raise LicenseCapacityReachedError(
                f"License terms {terms.id} reached their limit of {terms.max_licenses} license(s)"
            )


def can_decide(actor: Account, asset_owner_id: uuid.UUID) -> bool:
    """Owners and admins may approve, reject and revoke."""
    return actor.id == asset_owner_id or actor.is_admin
