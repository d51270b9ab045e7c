"""
ApplyLicenseHandler.

Handler for submitting a license application.
"""
import logging

from accounts.domain.services import EligibilityGuard
from assets.ports.asset_repository import IPAssetRepository
from assets.ports.license_terms_repository import LicenseTermsRepository
from core.domain.exceptions import (
    DuplicateApplicationError,
    InvalidInputError,
    IPAssetNotFoundError,
    LicenseTermsNotFoundError,
)
from core.domain.value_objects import ApplicationStatus
from core.infrastructure.events import event_bus
from core.metrics import license_applications_total
from licenses.application.commands.apply_license import ApplyLicenseCommand
from licenses.domain.events import LicenseApplied, LicenseApproved
from licenses.domain.license_application import ApplicationData, LicenseApplication
from licenses.domain.services import ApplicationEligibility
from licenses.ports.license_application_repository import LicenseApplicationRepository

logger = logging.getLogger(__name__)


class ApplyLicenseHandler:
    """Handler for ApplyLicenseCommand."""

    def __init__(
        self,
        application_repository: LicenseApplicationRepository,
        asset_repository: IPAssetRepository,
        terms_repository: LicenseTermsRepository,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repositories and guard."""
        self.application_repository = application_repository
        self.asset_repository = asset_repository
        self.terms_repository = terms_repository
        self.guard = guard

    async def handle(self, command: ApplyLicenseCommand) -> LicenseApplication:
        """
        Handle apply license command.

        With auto-approving terms the returned application is already
        approved; no pending state is ever stored.

        Args:
            command: ApplyLicenseCommand

        Returns:
            Created LicenseApplication

        Raises:
            AccountNotFoundError: If the applicant does not exist
            ForbiddenError: If the applicant is inactive, has the wrong role
                or owns the asset
            IPAssetNotFoundError: If the asset does not exist
            LicenseTermsNotFoundError: If the terms do not exist for the asset
            AssetNotApprovedError: If the asset is not approved
            TermsInactiveError: If the terms are deactivated
            DuplicateApplicationError: If an open application exists
            LicenseCapacityReachedError: If auto-approval finds no capacity
        """
        applicant = await self.guard.require_active(command.applicant_id)

        asset = await self.asset_repository.find_by_id(command.ip_asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {command.ip_asset_id} not found")
        terms = await self.terms_repository.find_by_id(command.license_terms_id)
        if not terms:
            raise LicenseTermsNotFoundError(
                f"License terms {command.license_terms_id} not found"
            )

        ApplicationEligibility.check(applicant, asset, terms)

        existing = await self.application_repository.find_open(asset.id, applicant.id)
        if existing:
            raise DuplicateApplicationError(
                f"You already have a {existing.status.value} application for this IP asset"
            )

        try:
            application = LicenseApplication.create(
                ip_asset_id=asset.id,
                applicant_id=applicant.id,
                license_terms_id=terms.id,
                application_data=ApplicationData.from_dict(command.application_data),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(str(exc)) from exc

        # The owner is recorded as approver of auto-approved applications
        auto_approver_id = asset.creator_id if terms.auto_approve else None
        saved = await self.application_repository.create(
            application, auto_approver_id=auto_approver_id
        )

        auto_approved = saved.status == ApplicationStatus.APPROVED
        license_applications_total.labels(
            outcome="auto_approved" if auto_approved else "pending"
        ).inc()
        logger.info(
            "License application submitted",
            extra={
                "application_id": str(saved.id),
                "asset_id": str(asset.id),
                "auto_approved": auto_approved,
            },
        )

        await event_bus.publish(
            LicenseApplied(
                application_id=saved.id,
                ip_asset_id=asset.id,
                applicant_id=applicant.id,
                asset_owner_id=asset.creator_id,
                license_terms_id=terms.id,
                auto_approved=auto_approved,
            )
        )
        if auto_approved:
            await event_bus.publish(
                LicenseApproved(
                    application_id=saved.id,
                    ip_asset_id=asset.id,
                    applicant_id=applicant.id,
                    approved_by=saved.approved_by,
                    expires_at=saved.expires_at,
                    auto_approved=True,
                )
            )
        return saved
