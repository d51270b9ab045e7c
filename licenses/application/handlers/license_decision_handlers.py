"""
License decision handlers.

Handlers for approve, reject and revoke. Each resolves the asset
owner first; the state change itself is an atomic repository call.
"""
import logging
import uuid
from typing import Tuple

from accounts.domain.account import Account
from accounts.domain.services import EligibilityGuard
from assets.domain.ip_asset import IPAsset
from assets.ports.asset_repository import IPAssetRepository
from core.domain.exceptions import (
    InvalidInputError,
    IPAssetNotFoundError,
    LicenseNotFoundError,
    NotOwnerError,
)
from core.infrastructure.events import event_bus
from core.metrics import license_decisions_total
from licenses.application.commands.decide_application import (
    ApproveApplicationCommand,
    RejectApplicationCommand,
)
from licenses.application.commands.revoke_license import RevokeLicenseCommand
from licenses.domain.events import LicenseApproved, LicenseRejected, LicenseRevoked
from licenses.domain.license_application import LicenseApplication
from licenses.domain.services import can_decide
from licenses.ports.license_application_repository import LicenseApplicationRepository

logger = logging.getLogger(__name__)


class _DecisionHandler:
    """Shared lookup and authorization for owner/admin decisions."""

    def __init__(
        self,
        application_repository: LicenseApplicationRepository,
        asset_repository: IPAssetRepository,
        guard: EligibilityGuard,
    ):
        """Initialize handler with repositories and guard."""
        self.application_repository = application_repository
        self.asset_repository = asset_repository
        self.guard = guard

    async def _authorize(
        self, application_id: uuid.UUID, actor_id: uuid.UUID
    ) -> Tuple[Account, LicenseApplication, IPAsset]:
        actor = await self.guard.require_active(actor_id)

        application = await self.application_repository.find_by_id(application_id)
        if not application:
            raise LicenseNotFoundError(f"License application {application_id} not found")
        asset = await self.asset_repository.find_by_id(application.ip_asset_id)
        if not asset:
            raise IPAssetNotFoundError(f"IP asset {application.ip_asset_id} not found")

        if not can_decide(actor, asset.creator_id):
            raise NotOwnerError("Only the asset owner or an admin may decide on this application")
        return actor, application, asset


class ApproveApplicationHandler(_DecisionHandler):
    """Handler for ApproveApplicationCommand."""

    async def handle(self, command: ApproveApplicationCommand) -> LicenseApplication:
        """
        Handle approve command.

        Raises:
            LicenseNotFoundError: If the application does not exist
            NotOwnerError: If the approver is neither owner nor admin
            InvalidStatusTransitionError: If the application is not pending
            AssetNotApprovedError: If the asset is not approved
            LicenseCapacityReachedError: If the terms are at capacity
        """
        actor, application, _ = await self._authorize(
            command.application_id, command.approver_id
        )

        approved = await self.application_repository.approve(application.id, actor.id)
        license_decisions_total.labels(decision="approved").inc()
        logger.info(
            "License application approved",
            extra={"application_id": str(approved.id), "approved_by": str(actor.id)},
        )

        await event_bus.publish(
            LicenseApproved(
                application_id=approved.id,
                ip_asset_id=approved.ip_asset_id,
                applicant_id=approved.applicant_id,
                approved_by=actor.id,
                expires_at=approved.expires_at,
            )
        )
        return approved


class RejectApplicationHandler(_DecisionHandler):
    """Handler for RejectApplicationCommand."""

    async def handle(self, command: RejectApplicationCommand) -> LicenseApplication:
        """
        Handle reject command.

        Raises:
            InvalidInputError: If the reason is blank
            LicenseNotFoundError: If the application does not exist
            NotOwnerError: If the rejecter is neither owner nor admin
            InvalidStatusTransitionError: If the application is not pending
        """
        if not command.reason or not command.reason.strip():
            raise InvalidInputError("A rejection reason is required")
        actor, application, _ = await self._authorize(
            command.application_id, command.rejecter_id
        )

        try:
            rejected = await self.application_repository.reject(
                application.id, actor.id, command.reason
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        license_decisions_total.labels(decision="rejected").inc()
        logger.info("License application rejected", extra={"application_id": str(rejected.id)})

        await event_bus.publish(
            LicenseRejected(
                application_id=rejected.id,
                applicant_id=rejected.applicant_id,
                rejected_by=actor.id,
                reason=rejected.rejection_reason,
            )
        )
        return rejected


class RevokeLicenseHandler(_DecisionHandler):
    """Handler for RevokeLicenseCommand."""

    async def handle(self, command: RevokeLicenseCommand) -> LicenseApplication:
        """
        Handle revoke command.

        Authorization chains are not touched; their verification
        observes the revoked status live.

        Raises:
            InvalidInputError: If the reason is blank
            LicenseNotFoundError: If the application does not exist
            NotOwnerError: If the revoker is neither owner nor admin
            InvalidStatusTransitionError: If the license is not approved
            ActiveProductsExistError: If active or draft products use it
        """
        if not command.reason or not command.reason.strip():
            raise InvalidInputError("A revocation reason is required")
        actor, application, _ = await self._authorize(
            command.application_id, command.revoker_id
        )

        try:
            revoked = await self.application_repository.revoke(
                application.id, actor.id, command.reason
            )
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc

        license_decisions_total.labels(decision="revoked").inc()
        logger.info(
            "License revoked",
            extra={"application_id": str(revoked.id), "revoked_by": str(actor.id)},
        )

        await event_bus.publish(
            LicenseRevoked(
                application_id=revoked.id,
                applicant_id=revoked.applicant_id,
                revoked_by=actor.id,
                reason=revoked.revocation_reason,
            )
        )
        return revoked
